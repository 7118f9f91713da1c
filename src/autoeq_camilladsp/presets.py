"""
Crossfeed presets.

Each preset is a bundled YAML fragment in the CamillaDSP mixers/filters/pipeline
schema (data/presets/*.yml). Presets are data: nothing here computes filter
values, it only maps the closed set of Crossfeed choices to their bundle.
"""

import logging
from enum import Enum
from importlib import resources
from typing import Optional

import yaml

from .errors import PresetDataError
from .models import PresetBundle

logger = logging.getLogger(__name__)

PACKAGE = 'autoeq_camilladsp'


class Crossfeed(Enum):
    """Supported crossfeed choices: (slug, menu label, filename suffix, data file)"""
    NONE = ('none', 'None', None, None)
    POW_CHU_MOY = ('pow-chu-moy', 'Pow Chu Moy Crossfeed', 'PowChuMoy_Crossfeed', 'pow_chu_moy.yml')
    MPM = ('mpm', 'MPM Crossfeed', 'MPM_Crossfeed', 'mpm.yml')
    NATURAL = ('natural', 'Natural Crossfeed', 'Natural_Crossfeed', 'natural.yml')

    def __init__(self, slug: str, label: str, suffix: Optional[str], data_file: Optional[str]):
        self.slug = slug
        self.label = label
        self.suffix = suffix
        self.data_file = data_file

    @classmethod
    def from_slug(cls, slug: str) -> 'Crossfeed':
        for member in cls:
            if member.slug == slug.lower().strip():
                return member
        raise ValueError(f"Unknown crossfeed preset: {slug!r}")


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys instead of keeping the last"""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    f"found duplicate key {key!r}", key_node.start_mark)
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_data_text(*parts: str) -> str:
    """Read a text file bundled under autoeq_camilladsp/data/"""
    resource = resources.files(PACKAGE).joinpath('data')
    for part in parts:
        resource = resource.joinpath(part)
    return resource.read_text(encoding='utf-8')


def parse_preset(name: str, raw: str) -> PresetBundle:
    """Build a bundle from preset YAML; duplicate names are an error"""
    try:
        return PresetBundle.from_dict(name, yaml.load(raw, Loader=UniqueKeyLoader))
    except (yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        raise PresetDataError(f"Preset data for {name} is malformed: {e}") from e


def load_preset(crossfeed: Crossfeed) -> Optional[PresetBundle]:
    """Load the bundle for a crossfeed choice, or None for Crossfeed.NONE"""
    if crossfeed.data_file is None:
        return None

    try:
        raw = read_data_text('presets', crossfeed.data_file)
    except OSError as e:
        raise PresetDataError(f"Preset data for {crossfeed.label} is missing: {e}") from e

    bundle = parse_preset(crossfeed.slug, raw)
    logger.debug("Loaded preset %s: %d mixers, %d filters, %d steps",
                 crossfeed.slug, len(bundle.mixers), len(bundle.filters), len(bundle.pipeline))
    return bundle
