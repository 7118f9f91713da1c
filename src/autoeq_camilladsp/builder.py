"""
Configuration assembly.

Merges an optional crossfeed preset with a headphone's correction filters:
preset mixers/filters/pipeline first, then one preamp gain filter and the EQ
bands applied identically to channels 0 and 1.
"""

import logging
from typing import Dict, Mapping, Optional, Union

from .errors import NameCollisionError, UnresolvedReferenceError
from .models import (
    BiquadFilter, Configuration, CorrectionFilterSet, Filter, FilterStep,
    GainFilter, GainParameters, Mixer, MixerStep, PresetBundle,
)
from .presets import Crossfeed, load_preset

logger = logging.getLogger(__name__)

PREAMP_FILTER_NAME = '01_Preamp_Gain'
EQ_BAND_NAME_TEMPLATE = 'Correction_Eq_Band_{}'
CORRECTION_CHANNELS = (0, 1)


def _merge(target: Dict, entries: Mapping, kind: str) -> None:
    for name, value in entries.items():
        if name in target:
            raise NameCollisionError(name, kind)
        target[name] = value


class ConfigurationBuilder:
    """Builds a Configuration from correction data and a crossfeed choice"""

    @staticmethod
    def build(correction: CorrectionFilterSet,
              preset: Union[Crossfeed, PresetBundle, None]) -> Configuration:
        """
        Assemble the configuration.

        preset is required: pass Crossfeed.NONE (or None) for no crossfeed.
        Raises NameCollisionError if a preset name clashes with a correction
        filter, UnresolvedReferenceError if a pipeline step names a missing
        filter or mixer.
        """
        bundle: Optional[PresetBundle]
        if isinstance(preset, Crossfeed):
            bundle = load_preset(preset)
        else:
            bundle = preset

        mixers: Dict[str, Mixer] = {}
        filters: Dict[str, Filter] = {}
        pipeline = []

        if bundle is not None:
            _merge(mixers, bundle.mixers, 'mixer')
            _merge(filters, bundle.filters, 'filter')
            pipeline.extend(bundle.pipeline)
            logger.debug("Merged preset %s", bundle.name)

        correction_filters: Dict[str, Filter] = {
            PREAMP_FILTER_NAME: GainFilter(GainParameters(gain=correction.gain)),
        }
        for i, band in enumerate(correction.eq_bands):
            correction_filters[EQ_BAND_NAME_TEMPLATE.format(i)] = BiquadFilter(band)
        _merge(filters, correction_filters, 'filter')

        # Insertion order above is preamp first, then bands in parse order
        names = tuple(correction_filters)
        for channel in CORRECTION_CHANNELS:
            pipeline.append(FilterStep(channel=channel, names=names))

        ConfigurationBuilder.check_references(mixers, filters, pipeline)

        return Configuration(
            mixers=mixers,
            filters={name: filters[name] for name in sorted(filters)},
            pipeline=tuple(pipeline),
        )

    @staticmethod
    def check_references(mixers: Mapping[str, Mixer], filters: Mapping[str, Filter],
                         pipeline) -> None:
        """Every name used by the pipeline must be defined"""
        for step in pipeline:
            if isinstance(step, MixerStep):
                if step.name not in mixers:
                    raise UnresolvedReferenceError(step.name, 'mixer')
            else:
                for name in step.names:
                    if name not in filters:
                        raise UnresolvedReferenceError(name, 'filter')
