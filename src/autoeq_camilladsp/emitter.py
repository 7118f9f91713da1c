"""
Writes CamillaDSP configuration files.

A file is three fragments in one YAML document:
1. the bundled header comments
2. a devices section (bundled default or the user's own file)
3. the serialized mixers/filters/pipeline

Fragments may carry their own '---' markers; only one is written, at the top.
"""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from .errors import DocumentIOError
from .models import Configuration
from .presets import Crossfeed, read_data_text

logger = logging.getLogger(__name__)

DOCUMENT_START = '---'


@dataclass(frozen=True)
class DevicesFile:
    """Where the 'devices' section comes from; path None means the bundled default"""
    path: Optional[Path] = None

    @classmethod
    def default(cls) -> 'DevicesFile':
        return cls()

    @classmethod
    def custom(cls, path: Union[str, Path]) -> 'DevicesFile':
        return cls(Path(path))

    def read_text(self) -> str:
        if self.path is None:
            return read_data_text('default_devices.yml')
        try:
            return self.path.read_text(encoding='utf-8')
        except OSError as e:
            raise DocumentIOError(f"Could not read custom devices file {self.path}: {e}") from e


def config_filename(headphone_name: str, crossfeed: Crossfeed = Crossfeed.NONE) -> str:
    """e.g. 'sennheiser_hd_650-EQ.yml' or 'sennheiser_hd_650-EQ-MPM_Crossfeed.yml'"""
    stem = headphone_name.replace(' ', '_')
    if crossfeed.suffix is None:
        return f"{stem}-EQ.yml"
    return f"{stem}-EQ-{crossfeed.suffix}.yml"


def strip_document_markers(text: str) -> str:
    """Drop every line that is exactly a document start marker"""
    lines = [line for line in text.splitlines() if line != DOCUMENT_START]
    return '\n'.join(lines) + '\n' if lines else ''


def target_mode(destination: Path) -> int:
    """Mode of an existing destination, else 0666 minus the process umask"""
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def serialize_configuration(config: Configuration) -> str:
    return yaml.safe_dump(config.to_dict(), default_flow_style=False,
                          allow_unicode=True, sort_keys=False, explicit_start=True)


class DocumentEmitter:
    """Assembles and writes one configuration document"""

    @staticmethod
    def render(config: Configuration, header_text: str, devices_text: str) -> str:
        serialized = serialize_configuration(config)
        if serialized.startswith(DOCUMENT_START + '\n'):
            serialized = serialized[len(DOCUMENT_START) + 1:]

        return ''.join([
            DOCUMENT_START + '\n',
            strip_document_markers(header_text),
            strip_document_markers(devices_text),
            serialized,
        ])

    @staticmethod
    def emit(config: Configuration, header_text: str, devices_text: str,
             destination: Union[str, Path]) -> Path:
        """
        Write the document to destination.

        The content goes to a temporary file next to the destination and is
        renamed into place only once fully written, so a failed write never
        leaves a truncated config behind.
        """
        destination = Path(destination)
        document = DocumentEmitter.render(config, header_text, devices_text)

        tmp_path = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=destination.parent,
                                             prefix=f".{destination.name}.", suffix='.tmp',
                                             delete=False) as f:
                tmp_path = Path(f.name)
                f.write(document)
            # Temp files are created 0600; give the result normal file permissions
            os.chmod(tmp_path, target_mode(destination))
            os.replace(tmp_path, destination)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise DocumentIOError(f"Could not write configuration file {destination}: {e}") from e

        logger.debug("Wrote %d bytes to %s", len(document), destination)
        return destination


def write_config_file(config: Configuration, headphone_name: str,
                      devices: DevicesFile = DevicesFile(),
                      crossfeed: Crossfeed = Crossfeed.NONE,
                      output_dir: Union[str, Path] = '.') -> Path:
    """Write config with the bundled header; returns the written path"""
    # Devices are read first so a bad custom path fails before anything is written
    devices_text = devices.read_text()
    header_text = read_data_text('header.yml')
    destination = Path(output_dir) / config_filename(headphone_name, crossfeed)
    return DocumentEmitter.emit(config, header_text, devices_text, destination)
