"""
autoeq-camilladsp - Create CamillaDSP configurations from AutoEq corrections

Modules:
- eq_parser: ParametricEQ.txt to CorrectionFilterSet
- directory: headphone lookup in the AutoEq catalog
- presets: bundled crossfeed presets
- builder: merge presets and corrections into a Configuration
- emitter: write the CamillaDSP YAML file
- scraper: fetch AutoEq pages and correction data
"""

__version__ = "0.1.0"

from .models import (
    # Biquad bands
    Highpass,
    Lowpass,
    Peaking,
    PeakingBandwidth,
    HighshelfFO,
    LowshelfFO,
    HighpassFO,
    LowpassFO,
    # Configuration parts
    GainParameters,
    GainFilter,
    BiquadFilter,
    Mixer,
    MixerChannels,
    MixerMapping,
    MixerSource,
    MixerStep,
    FilterStep,
    Configuration,
    CorrectionFilterSet,
    PresetBundle,
)
from .errors import (
    AutoEqCamillaError,
    EqParseError,
    MalformedHeaderError,
    MalformedBandLineError,
    ConfigurationError,
    NameCollisionError,
    UnresolvedReferenceError,
    DirectoryNotFoundError,
    DocumentIOError,
    FetchError,
    PresetDataError,
    SettingsError,
)
from .eq_parser import EqTextParser, ParseResult
from .directory import DirectoryResolver, Exact, Suggestions, NotFound
from .presets import Crossfeed, load_preset
from .builder import ConfigurationBuilder
from .emitter import DocumentEmitter, DevicesFile, config_filename, write_config_file
from .settings import Settings

__all__ = [
    'Highpass',
    'Lowpass',
    'Peaking',
    'PeakingBandwidth',
    'HighshelfFO',
    'LowshelfFO',
    'HighpassFO',
    'LowpassFO',
    'GainParameters',
    'GainFilter',
    'BiquadFilter',
    'Mixer',
    'MixerChannels',
    'MixerMapping',
    'MixerSource',
    'MixerStep',
    'FilterStep',
    'Configuration',
    'CorrectionFilterSet',
    'PresetBundle',
    'AutoEqCamillaError',
    'EqParseError',
    'MalformedHeaderError',
    'MalformedBandLineError',
    'ConfigurationError',
    'NameCollisionError',
    'UnresolvedReferenceError',
    'DirectoryNotFoundError',
    'DocumentIOError',
    'FetchError',
    'PresetDataError',
    'SettingsError',
    'EqTextParser',
    'ParseResult',
    'DirectoryResolver',
    'Exact',
    'Suggestions',
    'NotFound',
    'Crossfeed',
    'load_preset',
    'ConfigurationBuilder',
    'DocumentEmitter',
    'DevicesFile',
    'config_filename',
    'write_config_file',
    'Settings',
]
