"""
Data model for CamillaDSP configurations.

A Configuration is made of:
- filters: named Gain or Biquad filters
- mixers: named channel routing matrices
- pipeline: the ordered processing chain referencing filters and mixers by name

Every type converts to and from the plain dict/list shape that CamillaDSP
reads from YAML, so configurations and bundled presets share one schema.
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import ClassVar, Mapping, Optional, Tuple, Union


# --- Biquad bands -----------------------------------------------------------

@dataclass(frozen=True)
class Highpass:
    """Second order highpass"""
    freq: float
    q: float
    kind: ClassVar[str] = 'Highpass'


@dataclass(frozen=True)
class Lowpass:
    """Second order lowpass"""
    freq: float
    q: float
    kind: ClassVar[str] = 'Lowpass'


@dataclass(frozen=True)
class Peaking:
    """Peaking band with width given as Q"""
    freq: float
    q: float
    gain: float
    kind: ClassVar[str] = 'Peaking'


@dataclass(frozen=True)
class PeakingBandwidth:
    """Peaking band with width given in octaves"""
    freq: float
    bandwidth: float
    gain: float
    kind: ClassVar[str] = 'Peaking'


@dataclass(frozen=True)
class HighshelfFO:
    """First order high shelf"""
    freq: float
    gain: float
    kind: ClassVar[str] = 'HighshelfFO'


@dataclass(frozen=True)
class LowshelfFO:
    """First order low shelf"""
    freq: float
    gain: float
    kind: ClassVar[str] = 'LowshelfFO'


@dataclass(frozen=True)
class HighpassFO:
    """First order highpass"""
    freq: float
    kind: ClassVar[str] = 'HighpassFO'


@dataclass(frozen=True)
class LowpassFO:
    """First order lowpass"""
    freq: float
    kind: ClassVar[str] = 'LowpassFO'


BiquadBand = Union[Highpass, Lowpass, Peaking, PeakingBandwidth,
                   HighshelfFO, LowshelfFO, HighpassFO, LowpassFO]

# Peaking is absent: it maps to two classes, picked by the width field
BIQUAD_KINDS = {
    cls.kind: cls
    for cls in (Highpass, Lowpass, HighshelfFO, LowshelfFO, HighpassFO, LowpassFO)
}


def biquad_to_dict(band: BiquadBand) -> dict:
    """Serialize a band to CamillaDSP biquad parameters."""
    data = {'type': band.kind}
    for f in fields(band):
        data[f.name] = getattr(band, f.name)
    return data


def biquad_from_dict(data: dict) -> BiquadBand:
    """Parse CamillaDSP biquad parameters into a band."""
    kind = data.get('type')
    if kind == 'Peaking':
        cls = PeakingBandwidth if 'bandwidth' in data else Peaking
    elif kind in BIQUAD_KINDS:
        cls = BIQUAD_KINDS[kind]
    else:
        raise ValueError(f"Unknown biquad type: {kind!r}")
    return cls(**{f.name: float(data[f.name]) for f in fields(cls)})


# --- Filters ----------------------------------------------------------------

@dataclass(frozen=True)
class GainParameters:
    gain: float
    inverted: bool = False
    mute: bool = False

    def to_dict(self) -> dict:
        return {'gain': self.gain, 'inverted': self.inverted, 'mute': self.mute}

    @classmethod
    def from_dict(cls, data: dict) -> 'GainParameters':
        return cls(
            gain=float(data['gain']),
            inverted=bool(data.get('inverted', False)),
            mute=bool(data.get('mute', False)),
        )


@dataclass(frozen=True)
class GainFilter:
    parameters: GainParameters
    kind: ClassVar[str] = 'Gain'

    def to_dict(self) -> dict:
        return {'type': self.kind, 'parameters': self.parameters.to_dict()}


@dataclass(frozen=True)
class BiquadFilter:
    parameters: BiquadBand
    kind: ClassVar[str] = 'Biquad'

    def to_dict(self) -> dict:
        return {'type': self.kind, 'parameters': biquad_to_dict(self.parameters)}


Filter = Union[GainFilter, BiquadFilter]


def filter_from_dict(data: dict) -> Filter:
    kind = data.get('type')
    if kind == GainFilter.kind:
        return GainFilter(GainParameters.from_dict(data['parameters']))
    if kind == BiquadFilter.kind:
        return BiquadFilter(biquad_from_dict(data['parameters']))
    raise ValueError(f"Unknown filter type: {kind!r}")


# --- Mixers -----------------------------------------------------------------

@dataclass(frozen=True)
class MixerSource:
    channel: int
    gain: float
    inverted: bool = False
    mute: bool = False

    def to_dict(self) -> dict:
        return {
            'channel': self.channel,
            'gain': self.gain,
            'inverted': self.inverted,
            'mute': self.mute,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MixerSource':
        return cls(
            channel=int(data['channel']),
            gain=float(data['gain']),
            inverted=bool(data.get('inverted', False)),
            mute=bool(data.get('mute', False)),
        )


@dataclass(frozen=True)
class MixerMapping:
    dest: int
    sources: Tuple[MixerSource, ...]
    mute: bool = False

    def to_dict(self) -> dict:
        return {
            'dest': self.dest,
            'sources': [source.to_dict() for source in self.sources],
            'mute': self.mute,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MixerMapping':
        return cls(
            dest=int(data['dest']),
            sources=tuple(MixerSource.from_dict(s) for s in data['sources']),
            mute=bool(data.get('mute', False)),
        )


@dataclass(frozen=True)
class MixerChannels:
    # 'in' is a keyword, so the wire name differs
    in_: int
    out: int

    def to_dict(self) -> dict:
        return {'in': self.in_, 'out': self.out}

    @classmethod
    def from_dict(cls, data: dict) -> 'MixerChannels':
        return cls(in_=int(data['in']), out=int(data['out']))


@dataclass(frozen=True)
class Mixer:
    channels: MixerChannels
    mapping: Tuple[MixerMapping, ...]

    def to_dict(self) -> dict:
        return {
            'channels': self.channels.to_dict(),
            'mapping': [m.to_dict() for m in self.mapping],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Mixer':
        return cls(
            channels=MixerChannels.from_dict(data['channels']),
            mapping=tuple(MixerMapping.from_dict(m) for m in data['mapping']),
        )


# --- Pipeline ---------------------------------------------------------------

@dataclass(frozen=True)
class MixerStep:
    name: str
    kind: ClassVar[str] = 'Mixer'

    def to_dict(self) -> dict:
        return {'type': self.kind, 'name': self.name}


@dataclass(frozen=True)
class FilterStep:
    channel: int
    names: Tuple[str, ...]
    kind: ClassVar[str] = 'Filter'

    def to_dict(self) -> dict:
        return {'type': self.kind, 'channel': self.channel, 'names': list(self.names)}


PipelineStep = Union[MixerStep, FilterStep]


def step_from_dict(data: dict) -> PipelineStep:
    kind = data.get('type')
    if kind == MixerStep.kind:
        return MixerStep(name=str(data['name']))
    if kind == FilterStep.kind:
        return FilterStep(channel=int(data['channel']),
                          names=tuple(str(n) for n in data['names']))
    raise ValueError(f"Unknown pipeline step type: {kind!r}")


# --- Aggregates -------------------------------------------------------------

def _sections_to_dict(mixers: Mapping[str, Mixer], filters: Mapping[str, Filter],
                      pipeline: Tuple[PipelineStep, ...]) -> dict:
    data = {}
    if mixers:
        data['mixers'] = {name: mixer.to_dict() for name, mixer in mixers.items()}
    # Key order is display only; execution order lives in the pipeline
    data['filters'] = {name: filters[name].to_dict() for name in sorted(filters)}
    data['pipeline'] = [step.to_dict() for step in pipeline]
    return data


def _sections_from_dict(data: dict) -> Tuple[dict, dict, tuple]:
    mixers = {name: Mixer.from_dict(m) for name, m in (data.get('mixers') or {}).items()}
    filters = {name: filter_from_dict(f) for name, f in (data.get('filters') or {}).items()}
    pipeline = tuple(step_from_dict(s) for s in (data.get('pipeline') or []))
    return mixers, filters, pipeline


@dataclass(frozen=True)
class Configuration:
    """A complete mixers/filters/pipeline section of a CamillaDSP config.

    The mappings are copied into read-only views on construction, so a
    Configuration cannot change after it is handed to the emitter.
    """
    mixers: Mapping[str, Mixer] = field(default_factory=dict)
    filters: Mapping[str, Filter] = field(default_factory=dict)
    pipeline: Tuple[PipelineStep, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'mixers', MappingProxyType(dict(self.mixers)))
        object.__setattr__(self, 'filters', MappingProxyType(dict(self.filters)))
        object.__setattr__(self, 'pipeline', tuple(self.pipeline))

    def to_dict(self) -> dict:
        """Plain dict for YAML; 'mixers' is omitted when empty."""
        return _sections_to_dict(self.mixers, self.filters, self.pipeline)

    @classmethod
    def from_dict(cls, data: dict) -> 'Configuration':
        mixers, filters, pipeline = _sections_from_dict(data)
        return cls(mixers=mixers, filters=filters, pipeline=pipeline)


@dataclass(frozen=True)
class CorrectionFilterSet:
    """Preamp gain plus ordered EQ bands for one headphone."""
    gain: float
    eq_bands: Tuple[BiquadBand, ...] = ()


@dataclass(frozen=True)
class PresetBundle:
    """A named, read-only mixers/filters/pipeline fragment."""
    name: str
    mixers: Mapping[str, Mixer] = field(default_factory=lambda: MappingProxyType({}))
    filters: Mapping[str, Filter] = field(default_factory=lambda: MappingProxyType({}))
    pipeline: Tuple[PipelineStep, ...] = ()

    def to_dict(self) -> dict:
        return _sections_to_dict(self.mixers, self.filters, self.pipeline)

    @classmethod
    def from_dict(cls, name: str, data: Optional[dict]) -> 'PresetBundle':
        if not isinstance(data, dict):
            raise ValueError(f"Preset {name!r} must be a mapping")
        mixers, filters, pipeline = _sections_from_dict(data)
        return cls(
            name=name,
            mixers=MappingProxyType(mixers),
            filters=MappingProxyType(filters),
            pipeline=pipeline,
        )
