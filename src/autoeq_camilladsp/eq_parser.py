"""
AutoEq ParametricEQ.txt parser

Turns the raw text of an AutoEq parametric EQ result into a CorrectionFilterSet:

    Preamp: -6.9 dB
    Filter 1: ON PK Fc 105 Hz Gain -2.9 dB Q 0.70
    Filter 2: ON PK Fc 2274 Hz Gain 5.2 dB Q 2.13
    ...

Every token of a band line is checked against a fixed grammar, so a layout
change upstream fails loudly instead of being misread.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import EqParseError, MalformedBandLineError, MalformedHeaderError
from .models import CorrectionFilterSet, Peaking

logger = logging.getLogger(__name__)

# Plain decimal numbers only; float() would also take 'nan', 'inf' and '1_0'
NUMBER_PATTERN = re.compile(r'^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$')

# (role, expected literal or pattern); value roles have no literal
BAND_GRAMMAR: Tuple[Tuple[str, Optional[str]], ...] = (
    ('label', 'Filter'),
    ('index', r'\d+:'),
    ('state', 'ON'),
    ('kind', 'PK'),
    ('freq_label', 'Fc'),
    ('freq', None),
    ('freq_unit', 'Hz'),
    ('gain_label', 'Gain'),
    ('gain', None),
    ('gain_unit', 'dB'),
    ('q_label', 'Q'),
    ('q', None),
)

VALUE_ROLES = ('freq', 'gain', 'q')


def parse_number(token: str) -> Optional[float]:
    """Parse a plain decimal number, or return None"""
    if not NUMBER_PATTERN.match(token):
        return None
    return float(token)


def parse_header_line(line: str) -> float:
    """Return the preamp gain from the first line of a ParametricEQ file"""
    tokens = line.split()
    if len(tokens) < 2:
        raise MalformedHeaderError(line, f"expected at least 2 tokens, got {len(tokens)}")
    gain = parse_number(tokens[1])
    if gain is None:
        raise MalformedHeaderError(line, f"gain {tokens[1]!r} is not a number")
    return gain


def parse_band_line(line: str, line_number: int) -> Peaking:
    """
    Parse one 'Filter <n>: ON PK Fc <freq> Hz Gain <gain> dB Q <q>' line.

    Tokens are split on single spaces, as in the upstream files. Raises
    MalformedBandLineError naming the first token that does not fit.
    """
    tokens = line.rstrip().split(' ')
    if len(tokens) != len(BAND_GRAMMAR):
        raise MalformedBandLineError(
            line_number, line,
            f"expected {len(BAND_GRAMMAR)} tokens, got {len(tokens)}"
        )

    values = {}
    for position, ((role, expected), token) in enumerate(zip(BAND_GRAMMAR, tokens)):
        if expected is None:
            value = parse_number(token)
            if value is None:
                raise MalformedBandLineError(
                    line_number, line,
                    f"{role} at position {position} is not a number: {token!r}"
                )
            values[role] = value
        elif role == 'kind' and token != expected:
            raise MalformedBandLineError(
                line_number, line, f"unsupported filter kind {token!r} (only PK)"
            )
        elif not re.fullmatch(expected, token):
            raise MalformedBandLineError(
                line_number, line,
                f"{role} at position {position}: expected {expected!r}, got {token!r}"
            )

    return Peaking(freq=values['freq'], q=values['q'], gain=values['gain'])


@dataclass
class ParseResult:
    """Outcome of a collect-all parse; filter_set is None if anything failed"""
    filter_set: Optional[CorrectionFilterSet]
    errors: List[EqParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_first(self) -> None:
        if self.errors:
            raise self.errors[0]


class EqTextParser:
    """Parses ParametricEQ.txt text into a CorrectionFilterSet"""

    @staticmethod
    def parse(text: str) -> CorrectionFilterSet:
        """Parse correction text, stopping at the first malformed line"""
        lines = text.splitlines()
        if not lines:
            raise MalformedHeaderError('', 'empty correction data')

        gain = parse_header_line(lines[0])
        bands = []
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            bands.append(parse_band_line(line, line_number))

        logger.debug("Parsed preamp %.2f dB and %d bands", gain, len(bands))
        return CorrectionFilterSet(gain=gain, eq_bands=tuple(bands))

    @staticmethod
    def parse_all(text: str) -> ParseResult:
        """Parse correction text, collecting every error instead of stopping"""
        lines = text.splitlines()
        if not lines:
            return ParseResult(None, [MalformedHeaderError('', 'empty correction data')])

        errors: List[EqParseError] = []
        gain = None
        try:
            gain = parse_header_line(lines[0])
        except MalformedHeaderError as e:
            errors.append(e)

        bands = []
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            try:
                bands.append(parse_band_line(line, line_number))
            except MalformedBandLineError as e:
                errors.append(e)

        if errors:
            logger.debug("Correction data has %d malformed lines", len(errors))
            return ParseResult(None, errors)
        return ParseResult(CorrectionFilterSet(gain=gain, eq_bands=tuple(bands)))
