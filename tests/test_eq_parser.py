"""Tests for eq_parser.py — ParametricEQ.txt parsing."""

import pytest

from autoeq_camilladsp import (
    EqTextParser, MalformedBandLineError, MalformedHeaderError, Peaking,
)
from autoeq_camilladsp.eq_parser import parse_band_line, parse_header_line


class TestHeaderLine:

    def test_preamp_gain(self):
        assert parse_header_line("Preamp: -6.9 dB") == -6.9

    def test_two_token_header(self):
        assert parse_header_line("Preamp: 0") == 0.0

    def test_single_token_rejected(self):
        with pytest.raises(MalformedHeaderError):
            parse_header_line("Preamp:")

    def test_non_numeric_gain_rejected(self):
        with pytest.raises(MalformedHeaderError):
            parse_header_line("Preamp: loud dB")

    def test_unit_glued_to_number_rejected(self):
        with pytest.raises(MalformedHeaderError):
            parse_header_line("Preamp: -6.9dB")

    def test_nan_rejected(self):
        with pytest.raises(MalformedHeaderError):
            parse_header_line("Preamp: nan dB")


class TestBandLine:

    def test_peaking_band(self):
        band = parse_band_line("Filter 1: ON PK Fc 105 Hz Gain -2.9 dB Q 0.70", 2)
        assert band == Peaking(freq=105.0, q=0.70, gain=-2.9)

    def test_same_line_twice_is_equal(self):
        line = "Filter 1: ON PK Fc 105 Hz Gain -2.9 dB Q 0.70"
        assert parse_band_line(line, 2) == parse_band_line(line, 2)

    def test_trailing_whitespace_ignored(self):
        band = parse_band_line("Filter 7: ON PK Fc 8000 Hz Gain 2.0 dB Q 0.7  ", 8)
        assert band.freq == 8000.0

    def test_shelf_line_rejected(self):
        with pytest.raises(MalformedBandLineError) as excinfo:
            parse_band_line("Filter 1: ON LSC Fc 105 Hz Gain 5.5 dB Q 0.70", 2)
        assert 'LSC' in excinfo.value.detail

    def test_wrong_literal_rejected(self):
        with pytest.raises(MalformedBandLineError) as excinfo:
            parse_band_line("Filter 1: ON PK Fc 105 kHz Gain -2.9 dB Q 0.70", 5)
        assert excinfo.value.line_number == 5
        assert 'freq_unit' in excinfo.value.detail

    def test_short_line_rejected(self):
        with pytest.raises(MalformedBandLineError):
            parse_band_line("Filter 1: ON PK Fc 105 Hz", 2)

    def test_double_space_shifts_tokens(self):
        with pytest.raises(MalformedBandLineError):
            parse_band_line("Filter 1: ON PK Fc  105 Hz Gain -2.9 dB Q 0.70", 2)

    def test_non_numeric_value_rejected(self):
        with pytest.raises(MalformedBandLineError) as excinfo:
            parse_band_line("Filter 1: ON PK Fc 105 Hz Gain high dB Q 0.70", 2)
        assert 'gain' in excinfo.value.detail


class TestEqTextParser:

    def test_parses_sample(self, sample_eq_text):
        filter_set = EqTextParser.parse(sample_eq_text)
        assert filter_set.gain == -6.9
        assert len(filter_set.eq_bands) == 4
        assert filter_set.eq_bands[0] == Peaking(freq=105.0, q=0.70, gain=-2.9)
        assert filter_set.eq_bands[3] == Peaking(freq=19.0, q=0.34, gain=6.4)

    def test_keeps_file_order(self, sample_eq_text):
        freqs = [band.freq for band in EqTextParser.parse(sample_eq_text).eq_bands]
        assert freqs == [105.0, 2274.0, 4531.0, 19.0]

    def test_crlf_and_blank_lines(self):
        text = "Preamp: -1.0 dB\r\n\r\nFilter 1: ON PK Fc 50 Hz Gain 1.0 dB Q 1.0\r\n"
        filter_set = EqTextParser.parse(text)
        assert filter_set.eq_bands == (Peaking(freq=50.0, q=1.0, gain=1.0),)

    def test_header_only(self):
        filter_set = EqTextParser.parse("Preamp: -2.5 dB\n")
        assert filter_set.gain == -2.5
        assert filter_set.eq_bands == ()

    def test_empty_text(self):
        with pytest.raises(MalformedHeaderError):
            EqTextParser.parse("")

    def test_first_bad_line_aborts(self, sample_eq_text):
        text = sample_eq_text + "Filter 5: ON HSC Fc 10000 Hz Gain -1.0 dB Q 0.70\n"
        with pytest.raises(MalformedBandLineError) as excinfo:
            EqTextParser.parse(text)
        assert excinfo.value.line_number == 6


class TestParseAll:

    def test_ok_result(self, sample_eq_text):
        result = EqTextParser.parse_all(sample_eq_text)
        assert result.ok
        assert result.filter_set == EqTextParser.parse(sample_eq_text)

    def test_collects_every_error(self):
        text = (
            "Preamp: x dB\n"
            "Filter 1: ON LSC Fc 105 Hz Gain 5.5 dB Q 0.70\n"
            "Filter 2: ON PK Fc 2274 Hz Gain 5.2 dB Q 2.13\n"
            "Filter 3: ON HSC Fc 10000 Hz Gain -1.0 dB Q 0.70\n"
        )
        result = EqTextParser.parse_all(text)
        assert not result.ok
        assert result.filter_set is None
        assert len(result.errors) == 3
        assert isinstance(result.errors[0], MalformedHeaderError)
        assert [e.line_number for e in result.errors[1:]] == [2, 4]

    def test_raise_first(self):
        result = EqTextParser.parse_all("Preamp:\n")
        with pytest.raises(MalformedHeaderError):
            result.raise_first()
