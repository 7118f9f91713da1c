"""Tests for builder.py — configuration assembly."""

from types import MappingProxyType

import pytest

from autoeq_camilladsp import (
    BiquadFilter, ConfigurationBuilder, CorrectionFilterSet, Crossfeed, FilterStep,
    GainFilter, GainParameters, MixerStep, NameCollisionError, Peaking, PresetBundle,
    UnresolvedReferenceError, load_preset,
)


def expected_names(band_count):
    return ("01_Preamp_Gain",) + tuple(f"Correction_Eq_Band_{i}" for i in range(band_count))


class TestCorrectionStage:

    def test_preamp_filter(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.NONE)
        assert config.filters["01_Preamp_Gain"] == GainFilter(
            GainParameters(gain=-6.9, inverted=False, mute=False))

    def test_band_filters(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, None)
        assert config.filters["Correction_Eq_Band_1"] == BiquadFilter(
            Peaking(freq=2274.0, q=2.13, gain=5.2))
        assert len(config.filters) == 4

    def test_no_mixers_without_preset(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.NONE)
        assert config.mixers == {}
        assert 'mixers' not in config.to_dict()

    def test_two_identical_filter_steps(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.NONE)
        assert config.pipeline == (
            FilterStep(channel=0, names=expected_names(3)),
            FilterStep(channel=1, names=expected_names(3)),
        )

    def test_pipeline_order_survives_key_sorting(self):
        bands = tuple(Peaking(freq=100.0 * (i + 1), q=1.0, gain=0.5) for i in range(12))
        config = ConfigurationBuilder.build(CorrectionFilterSet(gain=-3.0, eq_bands=bands), None)

        assert list(config.filters)[:4] == [
            "01_Preamp_Gain", "Correction_Eq_Band_0", "Correction_Eq_Band_1",
            "Correction_Eq_Band_10",
        ]
        steps = [step for step in config.pipeline if isinstance(step, FilterStep)]
        assert len(steps) == 2
        assert all(step.names == expected_names(12) for step in steps)

    def test_no_bands(self):
        config = ConfigurationBuilder.build(CorrectionFilterSet(gain=0.0), None)
        assert config.pipeline[0].names == ("01_Preamp_Gain",)


class TestPresetMerge:

    def test_preset_steps_come_first(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.POW_CHU_MOY)
        preset = load_preset(Crossfeed.POW_CHU_MOY)

        assert config.pipeline[:len(preset.pipeline)] == preset.pipeline
        assert config.pipeline[0] == MixerStep('XF_IN')
        assert config.pipeline[-2:] == (
            FilterStep(channel=0, names=expected_names(3)),
            FilterStep(channel=1, names=expected_names(3)),
        )

    def test_preset_filters_and_mixers_merged(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.NATURAL)
        assert set(config.mixers) == {'XF_IN', 'XF_OUT'}
        assert 'XF_Cross_HighShelf' in config.filters
        assert '01_Preamp_Gain' in config.filters

    def test_filters_sorted(self, sample_correction):
        config = ConfigurationBuilder.build(sample_correction, Crossfeed.MPM)
        assert list(config.filters) == sorted(config.filters)

    def test_accepts_bundle_directly(self, sample_correction):
        bundle = load_preset(Crossfeed.MPM)
        assert (ConfigurationBuilder.build(sample_correction, bundle)
                == ConfigurationBuilder.build(sample_correction, Crossfeed.MPM))

    def test_deterministic(self, sample_correction):
        first = ConfigurationBuilder.build(sample_correction, Crossfeed.POW_CHU_MOY)
        second = ConfigurationBuilder.build(sample_correction, Crossfeed.POW_CHU_MOY)
        assert first == second


class TestInvariants:

    def test_preamp_name_collision(self, sample_correction):
        bundle = PresetBundle(
            name='clash',
            filters=MappingProxyType({'01_Preamp_Gain': GainFilter(GainParameters(gain=3.0))}),
        )
        with pytest.raises(NameCollisionError) as excinfo:
            ConfigurationBuilder.build(sample_correction, bundle)
        assert excinfo.value.name == '01_Preamp_Gain'

    def test_unresolved_filter_reference(self, sample_correction):
        bundle = PresetBundle(name='broken', pipeline=(FilterStep(channel=0, names=('Missing',)),))
        with pytest.raises(UnresolvedReferenceError) as excinfo:
            ConfigurationBuilder.build(sample_correction, bundle)
        assert excinfo.value.name == 'Missing'

    def test_unresolved_mixer_reference(self, sample_correction):
        bundle = PresetBundle(name='broken', pipeline=(MixerStep('XF_NOWHERE'),))
        with pytest.raises(UnresolvedReferenceError) as excinfo:
            ConfigurationBuilder.build(sample_correction, bundle)
        assert excinfo.value.kind == 'mixer'
