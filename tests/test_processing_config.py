import tomllib

import pytest
import tomli_w

from emgcore.processing_config import (
    FilterBankConfig,
    FilterType,
    ProcessingConfig,
    ProcessingConfigError,
    WindowType,
    validate_processing_config,
)


def test_default_config_is_valid():
    config = ProcessingConfig()
    validate_processing_config(config)
    assert config.filter_bank.highpass_cutoff_hz == 20.0
    assert config.filter_bank.lowpass_cutoff_hz == 500.0
    assert config.filter_bank.filter_order == 4
    assert config.filter_bank.filter_type is FilterType.BUTTERWORTH
    assert config.filter_bank.notch_filters.frequencies_hz == [50.0, 60.0]
    assert config.filter_bank.notch_filters.bandwidth_hz == 2.0
    assert config.quality_monitoring.snr_threshold_db == 20.0
    assert config.quality_monitoring.saturation_threshold == 0.95
    assert config.windowing.window_size_samples == 256
    assert config.windowing.overlap_percent == 50.0
    assert config.windowing.window_type is WindowType.HAMMING


def test_invalid_filter_config():
    config = ProcessingConfig()
    config.filter_bank.highpass_cutoff_hz = 0.0
    with pytest.raises(ProcessingConfigError, match="Highpass cutoff"):
        validate_processing_config(config)

    config.filter_bank.highpass_cutoff_hz = 100.0
    config.filter_bank.lowpass_cutoff_hz = 50.0
    with pytest.raises(ProcessingConfigError, match="Lowpass cutoff"):
        validate_processing_config(config)


def test_invalid_quality_config():
    config = ProcessingConfig()
    config.quality_monitoring.saturation_threshold = 1.5
    with pytest.raises(ProcessingConfigError, match="Saturation threshold"):
        validate_processing_config(config)


def test_invalid_windowing_config():
    config = ProcessingConfig()
    config.windowing.overlap_percent = 150.0
    with pytest.raises(ProcessingConfigError, match="Window overlap"):
        validate_processing_config(config)


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda c: setattr(c.filter_bank, "filter_order", 0), "Filter order"),
        (lambda c: c.filter_bank.notch_filters.frequencies_hz.append(-1.0), "Notch filter frequencies"),
        (lambda c: setattr(c.filter_bank.notch_filters, "bandwidth_hz", 0.0), "bandwidth"),
        (lambda c: setattr(c.quality_monitoring, "snr_threshold_db", -1.0), "SNR threshold"),
        (lambda c: setattr(c.quality_monitoring, "contact_impedance_max_kohm", 0.0), "contact impedance"),
        (lambda c: setattr(c.quality_monitoring, "saturation_threshold", 0.0), "Saturation"),
        (lambda c: setattr(c.windowing, "window_size_samples", 0), "Window size"),
        (lambda c: setattr(c.windowing, "overlap_percent", -0.5), "Window overlap"),
        (lambda c: setattr(c.windowing, "overlap_percent", 100.0), "Window overlap"),
    ],
)
def test_each_rule_rejects(mutate, message):
    config = ProcessingConfig()
    mutate(config)
    with pytest.raises(ProcessingConfigError, match=message):
        validate_processing_config(config)


def test_saturation_threshold_of_one_is_valid():
    config = ProcessingConfig()
    config.quality_monitoring.saturation_threshold = 1.0
    validate_processing_config(config)
    assert config.quality_monitoring.saturation_threshold == 1.0


def test_config_serialization():
    config = ProcessingConfig()
    text = tomli_w.dumps(config.to_dict())
    restored = ProcessingConfig.from_dict(tomllib.loads(text))
    assert restored.filter_bank.highpass_cutoff_hz == config.filter_bank.highpass_cutoff_hz
    assert restored.quality_monitoring.snr_threshold_db == config.quality_monitoring.snr_threshold_db
    assert restored == config


def test_enums_serialize_lowercase():
    data = ProcessingConfig().to_dict()
    assert data["filter_bank"]["filter_type"] == "butterworth"
    assert data["windowing"]["window_type"] == "hamming"


def test_from_dict_reads_other_enum_values():
    data = ProcessingConfig().to_dict()
    data["filter_bank"]["filter_type"] = "chebyshev2"
    data["windowing"]["window_type"] = "kaiser"
    config = ProcessingConfig.from_dict(data)
    assert config.filter_bank.filter_type is FilterType.CHEBYSHEV2
    assert config.windowing.window_type is WindowType.KAISER


def test_from_dict_rejects_unknown_enum():
    data = ProcessingConfig().to_dict()
    data["filter_bank"]["filter_type"] = "bessel"
    with pytest.raises(ProcessingConfigError, match="bessel"):
        ProcessingConfig.from_dict(data)


def test_from_dict_rejects_missing_field():
    data = ProcessingConfig().to_dict()
    del data["windowing"]["overlap_percent"]
    with pytest.raises(ProcessingConfigError, match="overlap_percent"):
        ProcessingConfig.from_dict(data)


def test_from_dict_rejects_missing_section():
    data = ProcessingConfig().to_dict()
    del data["quality_monitoring"]
    with pytest.raises(ProcessingConfigError, match="quality_monitoring"):
        ProcessingConfig.from_dict(data)


def test_integer_frequencies_become_floats():
    data = ProcessingConfig().to_dict()
    data["filter_bank"]["notch_filters"]["frequencies_hz"] = [50, 60]
    config = ProcessingConfig.from_dict(data)
    assert config.filter_bank.notch_filters.frequencies_hz == [50.0, 60.0]


def test_default_instances_do_not_share_lists():
    first = FilterBankConfig()
    second = FilterBankConfig()
    first.notch_filters.frequencies_hz.append(70.0)
    assert second.notch_filters.frequencies_hz == [50.0, 60.0]