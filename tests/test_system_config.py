import tomllib

import pytest

from emgcore.constants import Signal
from emgcore.processing_config import ProcessingConfig
from emgcore.system_config import (
    ConfigSummary,
    ConsistencyError,
    DeviceType,
    SystemConfig,
    ThreadPriority,
)


def test_default_config_creation():
    config = SystemConfig()
    assert config.system.sampling_rate_hz == Signal.DEFAULT_SAMPLING_RATE_HZ
    assert config.system.channel_count == Signal.DEFAULT_CHANNEL_COUNT
    assert config.validate_consistency() is None


def test_config_dict_round_trip():
    config = SystemConfig()
    restored = SystemConfig.from_dict(config.to_dict())
    assert restored.system.sampling_rate_hz == config.system.sampling_rate_hz
    assert restored == config


def test_to_dict_uses_lowercase_enum_names():
    data = SystemConfig().to_dict()
    assert data["system"]["thread_priority"] == "realtime"
    assert data["hal"]["device_type"] == "simulator"
    assert data["processing"]["filter_bank"]["filter_type"] == "butterworth"


def test_config_validation_buffer_too_small():
    config = SystemConfig()
    config.system.buffer_size_samples = 100
    config.system.latency_target_ms = 100
    with pytest.raises(ConsistencyError) as info:
        config.validate_consistency()
    assert info.value.errors == [
        "Buffer size too small for latency target: need 200 samples, have 100"
    ]


def test_nyquist_violations_are_all_reported():
    config = SystemConfig()
    config.system.sampling_rate_hz = 100
    with pytest.raises(ConsistencyError) as info:
        config.validate_consistency()
    assert info.value.errors == [
        "Lowpass cutoff (500 Hz) must be less than Nyquist frequency (50 Hz)",
        "Notch filter frequency (50 Hz) must be less than Nyquist frequency (50 Hz)",
        "Notch filter frequency (60 Hz) must be less than Nyquist frequency (50 Hz)",
    ]


def test_effective_buffer_size():
    config = SystemConfig()
    size = config.get_effective_buffer_size()
    assert size & (size - 1) == 0
    assert size >= config.system.buffer_size_samples
    assert size == 4096


def test_effective_buffer_size_grows_with_latency():
    config = SystemConfig()
    config.system.buffer_size_samples = 100
    config.system.latency_target_ms = 100
    assert config.get_effective_buffer_size() == 512


def test_realtime_capability():
    config = SystemConfig()
    assert config.is_realtime_capable() is True
    config.system.thread_priority = ThreadPriority.NORMAL
    assert config.is_realtime_capable() is False


def test_realtime_requires_safety_monitoring():
    config = SystemConfig()
    config.system.enable_safety_monitoring = False
    assert config.is_realtime_capable() is False


def test_summary():
    summary = SystemConfig().get_summary()
    assert summary == ConfigSummary(
        sampling_rate_hz=2000,
        channel_count=8,
        latency_target_ms=20,
        device_type=DeviceType.SIMULATOR,
        is_realtime=True,
        buffer_size=4096,
    )


def test_from_dict_fills_missing_fields_with_defaults():
    data = {
        "system": {"sampling_rate_hz": 4000},
        "hal": {"device_type": "usb"},
        "processing": ProcessingConfig().to_dict(),
        "communication": {},
    }
    config = SystemConfig.from_dict(data)
    assert config.system.sampling_rate_hz == 4000
    assert config.system.channel_count == 8
    assert config.hal.device_type is DeviceType.USB
    assert config.hal.retry_attempts == 3
    assert config.communication.message_queue_size == 1024


def test_from_toml_text():
    text = """
[system]
sampling_rate_hz = 1000
thread_priority = "high"

[hal]
device_type = "serial"

[hal.usb]
timeout_ms = 500

[communication]
enable_compression = true

[processing.filter_bank]
highpass_cutoff_hz = 20.0
lowpass_cutoff_hz = 400.0
filter_order = 4
filter_type = "butterworth"

[processing.filter_bank.notch_filters]
frequencies_hz = [50.0]
bandwidth_hz = 2.0

[processing.quality_monitoring]
snr_threshold_db = 20.0
artifact_detection_enabled = true
contact_impedance_max_kohm = 50.0
saturation_threshold = 0.95

[processing.windowing]
window_size_samples = 256
overlap_percent = 50.0
window_type = "hamming"
"""
    config = SystemConfig.from_dict(tomllib.loads(text))
    assert config.system.thread_priority is ThreadPriority.HIGH
    assert config.hal.device_type is DeviceType.SERIAL
    assert config.hal.usb == {"timeout_ms": 500}
    assert config.communication.enable_compression is True
    assert config.processing.filter_bank.lowpass_cutoff_hz == 400.0
    assert config.validate_consistency() is None


def test_from_dict_missing_section_raises():
    data = SystemConfig().to_dict()
    del data["communication"]
    with pytest.raises(ValueError, match="communication"):
        SystemConfig.from_dict(data)


def test_from_dict_unknown_device_type_raises():
    data = SystemConfig().to_dict()
    data["hal"]["device_type"] = "carrier_pigeon"
    with pytest.raises(ValueError, match="DeviceType"):
        SystemConfig.from_dict(data)


def test_from_dict_rejects_wrong_type():
    data = SystemConfig().to_dict()
    data["system"]["channel_count"] = "eight"
    with pytest.raises(ValueError, match="channel_count"):
        SystemConfig.from_dict(data)