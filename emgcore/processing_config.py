"""Signal processing pipeline configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

__all__ = [
    "FilterType",
    "WindowType",
    "NotchFilterConfig",
    "FilterBankConfig",
    "QualityConfig",
    "WindowingConfig",
    "ProcessingConfig",
    "ProcessingConfigError",
    "validate_processing_config",
]


class ProcessingConfigError(ValueError):
    """Raised when a processing configuration is invalid or malformed."""


class FilterType(Enum):
    BUTTERWORTH = "butterworth"
    CHEBYSHEV1 = "chebyshev1"
    CHEBYSHEV2 = "chebyshev2"
    ELLIPTIC = "elliptic"


class WindowType(Enum):
    RECTANGULAR = "rectangular"
    HAMMING = "hamming"
    HANNING = "hanning"
    BLACKMAN = "blackman"
    KAISER = "kaiser"


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _field(data, key)
    if not isinstance(value, Mapping):
        raise ProcessingConfigError(f"Field '{key}' must be a table")
    return value


def _field(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ProcessingConfigError(f"Missing field '{key}'") from None


def _number(data: Mapping[str, Any], key: str) -> float:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProcessingConfigError(f"Field '{key}' must be a number")
    return float(value)


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ProcessingConfigError(f"Field '{key}' must be a non-negative integer")
    return value


def _boolean(data: Mapping[str, Any], key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise ProcessingConfigError(f"Field '{key}' must be a boolean")
    return value


def _enum(enum_type: type[Enum], data: Mapping[str, Any], key: str) -> Any:
    value = _field(data, key)
    try:
        return enum_type(value)
    except ValueError:
        raise ProcessingConfigError(
            f"Unknown {enum_type.__name__} '{value}' for field '{key}'"
        ) from None


@dataclass
class NotchFilterConfig:
    """Notch filters for powerline interference."""

    frequencies_hz: list[float] = field(default_factory=lambda: [50.0, 60.0])
    bandwidth_hz: float = 2.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequencies_hz": list(self.frequencies_hz),
            "bandwidth_hz": self.bandwidth_hz,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NotchFilterConfig:
        frequencies = _field(data, "frequencies_hz")
        if not isinstance(frequencies, (list, tuple)) or any(
            isinstance(f, bool) or not isinstance(f, (int, float)) for f in frequencies
        ):
            raise ProcessingConfigError("Field 'frequencies_hz' must be a list of numbers")
        return cls(
            frequencies_hz=[float(f) for f in frequencies],
            bandwidth_hz=_number(data, "bandwidth_hz"),
        )


@dataclass
class FilterBankConfig:
    """Band-pass and notch filter settings."""

    highpass_cutoff_hz: float = 20.0
    lowpass_cutoff_hz: float = 500.0
    filter_order: int = 4
    filter_type: FilterType = FilterType.BUTTERWORTH
    notch_filters: NotchFilterConfig = field(default_factory=NotchFilterConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "highpass_cutoff_hz": self.highpass_cutoff_hz,
            "lowpass_cutoff_hz": self.lowpass_cutoff_hz,
            "filter_order": self.filter_order,
            "filter_type": self.filter_type.value,
            "notch_filters": self.notch_filters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterBankConfig:
        return cls(
            highpass_cutoff_hz=_number(data, "highpass_cutoff_hz"),
            lowpass_cutoff_hz=_number(data, "lowpass_cutoff_hz"),
            filter_order=_integer(data, "filter_order"),
            filter_type=_enum(FilterType, data, "filter_type"),
            notch_filters=NotchFilterConfig.from_dict(_section(data, "notch_filters")),
        )


@dataclass
class QualityConfig:
    """Signal quality monitoring settings."""

    snr_threshold_db: float = 20.0
    artifact_detection_enabled: bool = True
    contact_impedance_max_kohm: float = 50.0
    saturation_threshold: float = 0.95

    def to_dict(self) -> dict[str, Any]:
        return {
            "snr_threshold_db": self.snr_threshold_db,
            "artifact_detection_enabled": self.artifact_detection_enabled,
            "contact_impedance_max_kohm": self.contact_impedance_max_kohm,
            "saturation_threshold": self.saturation_threshold,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QualityConfig:
        return cls(
            snr_threshold_db=_number(data, "snr_threshold_db"),
            artifact_detection_enabled=_boolean(data, "artifact_detection_enabled"),
            contact_impedance_max_kohm=_number(data, "contact_impedance_max_kohm"),
            saturation_threshold=_number(data, "saturation_threshold"),
        )


@dataclass
class WindowingConfig:
    """Windowing settings for feature extraction."""

    window_size_samples: int = 256
    overlap_percent: float = 50.0
    window_type: WindowType = WindowType.HAMMING

    def to_dict(self) -> dict[str, Any]:
        return {
            "window_size_samples": self.window_size_samples,
            "overlap_percent": self.overlap_percent,
            "window_type": self.window_type.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WindowingConfig:
        return cls(
            window_size_samples=_integer(data, "window_size_samples"),
            overlap_percent=_number(data, "overlap_percent"),
            window_type=_enum(WindowType, data, "window_type"),
        )


@dataclass
class ProcessingConfig:
    """Complete processing pipeline configuration."""

    filter_bank: FilterBankConfig = field(default_factory=FilterBankConfig)
    quality_monitoring: QualityConfig = field(default_factory=QualityConfig)
    windowing: WindowingConfig = field(default_factory=WindowingConfig)

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionary suitable for TOML or JSON."""
        return {
            "filter_bank": self.filter_bank.to_dict(),
            "quality_monitoring": self.quality_monitoring.to_dict(),
            "windowing": self.windowing.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProcessingConfig:
        """Build a configuration from a nested mapping; every field is required."""
        return cls(
            filter_bank=FilterBankConfig.from_dict(_section(data, "filter_bank")),
            quality_monitoring=QualityConfig.from_dict(
                _section(data, "quality_monitoring")
            ),
            windowing=WindowingConfig.from_dict(_section(data, "windowing")),
        )


def validate_processing_config(config: ProcessingConfig) -> None:
    """Raise ProcessingConfigError on the first invalid setting."""
    bank = config.filter_bank
    if bank.highpass_cutoff_hz <= 0.0:
        raise ProcessingConfigError("Highpass cutoff frequency must be positive")
    if bank.lowpass_cutoff_hz <= bank.highpass_cutoff_hz:
        raise ProcessingConfigError("Lowpass cutoff must be higher than highpass cutoff")
    if bank.filter_order == 0:
        raise ProcessingConfigError("Filter order must be greater than 0")

    if any(freq <= 0.0 for freq in bank.notch_filters.frequencies_hz):
        raise ProcessingConfigError("Notch filter frequencies must be positive")
    if bank.notch_filters.bandwidth_hz <= 0.0:
        raise ProcessingConfigError("Notch filter bandwidth must be positive")

    quality = config.quality_monitoring
    if quality.snr_threshold_db < 0.0:
        raise ProcessingConfigError("SNR threshold cannot be negative")
    if quality.contact_impedance_max_kohm <= 0.0:
        raise ProcessingConfigError("Maximum contact impedance must be positive")
    if not 0.0 < quality.saturation_threshold <= 1.0:
        raise ProcessingConfigError("Saturation threshold must be between 0 and 1")

    windowing = config.windowing
    if windowing.window_size_samples == 0:
        raise ProcessingConfigError("Window size must be greater than 0")
    if not 0.0 <= windowing.overlap_percent < 100.0:
        raise ProcessingConfigError("Window overlap must be between 0 and 100 percent")