"""Schema validation for nested configuration tables."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping

from emgcore.constants import Filters, Performance, Quality, Signal, Windowing
from emgcore.device_constants import Hal

__all__ = [
    "ValidationError",
    "ValidationErrors",
    "FieldConstraint",
    "Range",
    "IntRange",
    "OneOf",
    "MinLength",
    "MaxLength",
    "Required",
    "Custom",
    "SchemaValidator",
]


def _fmt(value: Any) -> str:
    """Render numbers the way configuration messages show them."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ValidationError(ValueError):
    """A single field that failed validation."""

    def __init__(self, field: str, message: str, value: str) -> None:
        super().__init__(
            f"Validation error for '{field}': {message} (value: {value})"
        )
        self.field = field
        self.message = message
        self.value = value


class ValidationErrors(ValueError):
    """Every field error found while validating a configuration."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        lines = "".join(f"\n  {error}" for error in self.errors)
        super().__init__(f"Configuration validation errors: {lines}")

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class FieldConstraint:
    """A rule that one configuration value must satisfy."""

    def check(self, field: str, value: Any) -> None:
        """Raise ValidationError when the value breaks the rule."""
        raise NotImplementedError


@dataclass(frozen=True)
class Range(FieldConstraint):
    """Inclusive bounds for floating-point values; other types pass."""

    min: float
    max: float

    def check(self, field: str, value: Any) -> None:
        if _is_float(value) and (value < self.min or value > self.max):
            raise ValidationError(
                field,
                f"Value must be between {_fmt(self.min)} and {_fmt(self.max)}",
                _fmt(value),
            )


@dataclass(frozen=True)
class IntRange(FieldConstraint):
    """Inclusive bounds for integer values; other types pass."""

    min: int
    max: int

    def check(self, field: str, value: Any) -> None:
        if _is_integer(value) and (value < self.min or value > self.max):
            raise ValidationError(
                field,
                f"Value must be between {self.min} and {self.max}",
                str(value),
            )


@dataclass(frozen=True)
class OneOf(FieldConstraint):
    """A string that must match one of the options, ignoring case."""

    options: tuple[str, ...]

    def __init__(self, options: Any) -> None:
        object.__setattr__(self, "options", tuple(options))

    def check(self, field: str, value: Any) -> None:
        if not isinstance(value, str):
            return
        allowed = {option.lower() for option in self.options}
        if value.lower() not in allowed:
            raise ValidationError(
                field,
                f"Value must be one of: {', '.join(self.options)}",
                value,
            )


@dataclass(frozen=True)
class MinLength(FieldConstraint):
    """A string at least this many bytes long."""

    length: int

    def check(self, field: str, value: Any) -> None:
        if isinstance(value, str) and len(value.encode("utf-8")) < self.length:
            raise ValidationError(field, f"Minimum length is {self.length}", value)


@dataclass(frozen=True)
class MaxLength(FieldConstraint):
    """A string at most this many bytes long."""

    length: int

    def check(self, field: str, value: Any) -> None:
        if isinstance(value, str) and len(value.encode("utf-8")) > self.length:
            raise ValidationError(field, f"Maximum length is {self.length}", value)


@dataclass(frozen=True)
class Required(FieldConstraint):
    """A non-empty string."""

    def check(self, field: str, value: Any) -> None:
        if not isinstance(value, str) or not value:
            raise ValidationError(field, "Field is required", "empty")


@dataclass(frozen=True)
class Custom(FieldConstraint):
    """A string accepted by a predicate."""

    predicate: Callable[[str], bool]

    def check(self, field: str, value: Any) -> None:
        if isinstance(value, str) and not self.predicate(value):
            raise ValidationError(field, "Custom validation failed", value)


def _default_constraints() -> dict[str, FieldConstraint]:
    return {
        "system.sampling_rate_hz": IntRange(
            Signal.MIN_SAMPLING_RATE_HZ, Signal.MAX_SAMPLING_RATE_HZ
        ),
        "system.channel_count": IntRange(1, Signal.MAX_CHANNEL_COUNT),
        "system.latency_target_ms": IntRange(
            Performance.MIN_LATENCY_TARGET_MS, Performance.MAX_LATENCY_TARGET_MS
        ),
        "hal.connection_timeout_ms": IntRange(100, 60000),
        "hal.retry_attempts": IntRange(0, Hal.MAX_RETRY_ATTEMPTS),
        "processing.filter_bank.highpass_cutoff_hz": Range(0.1, 1000.0),
        "processing.filter_bank.lowpass_cutoff_hz": Range(10.0, 5000.0),
        "processing.filter_bank.filter_order": IntRange(
            Filters.MIN_FILTER_ORDER, Filters.MAX_FILTER_ORDER
        ),
        "processing.quality_monitoring.snr_threshold_db": Range(
            Quality.MIN_SNR_THRESHOLD_DB, Quality.MAX_SNR_THRESHOLD_DB
        ),
        "processing.quality_monitoring.saturation_threshold": Range(0.1, 1.0),
        "processing.windowing.window_size_samples": IntRange(
            Windowing.MIN_WINDOW_SIZE, Windowing.MAX_WINDOW_SIZE
        ),
        "processing.windowing.overlap_percent": Range(
            Windowing.MIN_OVERLAP_PERCENT, Windowing.MAX_OVERLAP_PERCENT
        ),
        "hal.device_type": OneOf(("simulator", "usb", "serial", "bluetooth")),
        "system.thread_priority": OneOf(("normal", "high", "realtime")),
    }


class SchemaValidator:
    """Checks configuration tables against per-field constraints."""

    def __init__(self) -> None:
        self.constraints: dict[str, FieldConstraint] = _default_constraints()

    def validate_field(self, field_path: str, value: Any) -> None:
        """Raise ValidationError if a known field breaks its constraint."""
        constraint = self.constraints.get(field_path)
        if constraint is not None:
            constraint.check(field_path, value)

    def validate_config(self, config: Any) -> None:
        """Raise ValidationErrors listing every failing field."""
        errors: list[ValidationError] = []
        self._validate_recursive("", config, errors)
        if errors:
            raise ValidationErrors(errors)

    def validate_dependencies(self, config: Any) -> None:
        """Raise ValidationErrors when related fields disagree."""
        errors: list[ValidationError] = []
        highpass = self._nested(config, "processing.filter_bank.highpass_cutoff_hz")
        lowpass = self._nested(config, "processing.filter_bank.lowpass_cutoff_hz")
        if _is_float(highpass) and _is_float(lowpass) and highpass >= lowpass:
            errors.append(
                ValidationError(
                    "processing.filter_bank",
                    "Highpass cutoff must be less than lowpass cutoff",
                    f"hp: {_fmt(highpass)}, lp: {_fmt(lowpass)}",
                )
            )

        sample_rate = self._nested(config, "system.sampling_rate_hz")
        if _is_integer(sample_rate) and _is_float(lowpass):
            nyquist = sample_rate / 2.0
            if lowpass >= nyquist:
                errors.append(
                    ValidationError(
                        "processing.filter_bank.lowpass_cutoff_hz",
                        "Lowpass cutoff must be less than Nyquist frequency",
                        f"cutoff: {_fmt(lowpass)}, nyquist: {_fmt(nyquist)}",
                    )
                )

        if errors:
            raise ValidationErrors(errors)

    def _validate_recursive(
        self, prefix: str, value: Any, errors: list[ValidationError]
    ) -> None:
        if isinstance(value, Mapping):
            for key, item in value.items():
                path = f"{prefix}.{key}" if prefix else str(key)
                try:
                    self.validate_field(path, item)
                except ValidationError as error:
                    errors.append(error)
                self._validate_recursive(path, item, errors)
        else:
            try:
                self.validate_field(prefix, value)
            except ValidationError as error:
                errors.append(error)

    @staticmethod
    def _nested(config: Any, path: str) -> Any:
        current = config
        for part in path.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return None
            current = current[part]
        return current