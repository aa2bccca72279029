"""Complete system configuration with consistency checks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from emgcore.constants import Performance, Signal
from emgcore.device_constants import Communication, Hal
from emgcore.processing_config import ProcessingConfig

__all__ = [
    "DeviceType",
    "ThreadPriority",
    "SystemSettings",
    "HalConfig",
    "CommunicationConfig",
    "ConfigSummary",
    "ConsistencyError",
    "SystemConfig",
]


class DeviceType(Enum):
    SIMULATOR = "simulator"
    USB = "usb"
    SERIAL = "serial"
    BLUETOOTH = "bluetooth"


class ThreadPriority(Enum):
    NORMAL = "normal"
    HIGH = "high"
    REALTIME = "realtime"


class ConsistencyError(ValueError):
    """Raised when configuration sections contradict each other."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _fmt(value: float) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _next_power_of_two(value: int) -> int:
    return 1 if value <= 1 else 1 << (value - 1).bit_length()


def _int(data: Mapping[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Field '{key}' must be a non-negative integer")
    return value


def _bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"Field '{key}' must be a boolean")
    return value


def _enum(enum_type: type[Enum], data: Mapping[str, Any], key: str, default: Enum) -> Any:
    value = data.get(key, default)
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValueError(f"Unknown {enum_type.__name__} '{value}' for field '{key}'") from None


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    if key not in data:
        raise ValueError(f"Missing section '{key}'")
    value = data[key]
    if not isinstance(value, Mapping):
        raise ValueError(f"Section '{key}' must be a table")
    return value


def _optional_table(data: Mapping[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"Section '{key}' must be a table")
    return dict(value)


@dataclass
class SystemSettings:
    """Sampling, buffering and scheduling settings."""

    sampling_rate_hz: int = Signal.DEFAULT_SAMPLING_RATE_HZ
    channel_count: int = Signal.DEFAULT_CHANNEL_COUNT
    buffer_size_samples: int = Signal.DEFAULT_BUFFER_SIZE_SAMPLES
    latency_target_ms: int = Performance.DEFAULT_LATENCY_TARGET_MS
    thread_priority: ThreadPriority = ThreadPriority.REALTIME
    enable_safety_monitoring: bool = True
    watchdog_timeout_ms: int = Performance.WATCHDOG_TIMEOUT_MS

    def to_dict(self) -> dict[str, Any]:
        return {
            "sampling_rate_hz": self.sampling_rate_hz,
            "channel_count": self.channel_count,
            "buffer_size_samples": self.buffer_size_samples,
            "latency_target_ms": self.latency_target_ms,
            "thread_priority": self.thread_priority.value,
            "enable_safety_monitoring": self.enable_safety_monitoring,
            "watchdog_timeout_ms": self.watchdog_timeout_ms,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SystemSettings:
        d = cls()
        return cls(
            sampling_rate_hz=_int(data, "sampling_rate_hz", d.sampling_rate_hz),
            channel_count=_int(data, "channel_count", d.channel_count),
            buffer_size_samples=_int(data, "buffer_size_samples", d.buffer_size_samples),
            latency_target_ms=_int(data, "latency_target_ms", d.latency_target_ms),
            thread_priority=_enum(ThreadPriority, data, "thread_priority", d.thread_priority),
            enable_safety_monitoring=_bool(
                data, "enable_safety_monitoring", d.enable_safety_monitoring
            ),
            watchdog_timeout_ms=_int(data, "watchdog_timeout_ms", d.watchdog_timeout_ms),
        )


@dataclass
class HalConfig:
    """Device selection and connection settings.

    The device-specific ``simulator`` and ``usb`` tables are kept as given.
    """

    device_type: DeviceType = DeviceType.SIMULATOR
    connection_timeout_ms: int = Hal.DEFAULT_CONNECTION_TIMEOUT_MS
    retry_attempts: int = Hal.DEFAULT_RETRY_ATTEMPTS
    auto_reconnect: bool = True
    device_scan_timeout_ms: int = Hal.DEVICE_DISCOVERY_TIMEOUT_MS
    simulator: dict[str, Any] | None = None
    usb: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "device_type": self.device_type.value,
            "connection_timeout_ms": self.connection_timeout_ms,
            "retry_attempts": self.retry_attempts,
            "auto_reconnect": self.auto_reconnect,
            "device_scan_timeout_ms": self.device_scan_timeout_ms,
        }
        if self.simulator is not None:
            result["simulator"] = dict(self.simulator)
        if self.usb is not None:
            result["usb"] = dict(self.usb)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HalConfig:
        d = cls()
        return cls(
            device_type=_enum(DeviceType, data, "device_type", d.device_type),
            connection_timeout_ms=_int(data, "connection_timeout_ms", d.connection_timeout_ms),
            retry_attempts=_int(data, "retry_attempts", d.retry_attempts),
            auto_reconnect=_bool(data, "auto_reconnect", d.auto_reconnect),
            device_scan_timeout_ms=_int(
                data, "device_scan_timeout_ms", d.device_scan_timeout_ms
            ),
            simulator=_optional_table(data, "simulator"),
            usb=_optional_table(data, "usb"),
        )


@dataclass
class CommunicationConfig:
    """Inter-process communication settings."""

    shared_memory_size_mb: int = Communication.DEFAULT_SHARED_MEMORY_SIZE_MB
    message_queue_size: int = Communication.DEFAULT_MESSAGE_QUEUE_SIZE
    max_message_size_bytes: int = Communication.MAX_MESSAGE_SIZE_BYTES
    heartbeat_interval_ms: int = Communication.HEARTBEAT_INTERVAL_MS
    enable_compression: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "shared_memory_size_mb": self.shared_memory_size_mb,
            "message_queue_size": self.message_queue_size,
            "max_message_size_bytes": self.max_message_size_bytes,
            "heartbeat_interval_ms": self.heartbeat_interval_ms,
            "enable_compression": self.enable_compression,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CommunicationConfig:
        d = cls()
        return cls(
            shared_memory_size_mb=_int(data, "shared_memory_size_mb", d.shared_memory_size_mb),
            message_queue_size=_int(data, "message_queue_size", d.message_queue_size),
            max_message_size_bytes=_int(
                data, "max_message_size_bytes", d.max_message_size_bytes
            ),
            heartbeat_interval_ms=_int(data, "heartbeat_interval_ms", d.heartbeat_interval_ms),
            enable_compression=_bool(data, "enable_compression", d.enable_compression),
        )


@dataclass(frozen=True)
class ConfigSummary:
    """Short description of a configuration for display or logging."""

    sampling_rate_hz: int
    channel_count: int
    latency_target_ms: int
    device_type: DeviceType
    is_realtime: bool
    buffer_size: int


@dataclass
class SystemConfig:
    """The whole system configuration."""

    system: SystemSettings = field(default_factory=SystemSettings)
    hal: HalConfig = field(default_factory=HalConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    communication: CommunicationConfig = field(default_factory=CommunicationConfig)

    def validate_consistency(self) -> None:
        """Raise ConsistencyError listing every contradiction found."""
        errors: list[str] = []
        system = self.system
        bank = self.processing.filter_bank

        needed = (system.sampling_rate_hz * system.latency_target_ms) // 1000
        if needed > system.buffer_size_samples:
            errors.append(
                "Buffer size too small for latency target: "
                f"need {needed} samples, have {system.buffer_size_samples}"
            )

        nyquist = system.sampling_rate_hz / 2.0
        if bank.lowpass_cutoff_hz >= nyquist:
            errors.append(
                f"Lowpass cutoff ({_fmt(bank.lowpass_cutoff_hz)} Hz) must be less than "
                f"Nyquist frequency ({_fmt(nyquist)} Hz)"
            )

        errors.extend(
            f"Notch filter frequency ({_fmt(freq)} Hz) must be less than "
            f"Nyquist frequency ({_fmt(nyquist)} Hz)"
            for freq in bank.notch_filters.frequencies_hz
            if freq >= nyquist
        )

        if errors:
            raise ConsistencyError(errors)

    def get_effective_buffer_size(self) -> int:
        """Buffer size covering twice the latency window, as a power of two."""
        system = self.system
        min_size = (system.sampling_rate_hz * system.latency_target_ms // 1000) * 2
        return _next_power_of_two(max(system.buffer_size_samples, min_size))

    def is_realtime_capable(self) -> bool:
        system = self.system
        return (
            system.latency_target_ms <= Performance.MAX_LATENCY_TARGET_MS
            and system.thread_priority is ThreadPriority.REALTIME
            and system.enable_safety_monitoring
        )

    def get_summary(self) -> ConfigSummary:
        return ConfigSummary(
            sampling_rate_hz=self.system.sampling_rate_hz,
            channel_count=self.system.channel_count,
            latency_target_ms=self.system.latency_target_ms,
            device_type=self.hal.device_type,
            is_realtime=self.is_realtime_capable(),
            buffer_size=self.get_effective_buffer_size(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionary suitable for TOML or JSON."""
        return {
            "system": self.system.to_dict(),
            "hal": self.hal.to_dict(),
            "processing": self.processing.to_dict(),
            "communication": self.communication.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SystemConfig:
        """Build from a nested mapping; all four sections must be present."""
        return cls(
            system=SystemSettings.from_dict(_table(data, "system")),
            hal=HalConfig.from_dict(_table(data, "hal")),
            processing=ProcessingConfig.from_dict(_table(data, "processing")),
            communication=CommunicationConfig.from_dict(_table(data, "communication")),
        )