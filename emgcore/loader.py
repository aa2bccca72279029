"""Layered configuration loading with validation and hot reload."""

from __future__ import annotations

import copy
import logging
import os
import re
import sys
import threading
import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import tomli_w
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from emgcore.constants import Paths
from emgcore.schema_validator import SchemaValidator, ValidationError, ValidationErrors
from emgcore.system_config import SystemConfig

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigIoError",
    "ConfigWatcherError",
    "ConfigLoader",
    "discover_config_paths",
]

_log = logging.getLogger(__name__)

_ENV_PREFIX = "EMG_"
_DEBOUNCE_SECONDS = 0.5
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class ConfigError(Exception):
    """Base class for configuration loading errors."""


class ConfigFileNotFoundError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigParseError(ConfigError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Configuration parse error: {message}")


class ConfigValidationError(ConfigError):
    """Carries every schema error found."""

    def __init__(self, errors: Iterable[ValidationError]) -> None:
        self.errors = list(errors)
        lines = "".join(f"\n  {error}" for error in self.errors)
        super().__init__(f"Configuration validation errors: {lines}")


class ConfigIoError(ConfigError):
    def __init__(self, message: str) -> None:
        super().__init__(f"IO error: {message}")


class ConfigWatcherError(ConfigError):
    def __init__(self, message: str) -> None:
        super().__init__(f"File watcher error: {message}")


def _home_dir() -> Path | None:
    variable = "USERPROFILE" if sys.platform == "win32" else "HOME"
    value = os.environ.get(variable)
    return Path(value) if value else None


def discover_config_paths() -> list[Path]:
    """Configuration files in increasing order of precedence."""
    paths = [Path(Paths.SYSTEM_CONFIG_PATH)]
    home = _home_dir()
    if home is not None:
        paths.append(home / Paths.USER_CONFIG_DIR / "config.toml")
    paths.append(Path(Paths.DEFAULT_CONFIG_FILE))
    paths.append(Path(Paths.LOCAL_CONFIG_FILE))
    paths.append(Path("config/local.toml"))
    return paths


def _merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> None:
    for key, value in overlay.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        elif isinstance(value, Mapping):
            base[key] = copy.deepcopy(dict(value))
        else:
            base[key] = value


def _parse_env_value(value: str) -> Any:
    if _INT_PATTERN.fullmatch(value):
        number = int(value)
        if _I64_MIN <= number <= _I64_MAX:
            return number
    if value and value == value.strip() and "_" not in value:
        try:
            return float(value)
        except ValueError:
            pass
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _set_nested(config: dict[str, Any], path: str, value: Any) -> None:
    *parents, last = path.split(".")
    current: Any = config
    for part in parents:
        if not isinstance(current, dict):
            return
        current = current.setdefault(part, {})
    if isinstance(current, dict):
        current[last] = value


class _ReloadHandler(FileSystemEventHandler):
    def __init__(self, loader: ConfigLoader) -> None:
        self._loader = loader

    def on_modified(self, event: FileSystemEvent) -> None:
        self._loader._on_file_event(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._loader._on_file_event(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._loader._on_file_event(event, getattr(event, "dest_path", None))


class ConfigLoader:
    """Merges defaults, configuration files and environment overrides."""

    def __init__(self, paths: Iterable[str | os.PathLike[str]] | None = None) -> None:
        self.config_paths: list[Path] = (
            discover_config_paths() if paths is None else [Path(p) for p in paths]
        )
        self.schema_validator = SchemaValidator()
        self._current = SystemConfig()
        self._lock = threading.RLock()
        self._callback: Callable[[SystemConfig], None] | None = None
        self._observer: Any = None
        self._timer: threading.Timer | None = None

    def __enter__(self) -> ConfigLoader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def load_system_config(self) -> SystemConfig:
        """Load, validate and remember the merged configuration."""
        config = self._load_and_merge()
        with self._lock:
            self._current = copy.deepcopy(config)
        return config

    def get_current_config(self) -> SystemConfig:
        with self._lock:
            return copy.deepcopy(self._current)

    def enable_hot_reload(self, callback: Callable[[SystemConfig], None]) -> None:
        """Watch the configuration files and call back with each new configuration."""
        self._callback = callback
        if self._observer is not None:
            return
        observer = Observer()
        handler = _ReloadHandler(self)
        watched: set[str] = set()
        for path in self.config_paths:
            parent = os.path.abspath(path.parent)
            if parent in watched or not os.path.isdir(parent):
                continue
            try:
                observer.schedule(handler, parent, recursive=False)
            except OSError:
                continue
            watched.add(parent)
        try:
            observer.start()
        except (OSError, RuntimeError) as exc:
            raise ConfigWatcherError(str(exc)) from exc
        self._observer = observer

    def reload(self) -> SystemConfig:
        """Reload now and notify the hot-reload callback, if any."""
        config = self.load_system_config()
        self._notify(config)
        return config

    def validate_config_file(self, path: str | os.PathLike[str]) -> None:
        """Raise ConfigError if the file cannot be read, parsed or validated."""
        data = self._read_toml(Path(path))
        self._validate(data)

    def export_config(self, path: str | os.PathLike[str]) -> None:
        """Write the current configuration as TOML."""
        content = tomli_w.dumps(self.get_current_config().to_dict())
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ConfigIoError(str(exc)) from exc

    def get_config_timestamps(self) -> list[tuple[Path, datetime | None]]:
        """Modification time of each configuration path, or None if unavailable."""
        result: list[tuple[Path, datetime | None]] = []
        for path in self.config_paths:
            try:
                mtime = path.stat().st_mtime
            except OSError:
                result.append((path, None))
            else:
                result.append((path, datetime.fromtimestamp(mtime, tz=timezone.utc)))
        return result

    def close(self) -> None:
        """Stop watching files."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def _notify(self, config: SystemConfig) -> None:
        callback = self._callback
        if callback is not None:
            callback(copy.deepcopy(config))

    def _on_file_event(self, event: FileSystemEvent, dest: Any = None) -> None:
        if event.is_directory:
            return
        targets = {os.path.abspath(p) for p in self.config_paths}
        changed = {os.path.abspath(os.fsdecode(event.src_path))}
        if dest:
            changed.add(os.path.abspath(os.fsdecode(dest)))
        if not targets & changed:
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(_DEBOUNCE_SECONDS, self._reload_from_watcher)
            self._timer.daemon = True
            self._timer.start()

    def _reload_from_watcher(self) -> None:
        try:
            self.reload()
        except ConfigError as exc:
            _log.error("Failed to reload config: %s", exc)

    def _read_toml(self, path: Path) -> dict[str, Any]:
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigIoError(str(exc)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigIoError(str(exc)) from exc
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigParseError(str(exc)) from exc

    def _load_file(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise ConfigFileNotFoundError(str(path))
        return self._read_toml(path)

    def _validate(self, data: Mapping[str, Any]) -> None:
        try:
            self.schema_validator.validate_config(data)
            self.schema_validator.validate_dependencies(data)
        except ValidationErrors as exc:
            raise ConfigValidationError(exc.errors) from exc

    def _apply_environment_overrides(self, config: dict[str, Any]) -> None:
        for key, value in os.environ.items():
            if key.startswith(_ENV_PREFIX):
                path = key[len(_ENV_PREFIX):].lower().replace("_", ".")
                _set_nested(config, path, _parse_env_value(value))

    def _load_and_merge(self) -> SystemConfig:
        merged: dict[str, Any] = {}
        _merge(merged, SystemConfig().to_dict())
        for path in self.config_paths:
            if not path.exists():
                continue
            try:
                _merge(merged, self._load_file(path))
            except ConfigFileNotFoundError:
                continue
        self._apply_environment_overrides(merged)
        self._validate(merged)
        try:
            return SystemConfig.from_dict(merged)
        except (ValueError, TypeError, AttributeError) as exc:
            raise ConfigParseError(f"Failed to deserialize config: {exc}") from exc