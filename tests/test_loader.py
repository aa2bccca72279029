import os
import tomllib
from datetime import datetime
from pathlib import Path

import pytest

from emgcore.loader import (
    ConfigFileNotFoundError,
    ConfigIoError,
    ConfigLoader,
    ConfigParseError,
    ConfigValidationError,
    discover_config_paths,
)
from emgcore.system_config import SystemConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("EMG_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("USERPROFILE", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_discover_config_paths(tmp_path):
    paths = discover_config_paths()
    assert paths[0] == Path("/etc/emg/config.toml")
    assert tmp_path / "home" / ".config/emg" / "config.toml" in paths
    assert paths[-3:] == [
        Path("config/default.toml"),
        Path("config.toml"),
        Path("config/local.toml"),
    ]


def test_config_loader_creation():
    loader = ConfigLoader()
    assert len(loader.config_paths) == 5


def test_load_default_config():
    loader = ConfigLoader(paths=[])
    config = loader.load_system_config()
    assert config.system.sampling_rate_hz == 2000
    assert config.system.channel_count == 8
    assert loader.get_current_config() == config


def test_file_overrides_defaults(tmp_path):
    path = write(tmp_path / "a.toml", "[system]\nsampling_rate_hz = 4000\n")
    config = ConfigLoader(paths=[path]).load_system_config()
    assert config.system.sampling_rate_hz == 4000
    assert config.system.channel_count == 8


def test_later_files_take_precedence_and_missing_are_skipped(tmp_path):
    first = write(tmp_path / "a.toml", "[system]\nsampling_rate_hz = 4000\nchannel_count = 4\n")
    second = write(tmp_path / "b.toml", "[system]\nsampling_rate_hz = 3000\n")
    loader = ConfigLoader(paths=[first, tmp_path / "missing.toml", second])
    config = loader.load_system_config()
    assert config.system.sampling_rate_hz == 3000
    assert config.system.channel_count == 4


def test_invalid_value_in_file(tmp_path):
    path = write(tmp_path / "a.toml", "[system]\nsampling_rate_hz = 50\n")
    with pytest.raises(ConfigValidationError) as info:
        ConfigLoader(paths=[path]).load_system_config()
    assert [e.field for e in info.value.errors] == ["system.sampling_rate_hz"]


def test_dependency_violation(tmp_path):
    path = write(
        tmp_path / "a.toml",
        "[processing.filter_bank]\nhighpass_cutoff_hz = 600.0\nlowpass_cutoff_hz = 500.0\n",
    )
    with pytest.raises(ConfigValidationError) as info:
        ConfigLoader(paths=[path]).load_system_config()
    assert info.value.errors[0].field == "processing.filter_bank"


def test_malformed_toml(tmp_path):
    path = write(tmp_path / "a.toml", "[system\nsampling_rate_hz = \n")
    with pytest.raises(ConfigParseError):
        ConfigLoader(paths=[path]).load_system_config()


def test_config_file_validation(tmp_path):
    loader = ConfigLoader(paths=[])
    valid = write(
        tmp_path / "valid.toml",
        '[system]\nsampling_rate_hz = 2000\nchannel_count = 8\n\n[hal]\ndevice_type = "simulator"\n',
    )
    invalid = write(tmp_path / "invalid.toml", "[system]\nsampling_rate_hz = 50  # Too low\n")
    assert loader.validate_config_file(valid) is None
    with pytest.raises(ConfigValidationError) as info:
        loader.validate_config_file(invalid)
    assert "system.sampling_rate_hz" in str(info.value)


def test_validate_missing_file(tmp_path):
    with pytest.raises(ConfigIoError) as info:
        ConfigLoader(paths=[]).validate_config_file(tmp_path / "nope.toml")
    assert str(info.value).startswith("IO error:")


def test_environment_override_underscores_become_dots(monkeypatch):
    monkeypatch.setenv("EMG_SYSTEM_SAMPLING_RATE_HZ", "4000")
    config = ConfigLoader(paths=[]).load_system_config()
    assert config.system.sampling_rate_hz == 2000


def test_environment_override_replaces_value(monkeypatch):
    monkeypatch.setenv("EMG_HAL_SIMULATOR", "fast")
    with pytest.raises(ConfigParseError) as info:
        ConfigLoader(paths=[]).load_system_config()
    assert "Failed to deserialize config" in str(info.value)


def test_config_export(tmp_path):
    source = write(tmp_path / "a.toml", "[system]\nchannel_count = 16\n")
    loader = ConfigLoader(paths=[source])
    loader.load_system_config()
    out = tmp_path / "out.toml"
    loader.export_config(out)
    content = out.read_text(encoding="utf-8")
    assert "[system]" in content
    restored = SystemConfig.from_dict(tomllib.loads(content))
    assert restored == loader.get_current_config()
    assert restored.system.channel_count == 16


def test_reload_notifies_callback(tmp_path):
    path = write(tmp_path / "conf" / "a.toml", "[system]\nchannel_count = 4\n")
    received = []
    with ConfigLoader(paths=[path]) as loader:
        loader.load_system_config()
        loader.enable_hot_reload(received.append)
        write(path, "[system]\nchannel_count = 12\n")
        result = loader.reload()
    assert result.system.channel_count == 12
    assert received and received[-1].system.channel_count == 12
    assert loader.get_current_config().system.channel_count == 12


def test_config_timestamps(tmp_path):
    existing = write(tmp_path / "a.toml", "")
    missing = tmp_path / "b.toml"
    stamps = dict(ConfigLoader(paths=[existing, missing]).get_config_timestamps())
    assert isinstance(stamps[existing], datetime)
    assert stamps[missing] is None


def test_file_not_found_message():
    error = ConfigFileNotFoundError("x.toml")
    assert str(error) == "Configuration file not found: x.toml"
    assert error.path == "x.toml"