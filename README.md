# emgcore

This package manages configuration for real-time EMG (electromyography)
processing, as used in prosthetic control. It has four parts:

- typed configuration objects;
- a schema validator;
- a layered TOML loader with hot reload;
- the system's named constants.

## Modules

- `emgcore.system_config`: `SystemConfig` holds the whole configuration. It has
  four sections:
  - `system`: `SystemSettings`
  - `hal`: `HalConfig`
  - `processing`: `ProcessingConfig`
  - `communication`: `CommunicationConfig`

  The enums are `DeviceType` and `ThreadPriority`.
- `emgcore.processing_config`: `ProcessingConfig` with `FilterBankConfig`,
  `NotchFilterConfig`, `QualityConfig` and `WindowingConfig`, the `FilterType`
  and `WindowType` enums, and `validate_processing_config`.
- `emgcore.schema_validator`: `SchemaValidator` and the constraint types
  `Range`, `IntRange`, `OneOf`, `MinLength`, `MaxLength`, `Required` and
  `Custom`.
- `emgcore.loader`: `ConfigLoader`, `discover_config_paths` and the
  `ConfigError` hierarchy.
- Constant modules:
  - `emgcore.constants`: `Signal`, `Performance`, `Filters`, `Quality`,
    `Windowing`, `Buffers` and `Paths`.
  - `emgcore.device_constants`: `Hal`, `Communication`, `Simulation`, `Serial`
    and `Usb`.
  - `emgcore.limits_constants`: `Validation`, `Errors`, `Testing` and `Bounds`.
  - `emgcore.numeric_constants`: `Integrity`, `Conversion` and `Time`.
  - `emgcore.processing_constants`: module-level feature-extraction and filter
    constants.

## Installation

```
pip install .
pip install ".[test]"   # with pytest
```

## Usage

### Configuration objects

```python
from emgcore.system_config import SystemConfig, ConsistencyError

config = SystemConfig()                  # all defaults
print(config.get_summary())              # ConfigSummary dataclass
print(config.get_effective_buffer_size())
print(config.is_realtime_capable())

try:
    config.validate_consistency()
except ConsistencyError as exc:
    print(exc.errors)

data = config.to_dict()                  # plain nested dict
same = SystemConfig.from_dict(data)
```

`validate_consistency` checks three things:

- the buffer must hold one latency window of samples;
- the lowpass cutoff must be below the Nyquist frequency;
- every notch frequency must be below the Nyquist frequency.

It collects every problem it finds before it raises.

`SystemConfig.from_dict` requires all four sections. Missing fields in
`system`, `hal` and `communication` take their defaults. Every field of the
`processing` section is required. Malformed values raise `ValueError`, and
`ProcessingConfigError` is a subclass of it.

`validate_processing_config(config)` raises `ProcessingConfigError` on the
first invalid processing setting.

### Schema validation

```python
from emgcore.schema_validator import SchemaValidator, ValidationError, ValidationErrors

validator = SchemaValidator()
validator.validate_field("system.sampling_rate_hz", 2000)     # passes
try:
    validator.validate_field("hal.device_type", "invalid_device")
except ValidationError as exc:
    print(exc.field, exc.message, exc.value)

try:
    validator.validate_config({"system": {"sampling_rate_hz": 50}})
except ValidationErrors as exc:
    for error in exc:
        print(error)
```

Each constraint checks only values of its own type:

- `Range` checks floats only.
- `IntRange` checks integers only.
- `OneOf`, `MinLength`, `MaxLength` and `Custom` check strings only.

A value of any other type passes. Fields with no constraint always pass.

`validate_dependencies` checks two relations between fields: the highpass cutoff
must be less than the lowpass cutoff, and the lowpass cutoff must be less than
half the sampling rate.

### Loading configuration

```python
from emgcore.loader import ConfigLoader, ConfigError

with ConfigLoader(["config/default.toml", "config/local.toml"]) as loader:
    config = loader.load_system_config()
    loader.validate_config_file("config/local.toml")
    loader.export_config("exported.toml")
    print(loader.get_config_timestamps())
```

`ConfigLoader()` with no arguments uses `discover_config_paths()`. Those paths
are, from lowest to highest precedence:

1. `/etc/emg/config.toml`
2. `~/.config/emg/config.toml`
3. `config/default.toml`
4. `config.toml`
5. `config/local.toml`

The loader builds the configuration in this order:

1. It starts from the defaults.
2. It merges each existing file over them.
3. It applies environment overrides.
4. It validates the result against the schema and the field dependencies.

`export_config` writes the current configuration as TOML. This is the defaults
until a configuration has been loaded.

Environment overrides work like this:

- Every variable whose name starts with `EMG_` is applied.
- To get the key, the prefix is removed, the rest is lower-cased, and *every*
  underscore becomes a path separator. For example, `EMG_SYSTEM_SAMPLING_RATE_HZ`
  sets `system.sampling.rate.hz`, not `system.sampling_rate_hz`. Field names
  that contain underscores therefore cannot be reached this way.
- Values are read, in this order, as an integer, a float, `true`/`false`, or
  otherwise a string.

Errors are subclasses of `ConfigError`:

| Error | Raised when |
| --- | --- |
| `ConfigFileNotFoundError` | a configuration file is missing |
| `ConfigParseError` | TOML syntax is bad, or the merged data cannot be turned into a `SystemConfig` |
| `ConfigValidationError` | schema errors are found; `.errors` holds them all |
| `ConfigIoError` | a file cannot be read or written |
| `ConfigWatcherError` | the file watcher cannot start |

### Hot reload

```python
loader.enable_hot_reload(lambda cfg: print("reloaded", cfg.get_summary()))
...
loader.close()
```

The loader watches the directories that hold the configuration paths, but only
those directories that exist. When a configuration file is created, modified or
moved into place, the loader waits half a second and then reloads. It then calls
the callback with the new `SystemConfig`. If a reload fails, the error is logged
and the previous configuration is kept. `reload()` reloads immediately and also
calls the callback.

## What this package does not do

This package covers configuration and constants only. It does not include:

- device drivers;
- signal acquisition, sample buffering or channel synchronisation;
- filtering or feature extraction;
- a command-line program.

The `hal.simulator` and `hal.usb` tables are kept as plain dictionaries and are
not interpreted.

## Running the tests

```
pytest
```