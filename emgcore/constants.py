"""Signal, timing, filtering, quality, windowing, buffer and path constants."""


class Signal:
    """Signal acquisition defaults and limits."""

    DEFAULT_SAMPLING_RATE_HZ = 2000
    DEFAULT_CHANNEL_COUNT = 8
    DEFAULT_BUFFER_SIZE_SAMPLES = 4096
    MIN_SAMPLING_RATE_HZ = 500
    MAX_SAMPLING_RATE_HZ = 10000
    MAX_CHANNEL_COUNT = 32
    MIN_CHANNEL_COUNT = 1

    DEFAULT_ADC_RESOLUTION_BITS = 24
    MIN_ADC_RESOLUTION_BITS = 8
    MAX_ADC_RESOLUTION_BITS = 32

    DEFAULT_INPUT_RANGE_MV = (-2500.0, 2500.0)
    SIGNAL_SATURATION_THRESHOLD = 0.95
    SIGNAL_CLAMP_MIN = -1.0
    SIGNAL_CLAMP_MAX = 1.0

    MIN_SIGNAL_AMPLITUDE = -10.0
    MAX_SIGNAL_AMPLITUDE = 10.0
    DEFAULT_SIGNAL_AMPLITUDE = 0.001
    TYPICAL_EMG_AMPLITUDE_MV = 1.0
    MAX_REASONABLE_EMG_AMPLITUDE_MV = 10.0

    DEFAULT_SAMPLE_FORMAT = "signed_int"
    SUPPORTED_SAMPLE_FORMATS = ("signed_int", "unsigned_int", "float32", "float64")

    EMG_FREQUENCY_RANGE_HZ = (20.0, 500.0)
    POWERLINE_INTERFERENCE_50HZ = 50.0
    POWERLINE_INTERFERENCE_60HZ = 60.0

    MIN_SAMPLE_RATE_HZ = 100
    MAX_SAMPLE_RATE_HZ = 50000


class Performance:
    """Latency, timing and monitoring constants."""

    DEFAULT_LATENCY_TARGET_MS = 20
    MAX_LATENCY_TARGET_MS = 100
    MIN_LATENCY_TARGET_MS = 1
    WATCHDOG_TIMEOUT_MS = 100
    PROCESSING_TIMEOUT_MS = 50

    NANOSECONDS_PER_SECOND = 1_000_000_000
    MICROSECONDS_PER_SECOND = 1_000_000
    MILLISECONDS_PER_SECOND = 1_000

    MIN_SAMPLE_PERIOD_NANOS = NANOSECONDS_PER_SECOND // Signal.MAX_SAMPLING_RATE_HZ
    MAX_SAMPLE_PERIOD_NANOS = NANOSECONDS_PER_SECOND // Signal.MIN_SAMPLING_RATE_HZ

    MONOTONIC_TIME_RESOLUTION_NANOS = 1
    SYSTEM_TIME_RESOLUTION_NANOS = 1000
    TIME_DRIFT_WARNING_THRESHOLD_NANOS = 1_000_000
    TIME_DRIFT_ERROR_THRESHOLD_NANOS = 10_000_000

    PERFORMANCE_SAMPLE_INTERVAL_MS = 1000
    MAX_TIMESTAMP_AGE_SECONDS = 3600
    MIN_TIMESTAMP_AGE_SECONDS = 0


class Filters:
    """Filter defaults and limits."""

    DEFAULT_HIGHPASS_CUTOFF_HZ = 20.0
    DEFAULT_LOWPASS_CUTOFF_HZ = 500.0
    DEFAULT_FILTER_ORDER = 4
    MIN_FILTER_ORDER = 1
    MAX_FILTER_ORDER = 8
    POWERLINE_FREQ_50HZ = 50.0
    POWERLINE_FREQ_60HZ = 60.0
    DEFAULT_NOTCH_BANDWIDTH_HZ = 2.0

    FILTER_SETTLING_TIME_SAMPLES = 100
    MIN_CUTOFF_FREQUENCY_HZ = 1.0
    MAX_CUTOFF_FREQUENCY_HZ = 1000.0


class Quality:
    """Signal quality monitoring thresholds."""

    DEFAULT_SNR_THRESHOLD_DB = 20.0
    MIN_SNR_THRESHOLD_DB = 0.0
    MAX_SNR_THRESHOLD_DB = 60.0
    DEFAULT_CONTACT_IMPEDANCE_MAX_KOHM = 50.0
    DEFAULT_SATURATION_THRESHOLD = 0.95
    ARTIFACT_DETECTION_THRESHOLD = 2.0

    SNR_EXCELLENT_THRESHOLD_DB = 40.0
    SNR_GOOD_THRESHOLD_DB = 25.0
    SNR_POOR_THRESHOLD_DB = 15.0
    IMPEDANCE_EXCELLENT_THRESHOLD_KOHM = 10.0
    IMPEDANCE_GOOD_THRESHOLD_KOHM = 25.0
    IMPEDANCE_POOR_THRESHOLD_KOHM = 50.0

    MOTION_ARTIFACT_VARIANCE_THRESHOLD = 0.25
    MOTION_ARTIFACT_PEAK_THRESHOLD = 0.8
    MIN_ARTIFACT_DURATION_MS = 10
    MAX_ARTIFACT_DURATION_MS = 500

    SIGNAL_QUALITY_EXCELLENT_THRESHOLD = 0.95
    SIGNAL_QUALITY_GOOD_THRESHOLD = 0.80
    SIGNAL_QUALITY_POOR_THRESHOLD = 0.60
    SIGNAL_QUALITY_UNACCEPTABLE_THRESHOLD = 0.40

    QUALITY_ASSESSMENT_WINDOW_SIZE = 1000
    QUALITY_UPDATE_INTERVAL_MS = 100
    QUALITY_HISTORY_LENGTH = 100

    BASELINE_DRIFT_THRESHOLD_UV = 100.0
    POWERLINE_CONTAMINATION_THRESHOLD = 0.1
    EMG_FREQUENCY_CONTENT_THRESHOLD = 0.8


class Windowing:
    """Window sizes, overlap and window function coefficients."""

    DEFAULT_WINDOW_SIZE_SAMPLES = 256
    DEFAULT_OVERLAP_PERCENT = 50.0
    MIN_OVERLAP_PERCENT = 0.0
    MAX_OVERLAP_PERCENT = 99.0
    MIN_WINDOW_SIZE = 16
    MAX_WINDOW_SIZE = 8192

    HANN_WINDOW_ALPHA = 0.5
    HAMMING_WINDOW_ALPHA = 0.54
    HAMMING_WINDOW_BETA = 0.46
    BLACKMAN_WINDOW_A0 = 0.42
    BLACKMAN_WINDOW_A1 = 0.5
    BLACKMAN_WINDOW_A2 = 0.08


class Buffers:
    """Buffer sizing and health thresholds."""

    MIN_BUFFER_SIZE = 64
    MAX_BUFFER_SIZE = 1_048_576
    OVERFLOW_PROTECTION_THRESHOLD = 0.9
    UNDERRUN_THRESHOLD = 0.1
    DEFAULT_RING_BUFFER_CAPACITY = 1024

    BUFFER_UTILIZATION_WARNING_THRESHOLD = 0.8
    BUFFER_UTILIZATION_CRITICAL_THRESHOLD = 0.95
    BUFFER_VARIANCE_THRESHOLD = 0.3
    MIN_BUFFER_SYNC_SAMPLES = 10

    CACHE_LINE_SIZE = 64
    MEMORY_ALIGNMENT = 16
    LOCK_FREE_PADDING = 128


class Paths:
    """File system locations and extensions."""

    SYSTEM_CONFIG_PATH = "/etc/emg/config.toml"
    USER_CONFIG_DIR = ".config/emg"
    LOCAL_CONFIG_FILE = "config.toml"
    DEFAULT_CONFIG_FILE = "config/default.toml"
    SCHEMA_DIR = "schemas"

    LOG_DIR = "logs"
    CACHE_DIR = "cache"
    TEMP_DIR = "tmp"
    BACKUP_DIR = "backups"

    CONFIG_EXTENSION = ".toml"
    LOG_EXTENSION = ".log"
    DATA_EXTENSION = ".emg"
    SCHEMA_EXTENSION = ".json"