"""Constants for the signal processing modules."""

# Feature extraction
TIME_DOMAIN_FEATURE_COUNT = 8
FREQUENCY_DOMAIN_BASE_FEATURES = 5
DEFAULT_FFT_SIZE = 256
DEFAULT_FREQUENCY_BANDS: tuple[tuple[float, float], ...] = (
    (20.0, 50.0),  # low frequency muscle activation
    (50.0, 150.0),  # primary EMG range
    (150.0, 300.0),  # high frequency components
    (300.0, 500.0),  # artifacts and noise
)

# Signal processing
DEFAULT_FILTER_ORDER = 4
BUTTERWORTH_Q_FACTOR = 0.707  # 1/sqrt(2)
NOTCH_FILTER_Q = 10.0
POWERLINE_FREQUENCIES: tuple[float, ...] = (50.0, 60.0)

# Window functions
DEFAULT_WINDOW_OVERLAP = 0.5
MIN_WINDOW_SIZE = 64
MAX_WINDOW_SIZE = 2048

# Performance targets
MAX_PROCESSING_LATENCY_MS = 2.0
TARGET_FEATURE_EXTRACTION_TIME_US = 500.0