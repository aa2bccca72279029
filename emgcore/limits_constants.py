"""Validation, error handling, testing and bounds constants."""


class Validation:
    """Limits used when validating configuration and inputs."""

    MAX_CONFIG_FILE_SIZE_BYTES = 1_048_576
    MAX_FIELD_NAME_LENGTH = 64
    MAX_STRING_VALUE_LENGTH = 256
    MAX_ARRAY_LENGTH = 1000

    VALIDATION_MAX_ERRORS = 100
    VALIDATION_TIMEOUT_MS = 5000

    FLOAT_EPSILON = 1e-6
    DOUBLE_EPSILON = 1e-12
    MAX_PERCENTAGE = 100.0
    MIN_PERCENTAGE = 0.0

    MAX_VALIDATION_RECURSION_DEPTH = 10
    VALIDATION_CACHE_SIZE = 1000
    MAX_VALIDATION_ITERATIONS = 100

    MIN_DEVICE_ID_LENGTH = 1
    MAX_DEVICE_ID_LENGTH = 64
    MIN_PORT_NAME_LENGTH = 1
    MAX_PORT_NAME_LENGTH = 256

    TIMESTAMP_PRECISION_NANOS = 1000
    FREQUENCY_PRECISION_HZ = 0.1
    AMPLITUDE_PRECISION_UV = 0.1

    MAX_CROSS_VALIDATION_FIELDS = 10
    CROSS_VALIDATION_TIMEOUT_MS = 100


class Errors:
    """Error reporting, retry and recovery constants."""

    MAX_ERROR_MESSAGE_LENGTH = 512
    MAX_ERROR_CONTEXT_DEPTH = 10
    ERROR_TRACE_BUFFER_SIZE = 1000

    DEFAULT_ERROR_RETRY_COUNT = 3
    MAX_ERROR_RETRY_COUNT = 10
    ERROR_RETRY_BACKOFF_MS = 100
    ERROR_RETRY_MAX_DELAY_MS = 5000

    ERROR_SEVERITY_FATAL = 4
    ERROR_SEVERITY_ERROR = 3
    ERROR_SEVERITY_WARNING = 2
    ERROR_SEVERITY_INFO = 1
    ERROR_SEVERITY_DEBUG = 0

    MAX_ERROR_RECOVERY_ATTEMPTS = 5
    ERROR_RECOVERY_EXPONENTIAL_BASE = 2.0
    ERROR_RECOVERY_MAX_DELAY_SECONDS = 60

    ERROR_AGGREGATION_WINDOW_SECONDS = 60
    MAX_ERRORS_PER_WINDOW = 100
    ERROR_RATE_THRESHOLD_PER_SECOND = 1.0


class Testing:
    """Settings for test signals and mock devices."""

    TEST_SAMPLE_RATE_HZ = 1000
    TEST_CHANNEL_COUNT = 4
    TEST_BUFFER_SIZE = 256
    TEST_TIMEOUT_MS = 100

    TEST_SIGNAL_AMPLITUDE = 0.5
    TEST_SIGNAL_FREQUENCY_HZ = 50.0
    TEST_NOISE_LEVEL = 0.01
    TEST_SAMPLES_COUNT = 1000

    MOCK_DEVICE_LATENCY_MS = 5
    MOCK_PACKET_SIZE = 64
    MOCK_ERROR_RATE = 0.001


class Bounds:
    """Bounds checking and memory safety limits."""

    MAX_ARRAY_INDEX_CHECK_DEPTH = 100
    BOUNDS_CHECK_CACHE_SIZE = 1000
    MAX_SLICE_OPERATIONS_PER_CHECK = 10

    STACK_OVERFLOW_DETECTION_SIZE = 1024
    HEAP_OVERFLOW_DETECTION_SIZE = 4096
    POINTER_ALIGNMENT_BYTES = 8

    RING_BUFFER_MIN_CAPACITY = 2
    RING_BUFFER_MAX_CAPACITY = 1_048_576
    RING_BUFFER_GUARD_SIZE = 64