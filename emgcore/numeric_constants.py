"""Data integrity, unit conversion and time constants."""

import sys


class Integrity:
    """Corruption detection and checksum settings."""

    CORRUPTION_DETECTION_WINDOW_SIZE = 100
    MAX_CORRUPTION_PATTERNS = 10
    HASH_CACHE_SIZE = 1000

    CHECKSUM_POLYNOMIAL_CRC32 = 0xEDB88320  # IEEE 802.3, reflected
    CHECKSUM_INIT_VALUE_CRC32 = 0xFFFFFFFF
    CHECKSUM_XOR_OUTPUT_CRC32 = 0xFFFFFFFF

    INTEGRITY_CHECK_INTERVAL_PACKETS = 100
    INTEGRITY_VERIFY_TIMEOUT_MS = 10
    MAX_INTEGRITY_ERRORS_PER_SECOND = 10


class Conversion:
    """ADC scaling, unit conversion and sample format constants."""

    ADC_VOLTAGE_REFERENCE_DEFAULT = 3.3
    ADC_GAIN_DEFAULT = 1000.0
    ADC_OFFSET_DEFAULT = 0.0

    VOLTS_TO_MICROVOLTS = 1_000_000.0
    MICROVOLTS_TO_VOLTS = 1.0 / 1_000_000.0
    MILLIVOLTS_TO_VOLTS = 1.0 / 1_000.0
    VOLTS_TO_MILLIVOLTS = 1_000.0

    FLOAT32_EPSILON = 2.0**-23
    FLOAT64_EPSILON = sys.float_info.epsilon
    SIGNED_TO_UNSIGNED_OFFSET_8BIT = 128
    SIGNED_TO_UNSIGNED_OFFSET_16BIT = 32768
    SIGNED_TO_UNSIGNED_OFFSET_24BIT = 8388608

    MAX_CONVERSION_ERROR_PERCENT = 0.01
    CONVERSION_PRECISION_BITS = 16


class Time:
    """Calendar, timestamp validation and clock constants."""

    UNIX_EPOCH_YEAR = 1970
    SECONDS_PER_MINUTE = 60
    SECONDS_PER_HOUR = 3600
    SECONDS_PER_DAY = 86400

    MIN_VALID_TIMESTAMP = 1_000_000_000_000_000_000
    MAX_VALID_TIMESTAMP = 4_000_000_000_000_000_000
    TIMESTAMP_FUTURE_TOLERANCE_SECONDS = 3600

    CLOCK_SYNC_INTERVAL_SECONDS = 300
    CLOCK_DRIFT_CORRECTION_THRESHOLD_NANOS = 1_000_000
    MAX_CLOCK_ADJUSTMENT_NANOS = 100_000_000

    PRECISION_SLEEP_THRESHOLD_NANOS = 1_000_000  # spin-wait below this
    SPIN_WAIT_MAX_ITERATIONS = 1_000_000
    TIMER_RESOLUTION_NANOS = 100