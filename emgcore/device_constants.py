"""Device, transport and simulator constants."""

import math


class Hal:
    """Hardware abstraction layer defaults."""

    DEFAULT_CONNECTION_TIMEOUT_MS = 5000
    DEFAULT_RETRY_ATTEMPTS = 3
    MAX_RETRY_ATTEMPTS = 10
    DEVICE_DISCOVERY_TIMEOUT_MS = 10000
    MAX_CONNECTION_TIMEOUT_MS = 30000

    RETRY_INITIAL_DELAY_MS = 100
    RETRY_MAX_DELAY_MS = 5000
    RETRY_MULTIPLIER = 2.0

    DEFAULT_MIN_CHANNELS = 1

    DEFAULT_NOISE_LEVEL = 0.1
    DEFAULT_ARTIFACT_PROBABILITY = 0.02
    DEFAULT_GESTURE_DURATION_MS = 1000
    DEFAULT_POWERLINE_FREQ_HZ = 50.0
    DEFAULT_AMPLITUDE_RANGE_MV = (-2500.0, 2500.0)
    DEFAULT_BASE_IMPEDANCE_KOHM = 10.0

    DEFAULT_USB_VENDOR_ID = 0x1234
    DEFAULT_USB_PRODUCT_ID = 0x5678
    DEFAULT_USB_INTERFACE = 0
    DEFAULT_USB_TIMEOUT_MS = 1000
    DEFAULT_USB_BUFFER_SIZE = 4096
    DEFAULT_USB_PACKET_SIZE = 512
    DEFAULT_USB_BUFFER_COUNT = 4
    MAX_USB_TIMEOUT_MS = 10000
    MAX_USB_BUFFER_SIZE = 1_048_576
    DEFAULT_USB_DATA_IN_ENDPOINT = 0x81
    DEFAULT_USB_CONTROL_ENDPOINT = 0x00

    DEFAULT_PACKET_HEADER_SIZE = 8
    MAX_PACKET_LOSS_PERCENT = 5.0
    USB_IDLE_TIMEOUT_SEC = 300

    DEFAULT_SERIAL_PORT = "/dev/ttyUSB0"
    DEFAULT_BAUD_RATE = 115200
    MIN_BAUD_RATE = 300
    MAX_BAUD_RATE = 3_000_000
    DEFAULT_DATA_BITS = 8
    DEFAULT_SERIAL_TIMEOUT_MS = 1000
    DEFAULT_SERIAL_RX_BUFFER_SIZE = 8192
    DEFAULT_SERIAL_TX_BUFFER_SIZE = 1024
    DEFAULT_MAX_FRAME_SIZE = 2048
    DEFAULT_FRAME_TIMEOUT_MS = 100

    DEFAULT_BT_SERVICE_UUID = "12345678-1234-1234-1234-123456789abc"
    DEFAULT_BT_DATA_CHAR_UUID = "87654321-4321-4321-4321-cba987654321"
    DEFAULT_BT_CONNECTION_TIMEOUT_MS = 10000
    DEFAULT_BT_SCAN_TIMEOUT_MS = 30000
    DEFAULT_BT_CONNECTION_INTERVAL_MS = 15.0
    DEFAULT_BT_MTU = 247
    MIN_BT_MTU = 23
    MAX_BT_MTU = 512


class Communication:
    """Communication layer defaults."""

    DEFAULT_SHARED_MEMORY_SIZE_MB = 64
    DEFAULT_MESSAGE_QUEUE_SIZE = 1024
    MAX_MESSAGE_SIZE_BYTES = 65536
    HEARTBEAT_INTERVAL_MS = 1000


class Simulation:
    """Signal simulator defaults and limits."""

    DEFAULT_NOISE_LEVEL = 0.05
    DEFAULT_ARTIFACT_PROBABILITY = 0.02
    DEFAULT_GESTURE_DURATION_MS = 1000
    MIN_NOISE_LEVEL = 0.0
    MAX_NOISE_LEVEL = 1.0
    MIN_ARTIFACT_PROBABILITY = 0.0
    MAX_ARTIFACT_PROBABILITY = 1.0

    MIN_GESTURE_DURATION_MS = 100
    MAX_GESTURE_DURATION_MS = 10000
    SIMULATOR_TIMESTAMP_PRECISION_NANOS = 1000

    DEFAULT_MUSCLE_ACTIVATION_THRESHOLD = 0.1
    MAX_MUSCLE_ACTIVATION_LEVEL = 1.0
    MIN_MUSCLE_ACTIVATION_LEVEL = 0.0
    DEFAULT_MUSCLE_FREQ_LOW_HZ = 20.0
    DEFAULT_MUSCLE_FREQ_HIGH_HZ = 150.0

    POWERLINE_NOISE_AMPLITUDE = 0.02
    POWERLINE_PHASE_INCREMENT = 2.0 * math.pi

    MIN_ARTIFACT_INTERVAL_NANOS = 50_000_000
    MAX_ARTIFACT_AMPLITUDE = 0.5
    THERMAL_NOISE_FACTOR = 1.0
    CHANNEL_ARTIFACT_SCALING = 1.0


class Serial:
    """Serial protocol defaults and limits."""

    DEFAULT_BAUD_RATE = 115200
    MIN_BAUD_RATE = 9600
    MAX_BAUD_RATE = 4_000_000

    DEFAULT_DATA_BITS = 8
    MIN_DATA_BITS = 5
    MAX_DATA_BITS = 8

    DEFAULT_STOP_BITS = 1
    MIN_STOP_BITS = 1
    MAX_STOP_BITS = 2

    DEFAULT_HEADER_BYTES = bytes((0xAA, 0x55, 0xA5, 0x5A))
    DEFAULT_FOOTER_BYTES = bytes((0xDE, 0xAD))
    DEFAULT_BYTES_PER_CHANNEL = 4

    DEFAULT_TIMEOUT_MS = 1000
    MIN_TIMEOUT_MS = 10
    MAX_TIMEOUT_MS = 60000

    MIN_PACKET_HEADER_SIZE = 2
    MAX_PACKET_HEADER_SIZE = 8
    CHECKSUM_SIZE_BYTES = 1
    CRC16_SIZE_BYTES = 2

    CRC8_POLYNOMIAL = 0x07
    CRC8_INIT_VALUE = 0xFF
    CRC16_POLYNOMIAL = 0x1021
    CRC16_INIT_VALUE = 0xFFFF

    ADC_8BIT_SCALE = 128.0
    ADC_16BIT_SCALE = 32768.0
    ADC_24BIT_SCALE = 8388608.0
    ADC_24BIT_SIGN_MASK = 0x80
    ADC_24BIT_SIGN_EXTEND = 0xFF

    PACKET_SYNC_TIMEOUT_MS = 100
    INTER_PACKET_GAP_MS = 1
    MAX_PACKET_AGE_MS = 1000

    MAX_CONSECUTIVE_ERRORS = 10
    ERROR_RECOVERY_DELAY_MS = 100
    CHECKSUM_MISMATCH_THRESHOLD = 5

    MAX_CHANNELS_PER_PACKET = 32
    MIN_CHANNELS_PER_PACKET = 1
    DEFAULT_CHANNEL_MAPPING = (0, 1, 2, 3, 4, 5, 6, 7)


class Usb:
    """USB transport defaults."""

    DEFAULT_VENDOR_ID = 0x1234
    DEFAULT_PRODUCT_ID = 0x5678
    DEFAULT_USB_TIMEOUT_MS = 1000
    USB_BULK_TRANSFER_SIZE = 64
    USB_MAX_PACKET_SIZE = 512

    DEFAULT_BULK_IN_ENDPOINT = 0x81
    DEFAULT_BULK_OUT_ENDPOINT = 0x02
    DEFAULT_INTERRUPT_ENDPOINT = 0x83

    USB_SELF_POWERED = True
    USB_MAX_POWER_MA = 500
    USB_REMOTE_WAKEUP = False