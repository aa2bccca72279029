"""Configuration, schema validation, loading and constants for real-time EMG processing."""

__version__ = "0.1.0"