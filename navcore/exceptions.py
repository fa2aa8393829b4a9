"""
Exception types raised by the navigation core.
"""


class NavCoreError(Exception):
    """Base class for all navcore errors."""


class InvalidSampleError(NavCoreError, ValueError):
    """A sensor vector is degenerate (zero magnitude or non-finite components)."""

    def __init__(self, sensor: str, reason: str):
        self.sensor = sensor
        self.reason = reason
        super().__init__(f"Invalid {sensor} sample: {reason}")


class ConfigError(NavCoreError):
    """Configuration file could not be read or parsed."""
