# smoke_alarm/errors.py
from typing import Optional


class SmokeAlarmError(Exception):
    """Base class for everything this package raises."""


class InvalidMeasurement(SmokeAlarmError):
    """A single pollutant reading that cannot be turned into an AQI."""

    def __init__(self, key: str, reason: str = "invalid measurement"):
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason


class UnitConversionError(InvalidMeasurement):
    pass


class ConfigurationError(SmokeAlarmError):
    pass


class ProviderError(SmokeAlarmError):
    """Upstream API failed, or answered with something we can't read."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LocationNotFound(ProviderError):
    pass
