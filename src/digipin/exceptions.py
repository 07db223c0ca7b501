"""Custom exceptions for the digipin library."""


class DigipinError(Exception):
    """Base exception for all digipin errors."""
    pass


class ConfigurationError(DigipinError):
    """Raised when a codec configuration or grid spec is invalid."""
    pass


class InvalidCoordinateError(DigipinError, ValueError):
    """Raised when latitude/longitude fall outside their global ranges."""

    def __init__(self, latitude: float, longitude: float, reason: str):
        self.latitude = latitude
        self.longitude = longitude
        self.reason = reason
        super().__init__(f"Invalid coordinate ({latitude}, {longitude}): {reason}")


class OutOfBoundsError(DigipinError):
    """Raised when a coordinate lies outside the encodable region."""

    def __init__(self, coordinate, bounds):
        self.coordinate = coordinate
        self.bounds = bounds
        super().__init__(f"Coordinate {coordinate} is outside valid bounds {bounds}")


class InvalidFormatError(DigipinError, ValueError):
    """Raised when a code has the wrong length or a disallowed character."""

    def __init__(self, code: str, reason: str):
        self.code = code
        self.reason = reason
        super().__init__(f"Invalid DIGIPIN code format '{code}': {reason}")
