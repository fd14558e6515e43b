"""Custom exceptions for the location-tools library."""


class LocationToolsError(Exception):
    """Base exception for all location-tools errors."""
    pass


class InvalidCoordinateError(LocationToolsError, ValueError):
    """Raised when a latitude/longitude pair is non-numeric, non-finite or out of range."""
    pass


class ConfigurationError(LocationToolsError):
    """Raised when configuration is invalid or incomplete."""
    pass


class ServerError(LocationToolsError):
    """Raised when the API server cannot be started or reached."""
    pass
