"""
Exceptions raised by EasyCommands.

Malformed executor metadata never raises; only configuration mistakes and
connection failures do.
"""


class EasyCommandsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(EasyCommandsError):
    """Raised for unknown intent/cache flag names or a missing token."""


class ConnectionFailedError(EasyCommandsError):
    """Raised when the gateway stops before the session reports ready."""
