"""Errors raised by the application layer."""


class PermissionDenied(Exception):
    """Contact access was denied or restricted. Terminal for the session."""


class ConfigMissing(ValueError):
    """The menu configuration resource could not be located or parsed."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
