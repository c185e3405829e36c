"""Exception hierarchy shared by stores, services and routers."""
from __future__ import annotations


class ShelterError(Exception):
    """Base class for shelter-specific exceptions."""


class StorageUnavailable(ShelterError):
    """A record store could not be read, parsed or written."""

    def __init__(self, message: str, *, location: str = ""):
        super().__init__(message)
        self.message = message
        self.location = location


class AuthenticationRequired(ShelterError):
    """Raised by the session gate when no signed-in user is present."""

    def __init__(self, login_path: str = "/login"):
        super().__init__("authentication required")
        self.login_path = login_path
