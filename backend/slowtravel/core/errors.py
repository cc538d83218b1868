from typing import Optional


class SlowTravelError(Exception):
    """Base class for errors raised by the content layer."""


class ConfigurationError(SlowTravelError):
    """A credential or spreadsheet id is missing or unreadable."""


class SheetsError(SlowTravelError):
    """The Sheets API answered with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
