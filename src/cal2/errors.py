"""Errors raised by cal2.

Every failure the CLI reports to the user derives from CalError.
"""


class CalError(Exception):
    """Base class for all cal2 errors."""

    pass


class InvalidDateError(CalError):
    """Raised for a month/year/day combination that is not a calendar date."""

    pass


class ConfigError(CalError):
    """Raised for invalid user configuration, such as a bad --country."""

    pass


class CacheError(CalError):
    """Raised when a cache file is oversized or cannot be decoded."""

    pass


class StorageError(CalError):
    """Raised when the cache file cannot be read or written."""

    pass


class HttpError(CalError):
    """Raised when a holiday provider cannot be reached."""

    pass


class JsonError(CalError):
    """Raised when a holiday provider returns an unexpected body."""

    pass
