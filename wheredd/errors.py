"""Exceptions raised by wheredd."""


class WhereddError(Exception):
    """Base class for all wheredd errors."""


class InvalidArgumentError(WhereddError, ValueError):
    """An argument is not one of the accepted values."""


class DataSourceError(WhereddError, RuntimeError):
    """A remote file or release listing could not be fetched or read."""


class UnsupportedFormatError(WhereddError, ValueError):
    """Requested output file format is not supported."""


class DatabaseNotFoundError(WhereddError, FileNotFoundError):
    """No wheredd database (or info record) exists yet."""


class CorruptInfoError(WhereddError):
    """The cached info record exists but cannot be read."""
