"""Errors raised while locating, opening or scanning a run transcript."""


class RomsLogError(Exception):
    """Base class for all structural parse failures."""


class InvalidArgumentError(RomsLogError, ValueError):
    """No log file, several log files, or something that is not a path."""


class UnreadableError(RomsLogError, OSError):
    """The log file could not be opened for reading."""


class EmptyInputError(RomsLogError):
    """The log file yielded no lines at all."""


class ReadFailureError(RomsLogError, OSError):
    """Reading stopped part way through (truncated or corrupt stream)."""
