"""
Exception types raised by logchain.
Dropping a record is never an error: a format returns None instead.
"""


class LogChainError(Exception):
    """Base class for all logchain errors."""


class ConfigurationError(LogChainError, ValueError):
    """A format or chain was configured with invalid options."""


class SerializationError(LogChainError, TypeError):
    """A record carries a value that cannot be serialized."""


class FormatError(LogChainError):
    """A format received or produced a value it cannot work with."""


class RecordParseError(LogChainError, ValueError):
    """Text or a decoded value could not be turned into a LogInfo."""
