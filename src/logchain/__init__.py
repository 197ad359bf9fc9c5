"""
logchain - composable formats for structured log records.

Build a chain of formats once and run every record through it::

    from logchain import LogInfo, chain, json, timestamp

    fmt = chain(timestamp(), json())
    fmt.transform(LogInfo('info', 'hi')).message

A format returning None drops the record.
"""

from .errors import (
    ConfigurationError,
    FormatError,
    LogChainError,
    RecordParseError,
    SerializationError,
)
from .formats import (
    ChainedFormat,
    Format,
    align,
    chain,
    cli,
    colorize,
    create_format,
    json_format,
    label,
    logstash,
    metadata,
    ms,
    pad_levels,
    passthrough,
    pretty_print,
    printf,
    simple,
    timestamp,
    uncolorize,
)
from .schemas.log_info import LogInfo

json = json_format

__version__ = '0.1.0'
