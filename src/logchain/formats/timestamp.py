"""
Timestamp format: stamps each record with the current UTC time.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from ..errors import ConfigurationError
from ..schemas.log_info import LogInfo
from .base import Format

# strftime directives accepted in a pattern, optionally preceded by a flag
VALID_DIRECTIVES = set('aAbBcCdDeFgGhHIjmMnpPrRsStTuUVwWxXyYzZf%')
DIRECTIVE_PATTERN = re.compile(r'%([-_0^#]?)(.?)', re.DOTALL)


@dataclass(frozen=True)
class TimestampOptions:
    pattern: Optional[str] = None
    alias: Optional[str] = None
    key: str = 'timestamp'


def validate_pattern(pattern: str):
    """
    Check that a strftime pattern only uses known directives.

    Args:
        pattern: strftime pattern

    Raises:
        ConfigurationError: On an unknown or dangling ``%`` directive
    """
    if not isinstance(pattern, str):
        raise ConfigurationError(f"Timestamp pattern must be a string, got {type(pattern).__name__}")

    for match in DIRECTIVE_PATTERN.finditer(pattern):
        directive = match.group(2)
        if not directive:
            raise ConfigurationError(f"Dangling '%' in timestamp pattern {pattern!r}")
        if directive not in VALID_DIRECTIVES:
            raise ConfigurationError(f"Unknown directive '%{directive}' in timestamp pattern {pattern!r}")

    try:
        datetime.now(timezone.utc).strftime(pattern)
    except ValueError as e:
        raise ConfigurationError(f"Invalid timestamp pattern {pattern!r}: {e}") from e


class Timestamp(Format):
    """
    Adds the current time to ``meta[key]``.

    Without a pattern the time is rendered as ISO 8601 with a ``+00:00``
    offset. With an alias the same value is also written under that key.
    """

    def __init__(self, options: Optional[TimestampOptions] = None):
        options = options or TimestampOptions()
        if options.pattern is not None:
            validate_pattern(options.pattern)
        if not options.key:
            raise ConfigurationError("Timestamp key must not be empty")
        self.options = options

    def with_pattern(self, pattern: str) -> 'Timestamp':
        return Timestamp(replace(self.options, pattern=pattern))

    def with_alias(self, alias: str) -> 'Timestamp':
        return Timestamp(replace(self.options, alias=alias))

    def with_key(self, key: str) -> 'Timestamp':
        return Timestamp(replace(self.options, key=key))

    def format_now(self) -> str:
        now = datetime.now(timezone.utc)
        if self.options.pattern is None:
            return now.isoformat()
        return now.strftime(self.options.pattern)

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        stamp = self.format_now()

        meta = dict(info.meta)
        meta[self.options.key] = stamp
        if self.options.alias:
            meta[self.options.alias] = stamp

        return info.replace(meta=meta)


def timestamp(pattern: Optional[str] = None, alias: Optional[str] = None,
              key: str = 'timestamp') -> Timestamp:
    return Timestamp(TimestampOptions(pattern=pattern, alias=alias, key=key))
