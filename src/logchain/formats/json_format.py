"""
JSON and Logstash serialization formats.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..errors import SerializationError
from ..schemas.log_info import INTERNAL_KEYS, LogInfo
from .base import Format

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    """
    Serialize a value to compact JSON.

    Args:
        value: JSON compatible value

    Returns:
        JSON text without insignificant whitespace

    Raises:
        SerializationError: If the value holds anything JSON cannot represent,
            including NaN and infinities
    """
    try:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize log record: {e}") from e


class JsonFormat(Format):
    """
    Replaces the message with a JSON object of level, message and meta.

    Meta keys are merged into the top level of the object and cleared from
    the record.
    """

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        return LogInfo(info.level, dumps(info.to_flat_value()))


def json_format() -> JsonFormat:
    return JsonFormat()


class LogstashFormat(Format):
    """
    Replaces the message with a Logstash event::

        {"@message": ..., "@timestamp": ..., "@fields": {"level": ..., ...}}

    ``@timestamp`` comes from ``meta['timestamp']`` (which is removed from
    meta). Integer timestamps are read as epoch seconds; anything else
    unusable, or a missing timestamp, falls back to the current time.
    """

    def _timestamp(self, value: Any) -> str:
        if value is None:
            return datetime.now(timezone.utc).isoformat()

        if isinstance(value, str):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value, timezone.utc).isoformat()
            except (OverflowError, OSError, ValueError):
                logger.warning(f"Invalid epoch seconds for timestamp: {value}")
                return datetime.now(timezone.utc).isoformat()

        logger.warning(f"Unexpected type for timestamp: {type(value).__name__}")
        return datetime.now(timezone.utc).isoformat()

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        meta = dict(info.meta)
        stamp = self._timestamp(meta.pop('timestamp', None))

        fields = {'level': info.level}
        fields.update({key: value for key, value in meta.items() if key not in INTERNAL_KEYS})

        event = {
            '@message': info.message,
            '@timestamp': stamp,
            '@fields': fields
        }
        return LogInfo(info.level, dumps(event), meta)


def logstash() -> LogstashFormat:
    return LogstashFormat()
