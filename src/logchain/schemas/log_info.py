"""
The structured log record that flows through a format chain.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Dict, Any

from ..errors import RecordParseError

# meta keys formats keep for their own bookkeeping; never rendered
PADDED_KEY = '_padded'
INTERNAL_KEYS = (PADDED_KEY,)


@dataclass(frozen=True)
class LogInfo:
    """
    A single log entry: level, message and an open bag of metadata.

    Records are frozen. Formats return new records through ``replace``,
    ``with_meta`` and ``without_meta`` and never mutate the ``meta`` dict
    of a record they were handed.
    """

    level: str
    message: str
    meta: Dict[str, Any] = field(default_factory=dict)

    def replace(self, **changes) -> 'LogInfo':
        """Return a copy of this record with the given fields replaced."""
        return replace(self, **changes)

    def with_meta(self, key: str, value: Any) -> 'LogInfo':
        """Return a copy with ``meta[key]`` set to ``value``."""
        meta = dict(self.meta)
        meta[key] = value
        return replace(self, meta=meta)

    def without_meta(self, key: str) -> 'LogInfo':
        """Return a copy with ``key`` removed from meta, if present."""
        meta = dict(self.meta)
        meta.pop(key, None)
        return replace(self, meta=meta)

    def public_meta(self) -> Dict[str, Any]:
        """Meta without the keys formats reserve for bookkeeping."""
        return {key: value for key, value in self.meta.items() if key not in INTERNAL_KEYS}

    def to_value(self) -> Dict[str, Any]:
        return {
            'level': self.level,
            'message': self.message,
            'meta': dict(self.meta)
        }

    def to_flat_value(self) -> Dict[str, Any]:
        """
        Flattened representation with metadata merged into the root.

        Returns:
            Dictionary with ``level`` and ``message`` followed by every public
            meta key
        """
        flat = {'level': self.level, 'message': self.message}
        flat.update(self.public_meta())
        return flat

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_value()).encode('utf-8')

    @classmethod
    def from_bytes(cls, data: bytes) -> 'LogInfo':
        try:
            value = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RecordParseError(f"Invalid JSON record: {e}") from e
        return cls.from_value(value)

    @classmethod
    def from_value(cls, value: Any) -> 'LogInfo':
        """
        Build a record from a decoded ``{"level", "message", "meta"}`` object.

        Args:
            value: Decoded JSON value

        Returns:
            New LogInfo

        Raises:
            RecordParseError: If value is not an object or lacks string
                ``level``/``message`` fields
        """
        if not isinstance(value, dict):
            raise RecordParseError("Input value is not a JSON object")

        level = value.get('level')
        if not isinstance(level, str):
            raise RecordParseError("Missing or invalid 'level' field")

        message = value.get('message')
        if not isinstance(message, str):
            raise RecordParseError("Missing or invalid 'message' field")

        meta = value.get('meta')
        return cls(level, message, dict(meta) if isinstance(meta, dict) else {})

    @classmethod
    def parse(cls, text: str) -> 'LogInfo':
        """
        Parse a record from a line of text.

        JSON objects are tried first. Otherwise the line must look like
        ``[LEVEL] message {key: value, ...}`` where each value is read as
        JSON and falls back to the raw string.

        Args:
            text: Line of text

        Returns:
            New LogInfo

        Raises:
            RecordParseError: If the line matches neither form
        """
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            pass
        else:
            return cls.from_value(value)

        line = text.strip()
        if not line.startswith('['):
            raise RecordParseError("Expected log to start with '[LEVEL]'")

        end_bracket = line.find(']')
        if end_bracket == -1:
            raise RecordParseError("Missing closing bracket for level")

        level = line[1:end_bracket]
        rest = line[end_bracket + 1:].strip()

        meta_start = rest.find('{')
        if meta_start == -1:
            return cls(level, rest)

        message = rest[:meta_start].strip()
        meta_str = rest[meta_start:]
        meta = {}

        meta_end = meta_str.rfind('}')
        if meta_end != -1:
            for pair in meta_str[1:meta_end].split(','):
                parts = pair.split(':', 1)
                if len(parts) != 2:
                    continue
                key = parts[0].strip().strip('"')
                value_str = parts[1].strip()
                try:
                    meta[key] = json.loads(value_str)
                except json.JSONDecodeError:
                    meta[key] = value_str

        return cls(level, message, meta)

    def __str__(self) -> str:
        # formats render everything they need into the message
        return self.message
