"""
Pretty-print format: a readable multi-line rendering of a record.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from ..errors import SerializationError
from ..schemas.log_info import LogInfo
from .base import Format
from .styles import apply_style, compile_style

VALUE_STYLES = {
    'string': compile_style(['green']),
    'number': compile_style(['blue']),
    'boolean': compile_style(['yellow']),
    'null': compile_style(['red'])
}


def _styled(kind: str, text: str, colorize: bool) -> str:
    return apply_style(VALUE_STYLES[kind], text) if colorize else text


def format_value(value: Any, indent: int = 0, colorize: bool = False) -> str:
    """
    Render a JSON-like value.

    Objects and arrays open on the current line and close on their own line
    at ``indent``; members are indented two further spaces. Strings are
    single quoted and object keys are bare.

    Args:
        value: Value to render
        indent: Current indentation in spaces
        colorize: Style scalars by type

    Returns:
        Rendered text

    Raises:
        SerializationError: On values that have no JSON counterpart
    """
    pad = ' ' * indent

    if isinstance(value, str):
        return f"'{_styled('string', value, colorize)}'"
    if isinstance(value, bool):
        return _styled('boolean', 'true' if value else 'false', colorize)
    if isinstance(value, (int, float)):
        return _styled('number', repr(value), colorize)
    if value is None:
        return _styled('null', 'null', colorize)

    if isinstance(value, dict):
        if not value:
            return '{}'
        members = [
            f"{pad}  {key}: {format_value(item, indent + 2, colorize).strip()}"
            for key, item in value.items()
        ]
        return '{\n' + ',\n'.join(members) + f"\n{pad}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return '[]'
        items = [f"{pad}  {format_value(item, indent + 2, colorize).strip()}" for item in value]
        return '[\n' + ',\n'.join(items) + f"\n{pad}]"

    raise SerializationError(f"Cannot pretty print value of type {type(value).__name__}")


@dataclass(frozen=True)
class PrettyPrintOptions:
    colorize: bool = False


class PrettyPrinter(Format):
    """Replaces the message with the rendering of level, message and meta; meta is cleared."""

    def __init__(self, options: Optional[PrettyPrintOptions] = None):
        self.options = options or PrettyPrintOptions()

    def with_colorize(self, colorize: bool) -> 'PrettyPrinter':
        return PrettyPrinter(replace(self.options, colorize=colorize))

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        rendered = format_value(info.to_flat_value(), 0, self.options.colorize)
        return LogInfo(info.level, rendered)


def pretty_print(colorize: bool = False) -> PrettyPrinter:
    return PrettyPrinter(PrettyPrintOptions(colorize=colorize))
