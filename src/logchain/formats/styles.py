"""
Style policy shared by the color-aware formats.

Formats decide which named style applies to which text. Turning a style
into ANSI escape codes is left to rich.
"""

import re
from typing import Any, List, Sequence

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from ..errors import ConfigurationError

BASE_COLORS = ('black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white')

ATTRIBUTES = {
    'bold': 'bold',
    'underline': 'underline',
    'italic': 'italic',
    'dimmed': 'dim',
    'reversed': 'reverse',
    'blink': 'blink',
    'hidden': 'conceal',
    'strikethrough': 'strike'
}

ALIASES = {
    'grey': 'bright_black',
    'gray': 'bright_black'
}

ANSI_PATTERN = re.compile(r'\x1b\[[0-9;]*m')


def _color_word(name: str) -> str:
    name = ALIASES.get(name, name)
    base = name[len('bright_'):] if name.startswith('bright_') else name
    if base not in BASE_COLORS:
        raise ConfigurationError(f"Unknown style '{name}'")
    return name


def _style_word(name: str) -> str:
    if name in ATTRIBUTES:
        return ATTRIBUTES[name]
    if name.startswith('on_'):
        return f"on {_color_word(name[len('on_'):])}"
    return _color_word(name)


def style_names(value: Any) -> List[str]:
    """
    Normalize a color setting to a list of style names.

    Args:
        value: A style name, a space separated string of names, or a list of names

    Returns:
        List of style names

    Raises:
        ConfigurationError: If value is neither a string nor a list of strings
    """
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigurationError(f"Invalid color configuration: {value!r}")


def compile_style(names: Sequence[str]) -> Style:
    """
    Build a rich Style from style names such as ``['red', 'bold', 'on_white']``.

    Raises:
        ConfigurationError: If a name is unknown
    """
    words = [_style_word(name.lower()) for name in names]
    try:
        return Style.parse(' '.join(words))
    except StyleSyntaxError as e:
        raise ConfigurationError(f"Invalid style {list(names)}: {e}") from e


def apply_style(style: Style, text: str) -> str:
    return style.render(text, color_system=ColorSystem.STANDARD)


def strip_styles(text: str) -> str:
    """Remove ANSI SGR escape sequences from text."""
    return ANSI_PATTERN.sub('', text)
