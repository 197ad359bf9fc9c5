"""
Colorize and uncolorize formats.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from ..config import levels as level_presets
from ..errors import ConfigurationError
from ..schemas.log_info import LogInfo
from .base import Format
from .styles import apply_style, compile_style, strip_styles, style_names


@dataclass(frozen=True)
class ColorizeOptions:
    colors: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()
    all: bool = False
    level: bool = True
    message: bool = False


class Colorizer(Format):
    """
    Styles the level and/or message according to the record's level.

    The style is looked up with the level as it was before styling, so
    colorizing the level never changes which style the message gets.
    Levels without a configured style pass through unstyled.
    """

    def __init__(self, options: Optional[ColorizeOptions] = None):
        options = options or ColorizeOptions()

        colors = {level: tuple(style_names(value)) for level, value in level_presets.colors().items()}
        colors.update(dict(options.colors))

        self.options = replace(options, colors=tuple(colors.items()))
        self.styles = {level: compile_style(names) for level, names in colors.items()}

    def with_all(self, all: bool) -> 'Colorizer':
        return Colorizer(replace(self.options, all=all))

    def with_level(self, level: bool) -> 'Colorizer':
        return Colorizer(replace(self.options, level=level))

    def with_message(self, message: bool) -> 'Colorizer':
        return Colorizer(replace(self.options, message=message))

    def with_colors(self, colors: Dict[str, Any]) -> 'Colorizer':
        merged = dict(self.options.colors)
        merged.update(normalize_colors(colors))
        return Colorizer(replace(self.options, colors=tuple(merged.items())))

    def with_color(self, level: str, color: Any) -> 'Colorizer':
        return self.with_colors({level: color})

    def colorize(self, level: str, text: str) -> str:
        style = self.styles.get(level)
        if style is None:
            return text
        return apply_style(style, text)

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        original_level = info.level
        level, message = info.level, info.message

        if self.options.all or self.options.level:
            level = self.colorize(original_level, level)
        if self.options.all or self.options.message:
            message = self.colorize(original_level, message)

        return info.replace(level=level, message=message)


def normalize_colors(colors: Dict[str, Any]) -> Dict[str, Tuple[str, ...]]:
    if not isinstance(colors, dict):
        raise ConfigurationError(f"Colors must map level names to styles, got {colors!r}")
    return {level: tuple(style_names(value)) for level, value in colors.items()}


def colorize(colors: Optional[Dict[str, Any]] = None, all: bool = False,
             level: bool = True, message: bool = False) -> Colorizer:
    """
    Create a colorize format.

    Args:
        colors: Level name to style name (or list of style names), merged
            over the default level colors
        all: Style both level and message
        level: Style the level
        message: Style the message

    Returns:
        Colorizer
    """
    return Colorizer(ColorizeOptions(
        colors=tuple(normalize_colors(colors or {}).items()),
        all=all,
        level=level,
        message=message
    ))


@dataclass(frozen=True)
class UncolorizeOptions:
    level: bool = True
    message: bool = True


class Uncolorize(Format):
    """Strips ANSI styling from the level and/or message."""

    def __init__(self, options: Optional[UncolorizeOptions] = None):
        self.options = options or UncolorizeOptions()

    def with_level(self, level: bool) -> 'Uncolorize':
        return Uncolorize(replace(self.options, level=level))

    def with_message(self, message: bool) -> 'Uncolorize':
        return Uncolorize(replace(self.options, message=message))

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        level, message = info.level, info.message
        if self.options.level:
            level = strip_styles(level)
        if self.options.message:
            message = strip_styles(message)
        return info.replace(level=level, message=message)


def uncolorize(level: bool = True, message: bool = True) -> Uncolorize:
    return Uncolorize(UncolorizeOptions(level=level, message=message))
