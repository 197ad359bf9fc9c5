"""
Line-oriented text formats: simple and cli.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from ..config import levels as level_presets
from ..schemas.log_info import INTERNAL_KEYS, LogInfo
from .base import Format
from .colorize import Colorizer, colorize, normalize_colors
from .json_format import dumps
from .pad_levels import Padder, pad_levels

# meta keys that describe the rendering itself and never appear in the output
RESERVED_KEYS = ('level', 'message', 'splat', 'padding') + INTERNAL_KEYS


class SimpleFormat(Format):
    """
    Renders ``<level>:<padding> <message>`` plus remaining meta as JSON.

    Padding comes from ``meta['padding'][level]`` and is empty when there is
    none. The message is rendered as it is; padding added by ``pad_levels``
    is already part of it. Meta is kept.
    """

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        paddings = info.meta.get('padding')
        padding = paddings.get(info.level, '') if isinstance(paddings, dict) else ''
        if not isinstance(padding, str):
            padding = ''

        rendered = f"{info.level}:{padding} {info.message}"

        rest = {key: value for key, value in info.meta.items() if key not in RESERVED_KEYS}
        if rest:
            rendered += f" {dumps(rest)}"

        return info.replace(message=rendered)


def simple() -> SimpleFormat:
    return SimpleFormat()


@dataclass(frozen=True)
class CliOptions:
    levels: Optional[Tuple[str, ...]] = None
    filler: str = ' '
    colors: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()
    all: bool = False
    level: bool = True
    message: bool = False


class CliFormat(Format):
    """
    Padded, colorized ``<level>:<message>`` lines.

    Pads over the CLI level preset (or the given levels), colorizes, then
    joins level and message. Errors from the inner formats propagate.
    """

    def __init__(self, options: Optional[CliOptions] = None):
        options = options or CliOptions()
        levels = options.levels if options.levels is not None else level_presets.levels(level_presets.CLI)

        self.options = options
        self.padder: Padder = pad_levels(levels=levels, filler=options.filler)
        colors = level_presets.colors(level_presets.CLI)
        colors.update(dict(options.colors))
        self.colorizer: Colorizer = colorize(
            colors=colors,
            all=options.all,
            level=options.level,
            message=options.message
        )

    def with_levels(self, levels: Iterable[str]) -> 'CliFormat':
        return CliFormat(replace(self.options, levels=tuple(levels)))

    def with_filler(self, filler: str) -> 'CliFormat':
        return CliFormat(replace(self.options, filler=filler))

    def with_all(self, all: bool) -> 'CliFormat':
        return CliFormat(replace(self.options, all=all))

    def with_level(self, level: bool) -> 'CliFormat':
        return CliFormat(replace(self.options, level=level))

    def with_message(self, message: bool) -> 'CliFormat':
        return CliFormat(replace(self.options, message=message))

    def with_colors(self, colors: Dict[str, Any]) -> 'CliFormat':
        merged = dict(self.options.colors)
        merged.update(normalize_colors(colors))
        return CliFormat(replace(self.options, colors=tuple(merged.items())))

    def with_color(self, level: str, color: Any) -> 'CliFormat':
        return self.with_colors({level: color})

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        padded = self.padder.transform(info)
        if padded is None:
            return None
        colored = self.colorizer.transform(padded)
        if colored is None:
            return None
        return colored.replace(message=f"{colored.level}:{colored.message}")


def cli(levels: Optional[Iterable[str]] = None, filler: str = ' ',
        colors: Optional[Dict[str, Any]] = None, all: bool = False,
        level: bool = True, message: bool = False) -> CliFormat:
    """
    Create a cli format.

    Args:
        levels: Levels to align; defaults to the CLI level preset
        filler: Padding filler
        colors: Extra level colors, merged over the defaults
        all: Colorize both level and message
        level: Colorize the level
        message: Colorize the message

    Returns:
        CliFormat
    """
    return CliFormat(CliOptions(
        levels=tuple(levels) if levels is not None else None,
        filler=filler,
        colors=tuple(normalize_colors(colors or {}).items()),
        all=all,
        level=level,
        message=message
    ))
