"""
Alignment formats: a leading tab, or per-level padding so messages of
differently sized levels start in the same column.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from ..config import levels as level_presets
from ..errors import ConfigurationError
from ..schemas.log_info import PADDED_KEY, LogInfo
from .base import Format


class AlignFormat(Format):
    """Prepends a tab to the message."""

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        return info.replace(message=f"\t{info.message}")


def align() -> AlignFormat:
    return AlignFormat()


@dataclass(frozen=True)
class PadLevelsOptions:
    levels: Tuple[str, ...] = tuple(level_presets.levels())
    filler: str = ' '
    widths: Optional[Tuple[Tuple[str, int], ...]] = None


def padding_for_levels(levels: Iterable[str], filler: str) -> Dict[str, str]:
    """
    Compute paddings that align every level to the longest one plus one.

    Args:
        levels: Level names
        filler: Filler string, repeated and cut to length

    Returns:
        Mapping of level name to padding string
    """
    levels = list(levels)
    longest = max((len(level) for level in levels), default=0)
    return {level: _fill(filler, longest + 1 - len(level)) for level in levels}


def padding_for_widths(widths: Iterable[Tuple[str, int]], filler: str) -> Dict[str, str]:
    """Padding that brings each level up to an explicit column width."""
    return {level: _fill(filler, width - len(level)) for level, width in widths}


def _fill(filler: str, count: int) -> str:
    if count <= 0:
        return ''
    return (filler * count)[:count]


class Padder(Format):
    """
    Pads messages according to their level.

    The padding applied is recorded under the internal ``_padded`` meta key;
    a record already carrying that padding for its level passes through
    untouched. Levels without an entry are left alone.
    """

    def __init__(self, options: Optional[PadLevelsOptions] = None):
        options = options or PadLevelsOptions()
        if not isinstance(options.filler, str) or not options.filler:
            raise ConfigurationError("Padding filler must be a non-empty string")
        for level, width in options.widths or ():
            if not isinstance(width, int) or isinstance(width, bool):
                raise ConfigurationError(f"Width for level '{level}' must be an integer, got {width!r}")

        self.options = options
        if options.widths is not None:
            self.paddings = padding_for_widths(options.widths, options.filler)
        else:
            self.paddings = padding_for_levels(options.levels, options.filler)

    def with_levels(self, levels: Iterable[str]) -> 'Padder':
        return Padder(replace(self.options, levels=tuple(levels), widths=None))

    def with_filler(self, filler: str) -> 'Padder':
        return Padder(replace(self.options, filler=filler))

    def with_widths(self, widths: Dict[str, int]) -> 'Padder':
        return Padder(replace(self.options, widths=_width_items(widths)))

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        padding = self.paddings.get(info.level)
        if padding is None:
            return info

        applied = info.meta.get(PADDED_KEY)
        applied = dict(applied) if isinstance(applied, dict) else {}
        if applied.get(info.level) == padding:
            return info

        applied[info.level] = padding
        meta = dict(info.meta)
        meta[PADDED_KEY] = applied
        return info.replace(message=f"{padding}{info.message}", meta=meta)


def pad_levels(levels: Optional[Iterable[str]] = None, filler: str = ' ',
               widths: Optional[Dict[str, int]] = None) -> Padder:
    """
    Create a padding format.

    Args:
        levels: Levels to align; defaults to the default level preset
        filler: Filler string
        widths: Explicit column width per level; overrides ``levels``

    Returns:
        Padder
    """
    options = PadLevelsOptions(filler=filler)
    if levels is not None:
        options = replace(options, levels=tuple(levels))
    if widths is not None:
        options = replace(options, widths=_width_items(widths))
    return Padder(options)


def _width_items(widths: Dict[str, int]) -> Tuple[Tuple[str, int], ...]:
    if not isinstance(widths, dict):
        raise ConfigurationError(f"Widths must map level names to integers, got {widths!r}")
    return tuple(widths.items())
