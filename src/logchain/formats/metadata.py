"""
Metadata format: gathers selected meta keys into one nested container.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from ..errors import ConfigurationError
from ..schemas.log_info import INTERNAL_KEYS, LogInfo
from .base import Format


@dataclass(frozen=True)
class MetadataOptions:
    key: str = 'metadata'
    fill_except: Optional[Tuple[str, ...]] = None
    fill_with: Optional[Tuple[str, ...]] = None


class MetadataFormat(Format):
    """
    Moves meta keys under ``meta[key]``.

    With ``fill_except`` every key except the listed ones is moved; with
    ``fill_with`` only the listed keys are moved. With neither, everything
    is moved. Keys that are not moved stay at the top level, as do the
    internal keys other formats keep for bookkeeping.
    """

    def __init__(self, options: Optional[MetadataOptions] = None):
        options = options or MetadataOptions()
        if options.fill_except is not None and options.fill_with is not None:
            raise ConfigurationError("fill_except and fill_with are mutually exclusive")
        if not options.key:
            raise ConfigurationError("Metadata key must not be empty")
        self.options = options

    def with_key(self, key: str) -> 'MetadataFormat':
        return MetadataFormat(replace(self.options, key=key))

    def with_fill_except(self, keys: Iterable[str]) -> 'MetadataFormat':
        return MetadataFormat(replace(self.options, fill_except=tuple(keys)))

    def with_fill_with(self, keys: Iterable[str]) -> 'MetadataFormat':
        return MetadataFormat(replace(self.options, fill_with=tuple(keys)))

    def _selected(self, info: LogInfo):
        if self.options.fill_with is not None:
            return [key for key in self.options.fill_with if key in info.meta and key not in INTERNAL_KEYS]
        excluded = set(self.options.fill_except or ()) | set(INTERNAL_KEYS)
        return [key for key in info.meta if key not in excluded]

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        meta = dict(info.meta)
        container = {key: meta.pop(key) for key in self._selected(info)}
        meta[self.options.key] = container
        return info.replace(meta=meta)


def metadata(key: str = 'metadata', fill_except: Optional[Iterable[str]] = None,
             fill_with: Optional[Iterable[str]] = None) -> MetadataFormat:
    return MetadataFormat(MetadataOptions(
        key=key,
        fill_except=tuple(fill_except) if fill_except is not None else None,
        fill_with=tuple(fill_with) if fill_with is not None else None
    ))
