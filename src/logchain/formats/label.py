"""
Label format.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..schemas.log_info import LogInfo
from .base import Format


@dataclass(frozen=True)
class LabelOptions:
    label: str = ''
    message: bool = False


class LabelFormat(Format):
    """Adds a fixed label as a ``[label]`` message prefix or as ``meta['label']``."""

    def __init__(self, options: Optional[LabelOptions] = None):
        self.options = options or LabelOptions()

    def with_label(self, label: str) -> 'LabelFormat':
        return LabelFormat(replace(self.options, label=label))

    def with_message(self, message: bool) -> 'LabelFormat':
        return LabelFormat(replace(self.options, message=message))

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        if self.options.message:
            return info.replace(message=f"[{self.options.label}] {info.message}")
        return info.with_meta('label', self.options.label)


def label(label: str = '', message: bool = False) -> LabelFormat:
    return LabelFormat(LabelOptions(label=label, message=message))
