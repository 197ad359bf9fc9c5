"""
Elapsed-time format.
"""

import threading
import time
from typing import Optional

from ..schemas.log_info import LogInfo
from .base import Format


class MsFormat(Format):
    """
    Writes the time since this instance last ran to ``meta['ms']``.

    The value reads ``+<n>ms`` with whole milliseconds; the first record an
    instance sees gets ``+0ms``. Each instance keeps its own clock, and the
    read-and-update of that clock is serialized so concurrent callers always
    measure against a complete previous reading.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._previous: Optional[float] = None

    def elapsed_ms(self) -> int:
        with self._lock:
            current = time.monotonic()
            previous, self._previous = self._previous, current
        if previous is None:
            return 0
        return max(0, int((current - previous) * 1000))

    def transform(self, info: LogInfo) -> Optional[LogInfo]:
        return info.with_meta('ms', f"+{self.elapsed_ms()}ms")


def ms() -> MsFormat:
    return MsFormat()
