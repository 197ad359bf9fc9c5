"""
File input for reading log records.
Each non-blank line holds one record, either as JSON or as
``[LEVEL] message {key: value}``.
"""

import os
import logging
from typing import Iterator, IO, Optional

from ..errors import RecordParseError
from ..schemas.log_info import LogInfo


class FileInput:
    """Reads LogInfo records from a file or an open text stream."""

    def __init__(self, file_path: Optional[str] = None, stream: Optional[IO[str]] = None,
                 annotate: bool = False):
        """
        Initialize file input.

        Args:
            file_path: Path to the record file
            stream: Already open text stream, used instead of ``file_path``
            annotate: Add ``source_file`` and ``line_number`` to each record's meta
        """
        if file_path is None and stream is None:
            raise ValueError("FileInput needs a file_path or a stream")

        self.file_path = file_path
        self.stream = stream
        self.annotate = annotate
        self.skipped = 0

        # Setup logging
        self.logger = logging.getLogger(__name__)

    def __iter__(self) -> Iterator[LogInfo]:
        return self.records()

    def records(self) -> Iterator[LogInfo]:
        """
        Yield every parsable record.

        Lines that cannot be parsed are logged and skipped.
        """
        if self.stream is not None:
            yield from self._read(self.stream, '<stream>')
            return

        if not os.path.exists(self.file_path):
            raise FileNotFoundError(f"Log file not found: {self.file_path}")

        with open(self.file_path, 'r', encoding='utf-8', errors='replace') as file_handle:
            yield from self._read(file_handle, self.file_path)

    def _read(self, file_handle: IO[str], source: str) -> Iterator[LogInfo]:
        line_number = 0
        for line in file_handle:
            line_number += 1
            line = line.strip()
            if not line:
                continue

            try:
                info = LogInfo.parse(line)
            except RecordParseError as e:
                self.skipped += 1
                self.logger.warning(f"Skipping line {line_number} of {source}: {e}")
                continue

            if self.annotate:
                info = info.with_meta('source_file', source).with_meta('line_number', line_number)

            yield info

        self.logger.debug(f"Finished reading {line_number} lines from {source}")
