#!/usr/bin/env python3
"""
logchain - command line front end.
Formats log records with a chain described in a configuration file.
"""

import argparse
import logging
import sys
from typing import Iterable, Optional, TextIO

from . import __version__
from .config.loader import build_format, create_sample_config, load_config, setup_logging
from .errors import LogChainError
from .inputs.file_input import FileInput
from .schemas.log_info import LogInfo


class LogChainApp:
    """Loads a configuration and runs records through the configured chain."""

    def __init__(self, config_path: str):
        """Initialize with the path of a configuration file."""
        self.config_path = config_path
        self.config = None
        self.format = None
        self.logger = logging.getLogger(__name__)

        self._load_config()

    def _load_config(self):
        """Load configuration, set up logging and build the chain."""
        self.config = load_config(self.config_path)
        setup_logging(self.config)
        self.format = build_format(self.config)
        self.logger.info(f"Loaded configuration from {self.config_path}")

    def format_record(self, info: LogInfo) -> Optional[str]:
        """
        Run one record through the chain.

        Args:
            info: Record to format

        Returns:
            Rendered message, or None if the chain dropped the record
        """
        result = self.format.transform(info)
        if result is None:
            self.logger.debug(f"Dropped record: {info.message[:100]}")
            return None
        return str(result)

    def format_line(self, log_line: str) -> Optional[str]:
        """Parse a single line (for CLI mode) and format it."""
        return self.format_record(LogInfo.parse(log_line))

    def run(self, records: Iterable[LogInfo], out: TextIO) -> int:
        """
        Format every record and write the results, one per line.

        Returns:
            Number of records written
        """
        written = 0
        for info in records:
            rendered = self.format_record(info)
            if rendered is not None:
                out.write(rendered + '\n')
                written += 1
        self.logger.info(f"Wrote {written} records")
        return written


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="logchain - composable formats for structured log records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Format a single record
  logchain --config logchain.yaml --log '[info] user logged in {"user": "alice"}'

  # Format every record in a file
  logchain --config logchain.ini --file records.log

  # Create sample configuration
  logchain --create-sample-config logchain.yaml
        """
    )

    parser.add_argument(
        "--config",
        required=False,
        help="Path to an INI or YAML configuration file"
    )

    parser.add_argument(
        "--log",
        help="Single record to format (CLI mode)"
    )

    parser.add_argument(
        "--file",
        help="File of records to format, one per line (default: stdin)"
    )

    parser.add_argument(
        "--create-sample-config",
        metavar="PATH",
        help="Create sample YAML configuration at specified path"
    )

    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"logchain {__version__}"
    )

    args = parser.parse_args(argv)

    if args.create_sample_config:
        create_sample_config(args.create_sample_config)
        return 0

    if not args.config:
        parser.error("--config is required unless using --create-sample-config")

    try:
        app = LogChainApp(args.config)

        if args.validate_config:
            print("[INFO] Configuration is valid")
            return 0

        if args.log:
            rendered = app.format_line(args.log)
            if rendered is not None:
                print(rendered)
            return 0

        if args.file:
            records = FileInput(args.file)
        else:
            records = FileInput(stream=sys.stdin)
        app.run(records, sys.stdout)
        return 0

    except (LogChainError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
