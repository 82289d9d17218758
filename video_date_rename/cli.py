#!/usr/bin/env python3
"""
Command-line interface for video_date_rename.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core import (
    DEFAULT_MIN_DATE,
    InvalidDateArgument,
    MediaRenamer,
    RunConfig,
    parse_date_argument,
)
from .probe import MediaProbe


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="video_date_rename",
        description="Rename AVI, MP4 and MOV files by last modified date and time, "
                    "resolution and frame rate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  video_date_rename
  video_date_rename vacation
  video_date_rename vacation 2021-07-01 2021-07-31
  video_date_rename "" 2010-01-01 --dry-run
  video_date_rename -- -cam 2010-01-01

A prefix starting with "-" must follow a "--" separator.

Files are renamed as:
  prefix_YYYY-MM-DD HH.MM.SS 1080p 29.97fps.ext

Modification dates before min_date (default 2000-01-01) or after max_date
(default today) are replaced by that date, keeping the time of day.
Resolution and frame rate are read with ffprobe and left out when unknown.
        """
    )

    parser.add_argument(
        'prefix',
        nargs='?',
        default='',
        help='Text added, followed by an underscore, to the start of each new name'
    )

    parser.add_argument(
        'min_date',
        nargs='?',
        help='Earliest date allowed in new names, formatted YYYY-MM-DD'
    )

    parser.add_argument(
        'max_date',
        nargs='?',
        help='Latest date allowed in new names, formatted YYYY-MM-DD'
    )

    parser.add_argument(
        '-C', '--directory',
        type=Path,
        default=Path('.'),
        help='Directory holding the videos (default: current directory)'
    )

    parser.add_argument(
        '--ffprobe',
        default='ffprobe',
        help='ffprobe executable used to read resolution and frame rate'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be renamed without asking or renaming anything'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def parse_config(args: argparse.Namespace) -> RunConfig:
    """Turn parsed arguments into a RunConfig, validating the dates."""
    min_date = DEFAULT_MIN_DATE
    max_date = None

    if args.min_date is not None:
        min_date = parse_date_argument(args.min_date, "Second", "min_date")
    if args.max_date is not None:
        max_date = parse_date_argument(args.max_date, "Third", "max_date")

    return RunConfig(
        prefix=args.prefix,
        min_date=min_date,
        max_date=max_date,
        directory=args.directory,
        dry_run=args.dry_run,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the video_date_rename command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = parse_config(args)
    except InvalidDateArgument as e:
        print(f"Error: {e}")
        return 0

    if not config.directory.is_dir():
        print(f"Error: Not a directory: {config.directory}")
        return 1

    if config.min_date > config.effective_max_date:
        print(f"Warning: min_date {config.min_date:%Y-%m-%d} is after max_date "
              f"{config.effective_max_date:%Y-%m-%d}; dates before min_date are moved to min_date.")

    try:
        renamer = MediaRenamer(config, probe=MediaProbe(cmd=args.ffprobe))
        renamer.process_directory()
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
