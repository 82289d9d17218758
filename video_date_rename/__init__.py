"""
Video Date Rename - A tool to rename video files by date, resolution and frame rate.

This package provides functionality to:
- Find AVI, MP4 and MOV files in a directory
- Read resolution and frame rate with ffprobe
- Keep modification dates inside a min/max date range
- Preview, confirm and rename files, preserving their timestamps
"""

__version__ = "1.0.0"
__author__ = "Vibe Tools"
__email__ = "tools@vibe.dev"

from .core import MediaRenamer, MediaFile, RenamePlanEntry, RunConfig, build_filename, clamp_datetime
from .probe import MediaProbe, ProbeResult

__all__ = [
    "MediaRenamer",
    "MediaFile",
    "RenamePlanEntry",
    "RunConfig",
    "MediaProbe",
    "ProbeResult",
    "build_filename",
    "clamp_datetime",
]
