"""
Core functionality for planning and performing date-based video renames.
"""

import os
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional

from .probe import MediaProbe, ProbeResult


VIDEO_EXTENSIONS = ('.avi', '.mp4', '.mov')

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H.%M.%S"

DEFAULT_MIN_DATE = datetime(2000, 1, 1)

NAME_COLUMN_WIDTH = 60

_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class InvalidDateArgument(ValueError):
    """Raised when a date argument is not formatted YYYY-MM-DD."""

    def __init__(self, position: str, name: str, value: str):
        self.position = position
        self.name = name
        self.value = value
        super().__init__(f"{position} argument ({name}) must be formatted 9999-12-31")


class MediaFile(NamedTuple):
    """A video file found in the directory being renamed."""
    path: Path
    name: str
    extension: str
    modification_time: datetime

    @classmethod
    def from_path(cls, filepath: Path) -> "MediaFile":
        name = filepath.name
        return cls(
            path=filepath,
            name=name,
            extension=name[name.rfind('.'):],
            modification_time=datetime.fromtimestamp(filepath.stat().st_mtime),
        )


class RenamePlanEntry(NamedTuple):
    """A rename that has been planned but not carried out yet."""
    source: MediaFile
    target_name: str
    target_time: datetime

    @property
    def target_path(self) -> Path:
        return self.source.path.parent / self.target_name


class RunConfig(NamedTuple):
    """Settings for one run, taken from the command line."""
    prefix: str = ""
    min_date: datetime = DEFAULT_MIN_DATE
    max_date: Optional[datetime] = None
    directory: Path = Path(".")
    dry_run: bool = False

    @property
    def effective_max_date(self) -> datetime:
        return self.max_date if self.max_date is not None else datetime.now()


class RenameReport(NamedTuple):
    """Outcome of the rename pass."""
    renamed: List[RenamePlanEntry]
    failed: List[RenamePlanEntry]
    aborted: bool = False


def parse_date_argument(value: str, position: str, name: str) -> datetime:
    """Parse a YYYY-MM-DD argument into a datetime at midnight."""
    if not _DATE_PATTERN.match(value):
        raise InvalidDateArgument(position, name, value)
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise InvalidDateArgument(position, name, value) from None


def clamp_datetime(date_time: datetime, min_date: datetime, max_date: datetime) -> datetime:
    """
    Substitute the date portion of a timestamp that falls outside [min_date, max_date].

    The hour, minute and second are kept and sub-second precision is dropped.
    When min_date is after max_date only the minimum is applied.
    """
    if date_time < min_date:
        return date_time.replace(year=min_date.year, month=min_date.month, day=min_date.day,
                                 microsecond=0)
    elif date_time > max_date:
        return date_time.replace(year=max_date.year, month=max_date.month, day=max_date.day,
                                 microsecond=0)
    return date_time


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime(TIMESTAMP_FORMAT)


def strip_frame_rate(frame_rate: str) -> str:
    """Drop trailing zeros from a decimal frame rate: '29.970000' -> '29.97', '30.000' -> '30.'."""
    frame_rate = frame_rate.strip()
    if '.' in frame_rate:
        frame_rate = frame_rate.rstrip('0')
    return frame_rate


def build_filename(prefix: str, timestamp: datetime, resolution_height: str,
                   frame_rate: str, extension: str) -> str:
    """
    Build the new file name.

    Format: "prefix_YYYY-MM-DD HH.MM.SS 1080p 29.97fps.ext", where the prefix,
    resolution and frame rate parts are left out when empty.
    """
    resolution_height = resolution_height.strip()
    frame_rate = frame_rate.strip()

    prefix_part = f"{prefix}_" if prefix else ""
    resolution_part = f" {resolution_height}p" if resolution_height else ""
    frame_rate_part = f" {strip_frame_rate(frame_rate)}fps" if frame_rate else ""

    return f"{prefix_part}{format_timestamp(timestamp)}{resolution_part}{frame_rate_part}{extension}"


def is_video_file(filepath: Path) -> bool:
    """Readable, writable regular file with a supported video extension."""
    return (filepath.name.lower().endswith(VIDEO_EXTENSIONS)
            and filepath.is_file()
            and os.access(filepath, os.R_OK | os.W_OK))


def list_media_files(directory: Path) -> List[MediaFile]:
    """List supported video files in a directory, in directory order."""
    return [MediaFile.from_path(filepath)
            for filepath in directory.iterdir()
            if is_video_file(filepath)]


class MediaRenamer:
    """
    Plans and performs renames of video files to
    "prefix_YYYY-MM-DD HH.MM.SS 1080p 29.97fps.ext".

    Workflow:
    - List AVI/MP4/MOV files in the directory
    - Probe each one for resolution and frame rate
    - Clamp the modification date into the configured range
    - Show the plan, ask for confirmation, rename and restore timestamps
    """

    def __init__(self, config: RunConfig, probe: Optional[MediaProbe] = None):
        """
        Initialize the MediaRenamer.

        Args:
            config: settings for this run
            probe: metadata reader, an ffprobe-backed MediaProbe by default
        """
        self.config = config
        self.probe = probe if probe is not None else MediaProbe()

    def probe_file(self, media_file: MediaFile) -> ProbeResult:
        return self.probe.read(media_file.path)

    def plan(self, files: Iterable[MediaFile]) -> List[RenamePlanEntry]:
        """Work out the new name and timestamp of each file that needs renaming."""
        min_date = self.config.min_date
        max_date = self.config.effective_max_date

        entries: List[RenamePlanEntry] = []
        planned_names = set()

        for media_file in files:
            info = self.probe_file(media_file)
            target_time = clamp_datetime(media_file.modification_time, min_date, max_date)
            target_name = build_filename(
                self.config.prefix,
                target_time,
                info.resolution_height,
                info.frame_rate,
                media_file.extension,
            )

            if target_name == media_file.name:
                continue

            target_path = media_file.path.parent / target_name
            if target_name in planned_names or os.path.lexists(target_path):
                continue

            planned_names.add(target_name)
            entries.append(RenamePlanEntry(media_file, target_name, target_time))

        return entries

    def print_plan(self, entries: List[RenamePlanEntry]) -> None:
        print()
        print("The following files will be renamed:")
        print()
        for entry in entries:
            print(f"    {entry.source.name:<{NAME_COLUMN_WIDTH}} --> {entry.target_path.absolute()}")
        print()

    def confirm(self) -> bool:
        """Ask the operator to go ahead. Only 'Y' or 'y' counts as yes."""
        try:
            reply = input("Proceed? (Y/N): ")
        except EOFError:
            print()
            return False
        return reply.strip().upper() == "Y"

    def execute(self, entries: List[RenamePlanEntry]) -> RenameReport:
        """Rename each planned file and set its modification time."""
        renamed: List[RenamePlanEntry] = []
        failed: List[RenamePlanEntry] = []

        for entry in entries:
            source = entry.source.path
            target = entry.target_path
            try:
                if os.path.lexists(target):
                    raise FileExistsError(f"{target.name} already exists")
                source.rename(target)
            except OSError as e:
                print(f"Could not rename {entry.source.name}: {e}")
                failed.append(entry)
                continue

            try:
                atime = target.stat().st_atime
                os.utime(target, (atime, entry.target_time.timestamp()))
            except OSError as e:
                print(f"Warning: Could not set modification time of {entry.target_name}: {e}")
            renamed.append(entry)

        return RenameReport(renamed=renamed, failed=failed)

    def process_directory(self) -> RenameReport:
        """Run the full list, plan, confirm and rename workflow."""
        files = list_media_files(self.config.directory)
        if not files:
            print("No media files to rename")
            return RenameReport(renamed=[], failed=[])

        entries = self.plan(files)
        if not entries:
            print("Nothing to rename, all media files are already named correctly.")
            return RenameReport(renamed=[], failed=[])

        self.print_plan(entries)

        if self.config.dry_run:
            print("Dry run: no files were renamed.")
            return RenameReport(renamed=[], failed=[], aborted=True)

        if not self.confirm():
            print("Aborted, no files were renamed.")
            return RenameReport(renamed=[], failed=[], aborted=True)

        report = self.execute(entries)
        print(f"Renamed {len(report.renamed)} of {len(entries)} files.")
        return report
