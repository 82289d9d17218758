"""
Video stream metadata lookup backed by ffprobe.
"""

from contextlib import contextmanager
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import Dict, Iterator, NamedTuple, Optional, Union

import ffmpeg


class StreamKind(Enum):
    """Kinds of streams, named after ffprobe's codec_type values."""
    GENERAL = "general"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "subtitle"


class ProbeResult(NamedTuple):
    """Resolution and frame rate of the first video stream, empty when unknown."""
    resolution_height: str = ""
    frame_rate: str = ""


def format_frame_rate(rate: str) -> str:
    """Turn an ffprobe rational such as '30000/1001' into '29.970'."""
    try:
        value = Fraction(rate)
    except (ValueError, ZeroDivisionError, TypeError):
        return ""
    if value <= 0:
        return ""
    return f"{float(value):.3f}"


class MediaProbe:
    """
    Handle for reading stream parameters from one media file at a time.

    Usage mirrors a classic open/get/close library handle:

        probe = MediaProbe()
        with probe.session(path) as opened:
            height = probe.get(StreamKind.VIDEO, 0, "Height")

    ``get`` never raises; anything missing comes back as an empty string.
    """

    def __init__(self, cmd: str = "ffprobe"):
        self.cmd = cmd
        self._info: Optional[Dict] = None
        self._missing_ffprobe_reported = False

    @property
    def is_open(self) -> bool:
        return self._info is not None

    def open(self, filepath: Union[str, Path]) -> bool:
        """Probe a file. Returns True when stream information was collected."""
        self.close()
        try:
            # absolute so names starting with "-" are not read as ffprobe options
            self._info = ffmpeg.probe(str(Path(filepath).absolute()), cmd=self.cmd)
        except ffmpeg.Error as e:
            reason = e.stderr.decode(errors="replace").strip() if e.stderr else e
            print(f"Warning: Could not extract video metadata from {filepath}: {reason}")
        except ValueError as e:
            print(f"Warning: Could not extract video metadata from {filepath}: {e}")
        except FileNotFoundError:
            if not self._missing_ffprobe_reported:
                print(f"Warning: {self.cmd} not found. Resolution and frame rate will be left out.")
                self._missing_ffprobe_reported = True
        except OSError as e:
            if not self._missing_ffprobe_reported:
                print(f"Warning: Could not run {self.cmd}: {e}. Resolution and frame rate will be left out.")
                self._missing_ffprobe_reported = True
        return self.is_open

    def close(self) -> None:
        self._info = None

    @contextmanager
    def session(self, filepath: Union[str, Path]) -> Iterator[bool]:
        """Open ``filepath`` for the duration of a with-block."""
        try:
            yield self.open(filepath)
        finally:
            self.close()

    def get(self, stream_kind: StreamKind, stream_number: int, parameter: str) -> str:
        """Return a parameter of the n-th stream of the given kind, or ''."""
        if self._info is None:
            return ""

        if stream_kind is StreamKind.GENERAL:
            stream = self._info.get("format", {})
        else:
            streams = [s for s in self._info.get("streams", [])
                       if s.get("codec_type") == stream_kind.value]
            if stream_number >= len(streams):
                return ""
            stream = streams[stream_number]

        if parameter == "Height":
            value = stream.get("height")
            return str(value) if value else ""
        if parameter == "FrameRate":
            for key in ("avg_frame_rate", "r_frame_rate"):
                rate = format_frame_rate(stream.get(key, ""))
                if rate:
                    return rate
            return ""

        value = stream.get(parameter)
        if value is None:
            value = stream.get("tags", {}).get(parameter)
        return "" if value is None else str(value)

    def read(self, filepath: Union[str, Path]) -> ProbeResult:
        """Probe a file and return its first video stream's height and frame rate."""
        with self.session(filepath):
            return ProbeResult(
                resolution_height=self.get(StreamKind.VIDEO, 0, "Height").strip(),
                frame_rate=self.get(StreamKind.VIDEO, 0, "FrameRate").strip(),
            )
