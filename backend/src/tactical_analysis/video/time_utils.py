"""
Time helpers for frame sampling.
"""

import math
import re
from typing import List, Optional


_FFMPEG_DURATION = re.compile(r'Duration: (\d+):(\d+):(\d+(?:\.\d+)?)')


def seconds_to_time(seconds: float) -> str:
    """
    Convert seconds to HH:MM:SS.mmm format (for progress output).

    Examples:
        >>> seconds_to_time(3725.5)
        '01:02:05.500'
    """
    total_ms = int(round(seconds * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"


def parse_ffmpeg_duration(output: str) -> Optional[float]:
    """
    Parse the container duration from ffmpeg's stderr banner.

    Returns:
        Duration in seconds, or None when ffmpeg reported none (e.g. "N/A")

    Examples:
        >>> parse_ffmpeg_duration("  Duration: 00:01:30.50, start: 0.000000")
        90.5
    """
    match = _FFMPEG_DURATION.search(output or "")
    if not match:
        return None
    h, m, s = match.groups()
    return int(h) * 3600 + int(m) * 60 + float(s)


def sample_timestamps(duration: float, max_frames: int) -> List[float]:
    """
    Evenly spaced capture timestamps: i * (duration / max_frames).

    Examples:
        >>> sample_timestamps(10.0, 5)
        [0.0, 2.0, 4.0, 6.0, 8.0]
    """
    if max_frames < 1:
        raise ValueError(f"max_frames must be a positive integer, got {max_frames}")
    if duration is None or not math.isfinite(duration) or duration <= 0:
        raise ValueError(f"Invalid video duration: {duration}")

    step = duration / max_frames
    return [i * step for i in range(max_frames)]
