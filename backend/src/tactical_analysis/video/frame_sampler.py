"""
Frame sampling for uploaded videos.

Extracts N evenly spaced JPEG stills with a sequential seek/capture loop.
The video resource has a single decode position, so captures never overlap.
"""

import asyncio
import math
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional, Protocol, Tuple

from imageio_ffmpeg import get_ffmpeg_exe

from ..errors import FrameExtractionError
from .time_utils import parse_ffmpeg_duration, sample_timestamps, seconds_to_time


DEFAULT_MAX_FRAMES = 20

# mjpeg qscale, 2 (best) to 31 (worst); 16 is roughly JPEG quality 50
JPEG_QSCALE = 16


class VideoResource(Protocol):
    """A seekable video with one decode position."""

    async def duration(self) -> Optional[float]:
        ...

    async def seek(self, seconds: float) -> None:
        ...

    async def capture(self) -> bytes:
        ...

    def close(self) -> None:
        ...


class FfmpegVideoResource:
    """
    Video resource backed by a file on disk and the bundled FFmpeg binary.

    Each capture decodes a single frame at the current position and encodes
    it as JPEG on stdout.
    """

    def __init__(self, path: Path, ffmpeg_exe: Optional[str] = None, owns_file: bool = False):
        """
        Args:
            path: Path to the video file
            ffmpeg_exe: FFmpeg executable (defaults to imageio-ffmpeg's binary)
            owns_file: Delete the file when the resource is closed
        """
        self.path = Path(path)
        self.ffmpeg_exe = ffmpeg_exe or get_ffmpeg_exe()
        self.owns_file = owns_file
        self.position = 0.0
        self.closed = False

    async def _run(self, *args: str) -> Tuple[int, bytes, bytes]:
        try:
            process = await asyncio.create_subprocess_exec(
                self.ffmpeg_exe, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FrameExtractionError(f"Could not start FFmpeg: {e}") from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise

        return process.returncode, stdout, stderr

    def _check_open(self):
        if self.closed:
            raise FrameExtractionError("Video resource is already closed.")

    async def duration(self) -> Optional[float]:
        """Read the container duration, or None if FFmpeg cannot load the file."""
        self._check_open()
        # No output file: ffmpeg exits non-zero but still prints the input banner
        _, _, stderr = await self._run('-hide_banner', '-i', str(self.path))
        return parse_ffmpeg_duration(stderr.decode('utf-8', errors='replace'))

    async def seek(self, seconds: float) -> None:
        self._check_open()
        self.position = max(0.0, float(seconds))

    async def capture(self) -> bytes:
        """Capture the frame at the current position as JPEG bytes."""
        self._check_open()
        returncode, stdout, stderr = await self._run(
            '-v', 'error',
            '-ss', f"{self.position:.3f}",
            '-i', str(self.path),
            '-frames:v', '1',
            '-f', 'image2',
            '-c:v', 'mjpeg',
            '-q:v', str(JPEG_QSCALE),
            'pipe:1',
        )
        if returncode != 0 or not stdout:
            message = stderr.decode('utf-8', errors='replace').strip()
            raise FrameExtractionError(
                f"Could not capture frame at {seconds_to_time(self.position)}: {message or 'no output'}"
            )
        return stdout

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.owns_file:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as e:
                print(f"[FRAME SAMPLER] Warning: Failed to delete {self.path}: {e}")


@asynccontextmanager
async def open_video_resource(
    data: bytes,
    suffix: str = ".mp4",
    ffmpeg_exe: Optional[str] = None,
) -> AsyncIterator[FfmpegVideoResource]:
    """
    Back an uploaded video with a temporary file for the duration of the block.

    The temporary file is deleted on exit, whatever the outcome.
    """
    fd, temp_path = tempfile.mkstemp(prefix="upload_", suffix=suffix)
    with os.fdopen(fd, 'wb') as f:
        f.write(data)

    resource = FfmpegVideoResource(Path(temp_path), ffmpeg_exe=ffmpeg_exe, owns_file=True)
    try:
        yield resource
    finally:
        resource.close()


async def sample_frames(resource: VideoResource, max_frames: int = DEFAULT_MAX_FRAMES) -> List[bytes]:
    """
    Capture max_frames evenly spaced stills from a video resource.

    Frame i is taken at i * (duration / max_frames). The resource is closed
    once sampling completes or fails.

    Args:
        resource: Video resource to sample
        max_frames: Number of frames to capture (positive integer)

    Returns:
        List of JPEG-encoded frames in timestamp order

    Raises:
        ValueError: If max_frames is not a positive integer
        FrameExtractionError: If the video cannot be loaded or any capture fails
    """
    try:
        if isinstance(max_frames, bool) or not isinstance(max_frames, int) or max_frames < 1:
            raise ValueError(f"max_frames must be a positive integer, got {max_frames!r}")

        try:
            duration = await resource.duration()
        except FrameExtractionError:
            raise
        except Exception as e:
            raise FrameExtractionError(f"Could not load video: {e}") from e

        if duration is None or not math.isfinite(duration) or duration <= 0:
            raise FrameExtractionError("Could not determine the video duration.")

        timestamps = sample_timestamps(duration, max_frames)
        print(f"[FRAME SAMPLER] Sampling {max_frames} frames from {seconds_to_time(duration)} of video")

        frames = []
        for i, timestamp in enumerate(timestamps):
            try:
                await resource.seek(timestamp)
                frame = await resource.capture()
            except FrameExtractionError:
                raise
            except Exception as e:
                raise FrameExtractionError(
                    f"Frame {i + 1}/{max_frames} at {seconds_to_time(timestamp)} failed: {e}"
                ) from e
            frames.append(frame)

        print(f"[FRAME SAMPLER] Captured {len(frames)} frames")
        return frames
    finally:
        resource.close()
