import asyncio
import json
from contextlib import asynccontextmanager
from typing import List, Optional

import pytest

from tactical_analysis.config import Settings
from tactical_analysis.models import GenerationResult, Source, VerifiedMetadata


VIDEO_URL = "https://www.youtube.com/watch?v=ABC123"
VIDEO_ID = "ABC123"
VERIFIED_TITLE = "Team A vs Team B | Extended Highlights"


def analysis_text(prose: bool = True, **overrides) -> str:
    """Model output with a JSON analysis, optionally wrapped in prose."""
    document = {
        "videoTitle": VERIFIED_TITLE,
        "videoUrl": "https://youtu.be/ABC123",
        "videoId": VIDEO_ID,
        "teamA": "Team A",
        "teamB": "Team B",
        "score": "2-1",
        "formations": {"teamA": {"shape": "4-3-3"}, "teamB": {"shape": "4-4-2"}},
    }
    document.update(overrides)
    body = json.dumps(document)
    if not prose:
        return body
    return f"Sure! Here is the analysis you asked for:\n```json\n{body}\n```\nLet me know if you need more."


class FakeAnalyzer:
    """Records generate() calls and returns a canned result."""

    def __init__(self, text: str = "", sources: Optional[List[Source]] = None, error: Optional[Exception] = None):
        self.text = text
        self.sources = sources or []
        self.error = error
        self.calls = []

    async def generate(self, prompt, images=(), grounding=False, thinking_budget=None):
        self.calls.append({
            "prompt": prompt,
            "images": list(images),
            "grounding": grounding,
            "thinking_budget": thinking_budget,
        })
        if self.error is not None:
            raise self.error
        return GenerationResult(text=self.text, sources=self.sources)


class FakeVerifier:
    def __init__(self, metadata: Optional[VerifiedMetadata]):
        self.metadata = metadata
        self.calls = []

    async def verify(self, url):
        self.calls.append(url)
        return self.metadata


class FakeVideoResource:
    """
    In-memory video resource that records every seek/capture.

    Fails loudly if two operations overlap, since a real decoder has a
    single position.
    """

    def __init__(self, duration: Optional[float] = 10.0, fail_on_capture: Optional[int] = None):
        self._duration = duration
        self.fail_on_capture = fail_on_capture
        self.position = 0.0
        self.events = []
        self.close_count = 0
        self._busy = False

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    async def _step(self):
        assert not self._busy, "concurrent access to the video resource"
        self._busy = True
        await asyncio.sleep(0)
        self._busy = False

    async def duration(self):
        return self._duration

    async def seek(self, seconds):
        await self._step()
        self.position = seconds
        self.events.append(("seek", seconds))

    async def capture(self):
        await self._step()
        index = len([e for e in self.events if e[0] == "capture"])
        if self.fail_on_capture is not None and index == self.fail_on_capture:
            raise RuntimeError("decoder error")
        self.events.append(("capture", self.position))
        return f"frame-{index}".encode()

    def close(self):
        self.close_count += 1


def make_opener(resource):
    """Build a resource opener that always yields the given resource."""
    calls = []

    @asynccontextmanager
    async def opener(data, suffix):
        calls.append((data, suffix))
        try:
            yield resource
        finally:
            resource.close()

    opener.calls = calls
    return opener


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", max_frames=5)


@pytest.fixture
def verified_metadata():
    return VerifiedMetadata(title=VERIFIED_TITLE, author="League Channel")
