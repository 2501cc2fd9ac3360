from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from tactical_analysis.gemini import GeminiAnalyzer, extract_grounding_sources
from tactical_analysis.models import Source


def fake_response(text="{}", chunks=None):
    metadata = SimpleNamespace(grounding_chunks=chunks)
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


def web_chunk(uri, title=None):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


def make_analyzer(response):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response)
    return GeminiAnalyzer(api_key="test-key", model="gemini-test", client=client), client


@pytest.mark.asyncio
async def test_grounded_text_request():
    response = fake_response('{"videoId": "ABC123"}', chunks=[web_chunk("https://a.example.com", "A")])
    analyzer, client = make_analyzer(response)

    result = await analyzer.generate("analyze", grounding=True, thinking_budget=6000)

    assert result.text == '{"videoId": "ABC123"}'
    assert result.sources == [Source(title="A", uri="https://a.example.com")]

    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["config"].tools[0].google_search is not None
    assert kwargs["config"].thinking_config.thinking_budget == 6000
    assert [part.text for part in kwargs["contents"].parts] == ["analyze"]


@pytest.mark.asyncio
async def test_frames_are_sent_as_jpeg_parts_without_grounding():
    analyzer, client = make_analyzer(fake_response())

    await analyzer.generate("frames", images=[b"jpeg-1", b"jpeg-2"], thinking_budget=2000)

    kwargs = client.aio.models.generate_content.call_args.kwargs
    parts = kwargs["contents"].parts
    assert parts[0].text == "frames"
    assert [p.inline_data.data for p in parts[1:]] == [b"jpeg-1", b"jpeg-2"]
    assert all(p.inline_data.mime_type == "image/jpeg" for p in parts[1:])
    assert not kwargs["config"].tools


@pytest.mark.asyncio
async def test_empty_text_becomes_empty_string():
    analyzer, _ = make_analyzer(fake_response(text=None))

    result = await analyzer.generate("prompt")

    assert result.text == ""
    assert result.sources == []


@pytest.mark.asyncio
async def test_transport_errors_propagate():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("503 UNAVAILABLE"))
    analyzer = GeminiAnalyzer(api_key="test-key", client=client)

    with pytest.raises(RuntimeError):
        await analyzer.generate("prompt")


def test_chunks_without_web_uri_are_skipped():
    response = fake_response(chunks=[
        web_chunk("https://a.example.com", "A"),
        SimpleNamespace(web=None),
        web_chunk("", "Blank"),
        web_chunk("   ", "Whitespace"),
        web_chunk("https://b.example.com"),
    ])

    assert extract_grounding_sources(response) == [
        Source(title="A", uri="https://a.example.com"),
        Source(title=None, uri="https://b.example.com"),
    ]


def test_missing_candidates_or_metadata():
    assert extract_grounding_sources(SimpleNamespace(candidates=None)) == []
    assert extract_grounding_sources(SimpleNamespace(candidates=[SimpleNamespace(grounding_metadata=None)])) == []
