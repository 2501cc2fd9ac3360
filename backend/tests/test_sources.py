import pytest
from pydantic import ValidationError

from tactical_analysis.analysis.sources import ORIGINAL_VIDEO_SOURCE_TITLE, reconcile_sources
from tactical_analysis.models import Source

from conftest import VIDEO_URL


def test_original_video_is_always_first():
    grounding = [
        Source(title="Match report", uri="https://news.example.com/report"),
        Source(title="Stats", uri="https://stats.example.com/match/1"),
    ]

    sources = reconcile_sources(VIDEO_URL, grounding)

    assert sources[0] == Source(title=ORIGINAL_VIDEO_SOURCE_TITLE, uri=VIDEO_URL)
    assert [s.uri for s in sources[1:]] == [
        "https://news.example.com/report",
        "https://stats.example.com/match/1",
    ]


def test_original_video_stays_first_when_grounding_repeats_it():
    grounding = [
        Source(title="Mirror", uri="https://stats.example.com/match/1"),
        Source(title="Video again", uri=f"  {VIDEO_URL} "),
    ]

    sources = reconcile_sources(VIDEO_URL, grounding)

    assert [s.uri for s in sources] == [VIDEO_URL, "https://stats.example.com/match/1"]
    assert sources[0].title == ORIGINAL_VIDEO_SOURCE_TITLE


def test_empty_and_duplicate_uris_are_dropped_keeping_first():
    grounding = [
        Source(title="First", uri="https://a.example.com"),
        Source.model_construct(title="Blank", uri="   "),
        Source.model_construct(title="Empty", uri=""),
        Source(title="Second copy", uri="https://a.example.com "),
        Source(title=None, uri="https://b.example.com"),
    ]

    sources = reconcile_sources(VIDEO_URL, grounding)

    assert [(s.title, s.uri) for s in sources] == [
        (ORIGINAL_VIDEO_SOURCE_TITLE, VIDEO_URL),
        ("First", "https://a.example.com"),
        (None, "https://b.example.com"),
    ]


def test_reconciling_own_output_is_idempotent():
    grounding = [
        Source(title="B", uri="https://b.example.com"),
        Source(title="A", uri="https://a.example.com"),
        Source(title="B again", uri="https://b.example.com"),
    ]

    once = reconcile_sources(VIDEO_URL, grounding)
    twice = reconcile_sources(VIDEO_URL, once)

    assert twice == once


def test_no_grounding_sources():
    assert reconcile_sources(VIDEO_URL, []) == [
        Source(title=ORIGINAL_VIDEO_SOURCE_TITLE, uri=VIDEO_URL)
    ]


@pytest.mark.parametrize("uri", ["", "   ", "\t\n"])
def test_blank_uri_is_rejected(uri):
    with pytest.raises(ValidationError):
        Source(title="Blank", uri=uri)


def test_uri_is_stored_untrimmed():
    assert Source(uri=" https://a.example.com ").uri == " https://a.example.com "
