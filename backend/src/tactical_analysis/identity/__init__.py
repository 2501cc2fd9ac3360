"""
Video identity: id extraction, oEmbed verification and title matching.
"""

from .video_id import extract_video_id
from .oembed import OEmbedVerifier
from .title_match import normalize_title, titles_match

__all__ = [
    "extract_video_id",
    "OEmbedVerifier",
    "normalize_title",
    "titles_match",
]
