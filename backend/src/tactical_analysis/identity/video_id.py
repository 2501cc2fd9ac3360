"""
Extracts the canonical YouTube video id from the many equivalent URL shapes.
"""

from typing import Optional
from urllib.parse import parse_qs, urlsplit


SHORT_LINK_HOST = "youtu.be"
PATH_MARKERS = ("shorts", "embed")


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video id from a user-supplied URL.

    Recognized shapes:
        https://www.youtube.com/watch?v=ID   (a "v" parameter on any host)
        https://youtu.be/ID
        https://www.youtube.com/shorts/ID
        https://www.youtube.com/embed/ID

    Args:
        url: URL as pasted by the user

    Returns:
        The video id, or None when the URL is malformed or matches no shape

    Examples:
        >>> extract_video_id("https://youtu.be/ABC123?t=42")
        'ABC123'
        >>> extract_video_id("https://example.com/about") is None
        True
    """
    if not isinstance(url, str):
        return None

    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname or ""
    except ValueError:
        return None

    if not parts.scheme or not hostname:
        return None

    video_id = parse_qs(parts.query).get("v", [""])[0]
    if video_id:
        return video_id

    segments = [segment for segment in parts.path.split("/") if segment]

    if hostname == SHORT_LINK_HOST or hostname.endswith("." + SHORT_LINK_HOST):
        return segments[0] if segments else None

    for marker in PATH_MARKERS:
        if marker in segments:
            index = segments.index(marker)
            if index + 1 < len(segments):
                return segments[index + 1]

    return None
