"""
Loose-but-bounded title comparison.
"""

import re

# Zero-width space/non-joiner/joiner and the byte order mark
_INVISIBLE_CHARS = re.compile("[\u200b-\u200d\ufeff]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Case-fold, drop invisible characters and collapse whitespace."""
    title = _INVISIBLE_CHARS.sub("", title.strip().casefold())
    return _WHITESPACE_RUN.sub(" ", title).strip()


def titles_match(a: str, b: str) -> bool:
    """
    Check whether two titles refer to the same video.

    Both titles must be non-empty after normalization. They match when equal
    or when either contains the other (emoji, channel suffixes, etc.).

    Examples:
        >>> titles_match("Team A vs Team B", "team a  vs   team b")
        True
        >>> titles_match("Team A vs B", "Team C vs D")
        False
    """
    t1 = normalize_title(a)
    t2 = normalize_title(b)
    if not t1 or not t2:
        return False
    return t1 == t2 or t1 in t2 or t2 in t1
