"""
Source reconciliation: the analyzed video always comes first, duplicates go.
"""

from typing import Iterable, List

from ..models import Source


ORIGINAL_VIDEO_SOURCE_TITLE = "YouTube (analyzed video)"


def reconcile_sources(original_url: str, grounding_sources: Iterable[Source]) -> List[Source]:
    """
    Build the final, ordered source list.

    Args:
        original_url: URL supplied by the user
        grounding_sources: Citations returned by the generation call, in order

    Returns:
        Sources with the original video first, empty and repeated uris removed
        (first occurrence wins)
    """
    candidates = [Source(title=ORIGINAL_VIDEO_SOURCE_TITLE, uri=original_url)]
    candidates.extend(grounding_sources)

    seen = set()
    reconciled = []
    for source in candidates:
        key = (source.uri or "").strip()
        if not key or key in seen:
            continue
        seen.add(key)
        reconciled.append(source)

    return reconciled
