"""
Analysis document handling: response parsing and source reconciliation.
"""

from .response_parser import extract_json_block, parse_analysis
from .sources import ORIGINAL_VIDEO_SOURCE_TITLE, reconcile_sources

__all__ = [
    "extract_json_block",
    "parse_analysis",
    "ORIGINAL_VIDEO_SOURCE_TITLE",
    "reconcile_sources",
]
