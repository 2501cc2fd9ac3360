"""
Identity-guarded tactical analysis of football videos.
"""

from .config import Settings, get_settings, load_settings
from .errors import AnalysisError, ErrorKind
from .models import AnalysisDocument, FileAnalysisRequest, LinkAnalysisRequest, Source
from .pipeline import AnalysisPipeline

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "AnalysisError",
    "ErrorKind",
    "AnalysisDocument",
    "FileAnalysisRequest",
    "LinkAnalysisRequest",
    "Source",
    "AnalysisPipeline",
]
