"""
Recovers the JSON analysis document from raw model output.
"""

import json
from typing import Optional

from pydantic import ValidationError

from ..models import AnalysisDocument


def extract_json_block(text: str) -> Optional[str]:
    """
    Return the substring from the first '{' to the last '}'.

    Note: this does not track string or nesting state, so a brace inside a
    string value outside the main object can break extraction.
    """
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


def parse_analysis(text: str) -> Optional[AnalysisDocument]:
    """
    Parse the model's raw text into an AnalysisDocument.

    Args:
        text: Raw model output, possibly wrapped in prose or code fences

    Returns:
        AnalysisDocument, or None when no decodable object is found
    """
    block = extract_json_block(text)
    if block is None:
        return None

    try:
        data = json.loads(block)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None

    try:
        return AnalysisDocument.model_validate(data)
    except ValidationError:
        return None
