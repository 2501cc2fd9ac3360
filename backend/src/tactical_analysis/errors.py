"""
Error kinds raised by the tactical analysis pipeline.

Every error is terminal: the pipeline never returns a partial document.
The message is user-facing and is surfaced verbatim by the API layer.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Tagged reason carried back in place of an analysis document."""
    INVALID_LINK = "InvalidLink"
    UNVERIFIABLE_VIDEO = "UnverifiableVideo"
    UNPARSABLE_RESPONSE = "UnparsableResponse"
    MODEL_DECLINED_IDENTIFICATION = "ModelDeclinedIdentification"
    MISSING_VIDEO_ID = "MissingVideoId"
    VIDEO_ID_MISMATCH = "VideoIdMismatch"
    TITLE_MISMATCH = "TitleMismatch"
    FRAME_EXTRACTION_FAILED = "FrameExtractionFailed"
    MISSING_CREDENTIAL = "MissingCredential"


class AnalysisError(Exception):
    """Base exception for all analysis failures."""

    kind: ErrorKind
    default_message = "Analysis failed."

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.kind.value, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidLinkError(AnalysisError):
    """No video identifier could be extracted from the supplied URL."""
    kind = ErrorKind.INVALID_LINK
    default_message = (
        "Invalid YouTube link or missing video id. Paste the full video URL "
        "(e.g. https://www.youtube.com/watch?v=XXXX)."
    )


class UnverifiableVideoError(AnalysisError):
    """The metadata endpoint could not confirm the video exists and is public."""
    kind = ErrorKind.UNVERIFIABLE_VIDEO
    default_message = (
        "Could not verify this video with YouTube (oEmbed). "
        "Check that the link is correct and the video is public."
    )


class UnparsableResponseError(AnalysisError):
    kind = ErrorKind.UNPARSABLE_RESPONSE
    default_message = "Critical error: the model response could not be processed. Please try again."


class ModelDeclinedIdentificationError(AnalysisError):
    """The model itself reported that it could not identify the match safely."""
    kind = ErrorKind.MODEL_DECLINED_IDENTIFICATION
    default_message = "The model could not identify the match in this video with confidence."


class MissingVideoIdError(AnalysisError):
    kind = ErrorKind.MISSING_VIDEO_ID
    default_message = (
        "Error: the model did not return a videoId. "
        "The analysis was blocked to avoid analyzing a different video."
    )


class VideoIdMismatchError(AnalysisError):
    """The model echoed a different video id than the one requested."""
    kind = ErrorKind.VIDEO_ID_MISMATCH

    def __init__(self, expected: str, returned: str):
        self.expected = expected
        self.returned = returned
        super().__init__(
            f"Error: the model returned a different video than requested (ID {returned} != {expected}).",
            details={"expected": expected, "returned": returned},
        )


class TitleMismatchError(AnalysisError):
    kind = ErrorKind.TITLE_MISMATCH
    default_message = (
        "Error: the returned title does not match the requested video. "
        "The analysis was blocked to avoid analyzing a different video."
    )


class FrameExtractionError(AnalysisError):
    """The video resource could not be loaded or decoded for sampling."""
    kind = ErrorKind.FRAME_EXTRACTION_FAILED
    default_message = "Error while processing the video."


class MissingCredentialError(AnalysisError):
    """No generation-service credential is configured."""
    kind = ErrorKind.MISSING_CREDENTIAL
    default_message = (
        "API key not configured. Set GEMINI_API_KEY (or VITE_GEMINI_API_KEY / API_KEY) "
        "in the environment and restart the service."
    )
