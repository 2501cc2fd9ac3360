"""
Pydantic models for video references, verified metadata and analysis documents.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


AnalysisMode = Literal["fast", "detailed"]


class LinkReference(BaseModel):
    """A public video link and the identifier extracted from it."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    url: str  # exactly as supplied by the user
    video_id: str


class FileReference(BaseModel):
    """An uploaded video file, identified only by its name."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    name: str


VideoReference = Union[LinkReference, FileReference]


class VerifiedMetadata(BaseModel):
    """Title/author sourced from the public embed-metadata endpoint."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    author: Optional[str] = None


class Source(BaseModel):
    """A citation source. Uniqueness is keyed on the trimmed uri."""
    title: Optional[str] = None
    uri: str

    @field_validator("uri")
    @classmethod
    def _uri_not_blank(cls, value: str) -> str:
        # Stored untouched; only the blank check trims
        if not value.strip():
            raise ValueError("source uri must not be empty")
        return value


class GenerationResult(BaseModel):
    """Raw text and grounding citations returned by the generation call."""
    text: str = ""
    sources: List[Source] = Field(default_factory=list)


IDENTITY_FIELD_NAMES = ("video_title", "video_url", "video_id")


class AnalysisDocument(BaseModel):
    """
    Structured tactical analysis.

    Only the identity fields are typed. Every other key the model writes
    (teams, formations, statistics, ...) is kept as opaque payload.
    """
    model_config = ConfigDict(extra="allow")

    video_title: Optional[str] = Field(default=None, alias="videoTitle")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    video_id: Optional[str] = Field(default=None, alias="videoId")
    error: Optional[str] = None
    sources: List[Source] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _reject_ambiguous_identity(cls, data: Any) -> Any:
        # "video_id" next to (or instead of) "videoId" would ride along as
        # payload unchecked, so any snake_case identity key fails decoding
        if isinstance(data, dict):
            for name in IDENTITY_FIELD_NAMES:
                if name in data:
                    raise ValueError(f"ambiguous identity field: {name}")
        return data

    @field_validator("video_title", "video_url", "video_id", mode="before")
    @classmethod
    def _identity_must_be_string(cls, value: Any) -> Optional[str]:
        # A non-string identity value counts as absent
        return value if isinstance(value, str) else None

    @field_validator("error", mode="before")
    @classmethod
    def _declared_error(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("sources", mode="before")
    @classmethod
    def _drop_malformed_sources(cls, value: Any) -> List[Any]:
        if not isinstance(value, list):
            return []

        seen = set()
        kept = []
        for item in value:
            if not isinstance(item, dict) or not isinstance(item.get("uri"), str):
                continue
            if item.get("title") is not None and not isinstance(item.get("title"), str):
                continue
            key = item["uri"].strip()
            if not key or key in seen:
                continue
            seen.add(key)
            kept.append(item)
        return kept

    def to_response(self) -> dict:
        """Serialize with the camelCase field names clients expect."""
        return self.model_dump(mode="json", by_alias=True, exclude={"error"})


class LinkAnalysisRequest(BaseModel):
    kind: Literal["link"] = "link"
    url: str
    mode: AnalysisMode = "fast"


class FileAnalysisRequest(BaseModel):
    kind: Literal["file"] = "file"
    name: str
    data: bytes


AnalysisRequest = Union[LinkAnalysisRequest, FileAnalysisRequest]
