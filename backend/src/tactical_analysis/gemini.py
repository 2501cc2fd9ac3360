"""
Thin async adapter around the Gemini generate_content API.

Returns the raw text plus any web grounding citations. The text is
untrusted: identity checks happen in the pipeline.
"""

from typing import Any, List, Optional, Sequence

from google import genai
from google.genai import types

from .models import GenerationResult, Source


class GeminiAnalyzer:
    """Sends analysis prompts (optionally with frames) to Gemini."""

    def __init__(self, api_key: str, model: str = "gemini-3-pro-preview", client: Optional[Any] = None):
        """
        Args:
            api_key: Gemini API key
            model: Model identifier
            client: Pre-built genai.Client (tests inject a fake)
        """
        self.model = model
        self.client = client if client is not None else genai.Client(api_key=api_key)

    def _build_config(self, grounding: bool, thinking_budget: Optional[int]) -> types.GenerateContentConfig:
        config = {}
        if grounding:
            config["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if thinking_budget is not None:
            config["thinking_config"] = types.ThinkingConfig(thinking_budget=thinking_budget)
        return types.GenerateContentConfig(**config)

    async def generate(
        self,
        prompt: str,
        images: Sequence[bytes] = (),
        grounding: bool = False,
        thinking_budget: Optional[int] = None,
    ) -> GenerationResult:
        """
        Call the model once.

        Args:
            prompt: Prompt text
            images: JPEG frames appended after the prompt
            grounding: Enable Google Search grounding
            thinking_budget: Thinking token budget

        Returns:
            GenerationResult with raw text and grounding sources
        """
        parts = [types.Part(text=prompt)]
        parts.extend(types.Part.from_bytes(data=image, mime_type="image/jpeg") for image in images)
        content = types.Content(role="user", parts=parts)

        print(f"[GEMINI] Calling {self.model} (images={len(images)}, grounding={grounding})...")
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=content,
            config=self._build_config(grounding, thinking_budget),
        )

        return GenerationResult(
            text=response.text or "",
            sources=extract_grounding_sources(response),
        )


def extract_grounding_sources(response: Any) -> List[Source]:
    """Collect web citations from the first candidate's grounding metadata."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if isinstance(uri, str) and uri.strip():
            sources.append(Source(title=getattr(web, "title", None), uri=uri))
    return sources
