"""
Identity-guarded analysis pipeline.

Link path:
1. Extract the video id from the URL
2. Verify the video through oEmbed
3. Bind id/title into the prompt and call Gemini (with search grounding)
4. Decode the JSON document
5. Surface a model-declared error
6. Pin videoUrl to the original URL
7. Require and match videoId
8. Require and match videoTitle
9. Reconcile sources

Any failed step raises immediately; nothing downstream of it runs.

File path: sample frames -> prompt -> Gemini -> decode -> declared error ->
stamp the file name as title and clear videoUrl.
"""

from pathlib import Path
from typing import Optional

from .analysis.response_parser import parse_analysis
from .analysis.sources import reconcile_sources
from .config import Settings
from .errors import (
    InvalidLinkError,
    MissingVideoIdError,
    ModelDeclinedIdentificationError,
    TitleMismatchError,
    UnparsableResponseError,
    UnverifiableVideoError,
    VideoIdMismatchError,
)
from .gemini import GeminiAnalyzer
from .identity.oembed import OEmbedVerifier
from .identity.title_match import titles_match
from .identity.video_id import extract_video_id
from .models import (
    AnalysisDocument,
    AnalysisMode,
    AnalysisRequest,
    FileReference,
    LinkReference,
)
from .prompts import build_file_prompt, build_link_prompt
from .video.frame_sampler import open_video_resource, sample_frames


class AnalysisPipeline:
    """
    Runs link and file analyses against Gemini.

    The credential is checked at construction time, before any I/O.
    """

    def __init__(
        self,
        settings: Settings,
        analyzer: Optional[GeminiAnalyzer] = None,
        verifier: Optional[OEmbedVerifier] = None,
        resource_opener=open_video_resource,
    ):
        """
        Args:
            settings: Resolved process settings
            analyzer: Generation adapter (defaults to GeminiAnalyzer)
            verifier: Metadata verifier (defaults to OEmbedVerifier)
            resource_opener: Async context manager factory (data, suffix) -> VideoResource
        """
        api_key = settings.require_api_key()
        self.settings = settings
        self.analyzer = analyzer or GeminiAnalyzer(api_key=api_key, model=settings.gemini_model)
        self.verifier = verifier or OEmbedVerifier(
            endpoint=settings.oembed_endpoint,
            timeout=settings.oembed_timeout,
        )
        self.resource_opener = resource_opener

    async def analyze(self, request: AnalysisRequest) -> AnalysisDocument:
        """Dispatch a link or file request."""
        if request.kind == "file":
            return await self.analyze_file(request.name, request.data)
        return await self.analyze_link(request.url, request.mode)

    async def analyze_link(self, url: str, mode: AnalysisMode = "fast") -> AnalysisDocument:
        """
        Analyze a public YouTube video, guarding its identity end to end.

        Args:
            url: URL exactly as supplied by the user
            mode: "fast" or "detailed" (prompt verbosity only)

        Returns:
            Trusted AnalysisDocument

        Raises:
            AnalysisError: On the first failed guard
        """
        print(f"\n{'='*60}")
        print(f"LINK ANALYSIS ({mode.upper()})")
        print(f"{'='*60}")

        # Guard 1: the link must carry a video id
        video_id = extract_video_id(url)
        if not video_id:
            print(f"[PIPELINE] Rejected: no video id in {url!r}")
            raise InvalidLinkError()
        reference = LinkReference(url=url, video_id=video_id)
        print(f"[PIPELINE] Video id: {reference.video_id}")

        # Guard 2: the video must be public and verifiable
        metadata = await self.verifier.verify(reference.url)
        if metadata is None:
            print("[PIPELINE] Rejected: video could not be verified")
            raise UnverifiableVideoError()

        prompt = build_link_prompt(reference.url, reference.video_id, metadata, mode)
        result = await self.analyzer.generate(
            prompt,
            grounding=True,
            thinking_budget=self.settings.web_thinking_budget,
        )

        document = parse_analysis(result.text)
        if document is None:
            print("[PIPELINE] Rejected: response has no decodable JSON document")
            raise UnparsableResponseError()

        if document.error:
            print(f"[PIPELINE] Model declined: {document.error}")
            raise ModelDeclinedIdentificationError(document.error)

        # Guard 3: never trust the echoed URL
        document.video_url = reference.url

        # Guard 4: echoed id must be present and identical
        if not document.video_id:
            print("[PIPELINE] Rejected: response has no videoId")
            raise MissingVideoIdError()
        if document.video_id != reference.video_id:
            print(f"[PIPELINE] Rejected: videoId {document.video_id} != {reference.video_id}")
            raise VideoIdMismatchError(expected=reference.video_id, returned=document.video_id)

        # Guard 5: echoed title must match the verified title
        if not isinstance(document.video_title, str) or not titles_match(metadata.title, document.video_title):
            print(f"[PIPELINE] Rejected: title {document.video_title!r} does not match {metadata.title!r}")
            raise TitleMismatchError()

        document.sources = reconcile_sources(reference.url, result.sources)
        print(f"[PIPELINE] Analysis accepted with {len(document.sources)} sources")
        return document

    async def analyze_file(self, name: str, data: bytes) -> AnalysisDocument:
        """
        Analyze an uploaded video from sampled frames.

        Args:
            name: Uploaded file name (becomes the document title)
            data: Raw video bytes

        Returns:
            AnalysisDocument titled with the file name and without videoUrl
        """
        reference = FileReference(name=name)

        print(f"\n{'='*60}")
        print(f"FILE ANALYSIS: {reference.name}")
        print(f"{'='*60}")

        suffix = Path(reference.name).suffix or ".mp4"
        async with self.resource_opener(data, suffix) as resource:
            frames = await sample_frames(resource, self.settings.max_frames)

        result = await self.analyzer.generate(
            build_file_prompt(reference.name),
            images=frames,
            thinking_budget=self.settings.file_thinking_budget,
        )

        document = parse_analysis(result.text)
        if document is None:
            print("[PIPELINE] Rejected: visual analysis returned no decodable JSON document")
            raise UnparsableResponseError("Visual analysis failed: the model response could not be processed.")

        if document.error:
            print(f"[PIPELINE] Model declined: {document.error}")
            raise ModelDeclinedIdentificationError(document.error)

        # The file name is the only trustworthy identity anchor
        document.video_title = reference.name
        document.video_url = None
        print(f"[PIPELINE] Visual analysis complete for {reference.name}")
        return document
