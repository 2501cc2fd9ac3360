"""
HTTP client for the public YouTube oEmbed endpoint.

This is the only identity signal in the pipeline that does not come from the
model, so any doubt about the response means "unverifiable".
"""

from typing import Optional

import httpx

from ..models import VerifiedMetadata


class OEmbedVerifier:
    """Looks up title/author for a video URL through oEmbed."""

    def __init__(
        self,
        endpoint: str = "https://www.youtube.com/oembed",
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the verifier.

        Args:
            endpoint: oEmbed endpoint URL
            timeout: Transport timeout in seconds
            client: Optional shared AsyncClient (mainly for tests)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = client

    async def _get(self, url: str) -> httpx.Response:
        params = {"format": "json", "url": url}
        if self._client is not None:
            return await self._client.get(self.endpoint, params=params)

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(self.endpoint, params=params)

    async def verify(self, url: str) -> Optional[VerifiedMetadata]:
        """
        Fetch verified metadata for the exact user-supplied URL.

        Args:
            url: Video URL, passed through unchanged

        Returns:
            VerifiedMetadata, or None if the video could not be verified
        """
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            print(f"[OEMBED] Request failed: {e}")
            return None

        if not response.is_success:
            print(f"[OEMBED] Verification failed with status {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError:
            print("[OEMBED] Response body is not valid JSON")
            return None

        if not isinstance(data, dict):
            return None

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            print("[OEMBED] Response has no title")
            return None

        author = data.get("author_name")
        metadata = VerifiedMetadata(
            title=title,
            author=author if isinstance(author, str) else None,
        )
        print(f"[OEMBED] Verified: \"{metadata.title}\" by {metadata.author or 'unknown'}")
        return metadata
