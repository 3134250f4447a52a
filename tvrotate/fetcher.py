"""Fetch the key set to rotate in from the source URL."""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from .config import RotatorConfig
from .contracts import CredentialEnvelope
from .errors import MalformedSource, SourceUnreachable

logger = logging.getLogger(__name__)


def build_client() -> httpx.AsyncClient:
    """Create the HTTP client shared by the fetcher and updater."""
    return httpx.AsyncClient(follow_redirects=True)


class CredentialFetcher:
    """Retrieves the current key set and wraps it in a credential envelope."""

    def __init__(
        self, config: RotatorConfig, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or build_client()

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def fetch_credentials(self) -> str:
        """Return the source key set as a compact ``{"keys": [...]}`` string."""
        url = self._config.source_url
        logger.debug(f"Fetching credentials from {url}")
        try:
            response = await self._client.get(url)
        except httpx.TransportError as e:
            raise SourceUnreachable(f"Could not reach source {url}: {e}") from e

        try:
            document = json.loads(response.content)
        except ValueError as e:
            raise MalformedSource(f"Source {url} did not return JSON: {e}") from e

        envelope = CredentialEnvelope.from_source(document)
        logger.debug(f"Fetched {len(envelope.keys)} keys from {url}")
        return envelope.to_json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CredentialFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
