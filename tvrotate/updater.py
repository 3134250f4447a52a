"""Push fetched credentials to the management API."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import RotatorConfig
from .errors import ManagementAPIFailure
from .fetcher import CredentialFetcher

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json;charset=UTF-8"


class CredentialUpdater:
    """Replaces a token configuration's credentials with the source key set."""

    def __init__(
        self,
        config: RotatorConfig,
        fetcher: Optional[CredentialFetcher] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config
        self._fetcher = fetcher or CredentialFetcher(config, client=client)
        self._client = client or self._fetcher.client

    @property
    def fetcher(self) -> CredentialFetcher:
        return self._fetcher

    async def update_credentials(self, bearer: str) -> str:
        """Fetch the key set and PUT it to the token configuration.

        Args:
            bearer: Management API token allowed to edit the token configuration.

        Returns:
            The management API response body, whatever its status code.
        """
        url = self._config.credentials_url
        body = await self._fetcher.fetch_credentials()
        headers = {
            "Authorization": f"Bearer {bearer}",
            "content-type": CONTENT_TYPE,
        }
        try:
            response = await self._client.put(
                url, content=body.encode("utf-8"), headers=headers
            )
        except httpx.TransportError as e:
            raise ManagementAPIFailure(
                f"Could not reach management API at {url}: {e}"
            ) from e

        logger.info(
            f"Updated credentials for token configuration "
            f"{self._config.token_config_id}: HTTP {response.status_code}"
        )
        if not response.is_success:
            logger.warning(
                f"Management API returned HTTP {response.status_code} for "
                f"token configuration {self._config.token_config_id}"
            )
        return response.text

    async def aclose(self) -> None:
        await self._fetcher.aclose()
