"""Map HTTP and timer triggers onto credential operations."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from .config import RotatorConfig
from .fetcher import CredentialFetcher
from .tokens import get_bearer_token
from .updater import CONTENT_TYPE, CredentialUpdater

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str]


class RequestDispatcher:
    """Entry point shared by the HTTP surface and the timer host.

    Every invocation is independent; overlapping triggers issue independent
    updates.
    """

    def __init__(
        self,
        config: RotatorConfig,
        fetcher: Optional[CredentialFetcher] = None,
        updater: Optional[CredentialUpdater] = None,
        token_provider: Optional[TokenProvider] = None,
    ) -> None:
        self._config = config
        self._updater = updater or CredentialUpdater(config, fetcher=fetcher)
        self._fetcher = fetcher or self._updater.fetcher
        self._token_provider = token_provider or (
            lambda: get_bearer_token(config)
        )

    async def handle_request(self, method: str) -> str:
        """Return the response body for an HTTP request with ``method``."""
        method = method.upper()
        if method == "GET":
            return await self._fetcher.fetch_credentials()
        if method == "POST":
            return await self._updater.update_credentials(self._token_provider())
        return ""

    async def scheduled(self) -> None:
        """Timer trigger: run an update and wait for it to settle.

        The outcome is never returned; failures are logged here.
        """
        task = asyncio.ensure_future(self._update_from_timer())
        await asyncio.wait([task])
        if task.cancelled():
            logger.warning("Scheduled credential update was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Scheduled credential update for token configuration "
                f"{self._config.token_config_id} failed",
                exc_info=exc,
            )

    async def _update_from_timer(self) -> str:
        return await self._updater.update_credentials(self._token_provider())

    async def aclose(self) -> None:
        await self._updater.aclose()


__all__ = ["CONTENT_TYPE", "RequestDispatcher", "TokenProvider"]
