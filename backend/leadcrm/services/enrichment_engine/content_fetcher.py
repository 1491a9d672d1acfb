# backend/leadcrm/services/enrichment_engine/content_fetcher.py
"""Fetch raw website content for analysis."""

import asyncio
import logging
from typing import Optional

import httpx

from leadcrm.config import settings

logger = logging.getLogger(__name__)


class ContentFetcher:
    """Single GET per URL, hard timeout, no retries."""

    def __init__(
        self,
        timeout: float = None,
        user_agent: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.FETCH_USER_AGENT
        self._transport = transport

    async def fetch(self, url: str) -> Optional[str]:
        """
        Returns the page body on a 2xx response, None when the site is
        unreachable (timeout, network error, non-2xx).

        ``timeout`` caps the whole request including the body download;
        httpx timeouts alone only bound each read.
        """
        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout)

            if not response.is_success:
                logger.info(f"Website {url} answered {response.status_code}")
                return None

            return response.text

        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.info(f"Website {url} timed out after {self.timeout:.0f}s")
            return None
        except Exception as e:
            logger.info(f"Website {url} unreachable: {e}")
            return None

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport
        ) as client:
            return await client.get(url, headers={"User-Agent": self.user_agent})
