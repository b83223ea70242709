import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from centscape.core.config import DEFAULT_USER_AGENT
from .exceptions import FetchError, HTTPFetchError, FetchTimeoutError


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_MS = 15000


class WebFetcherInterface(ABC):
    """Interface for fetching web content following the Dependency Inversion Principle"""

    @abstractmethod
    async def fetch_html(self, url: str) -> str:
        pass


class WebFetcher(WebFetcherInterface):
    """
    Fetches a page's HTML with a browser-like User-Agent.

    The whole request, redirects included, is bounded by ``timeout_ms``. No retries are made.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str = DEFAULT_USER_AGENT,
        follow_redirects: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        self.follow_redirects = follow_redirects
        self.transport = transport

    @property
    def headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9"
        }

    async def fetch_html(self, url: str) -> str:
        """Fetch HTML content from a URL"""
        logger.info(f"Fetching HTML content from URL: {url}")
        timeout = self.timeout_ms / 1000

        try:
            return await asyncio.wait_for(self._get(url, timeout), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Timed out after {self.timeout_ms}ms fetching URL {url}")
            raise FetchTimeoutError(url, self.timeout_ms) from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error occurred while fetching URL {url}: {e}")
            raise HTTPFetchError(url, e.response.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request error occurred while fetching URL {url}: {str(e)}")
            raise FetchError(url, str(e) or type(e).__name__) from e

    async def _get(self, url: str, timeout: float) -> str:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=self.follow_redirects,
            headers=self.headers,
            transport=self.transport
        ) as client:
            res = await client.get(url)
            res.raise_for_status()

            logger.info(f"Successfully fetched HTML content from URL: {url}")
            return res.text
