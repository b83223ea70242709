import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Optional
from urllib.parse import urlsplit

import httpx

from centscape.core.config import DEFAULT_USER_AGENT
from .exceptions import FetchError, FetchTimeoutError, HTTPFetchError, InvalidUrlError, MissingUrlError, PrivateHostError
from .url_validator import is_private_host, is_valid_url


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_MS = 10000
DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass
class ProxiedImage:
    """An upstream image response that is still streaming; ``aclose`` must be awaited when done"""
    content_type: str
    chunks: AsyncIterator[bytes]
    aclose: Callable[[], Awaitable[None]]


class ImageProxy:
    """
    Relays remote images so clients can display them without cross-origin restrictions.

    The upstream body is streamed through, never buffered. The timeout covers the request
    up to the response headers.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str = DEFAULT_USER_AGENT,
        block_private_hosts: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        self.block_private_hosts = block_private_hosts
        self.transport = transport

    def headers_for(self, url: str) -> dict:
        parts = urlsplit(url)
        return {
            "User-Agent": self.user_agent,
            "Accept": "image/webp,image/apng,image/*,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": f"{parts.scheme}://{parts.netloc}"
        }

    async def open(self, url: Optional[str]) -> ProxiedImage:
        """
        Start streaming the image at ``url``.

        Raises:
            MissingUrlError, InvalidUrlError: For bad input, before any request
            FetchError: If the upstream request fails or answers with an error status
        """
        if not url or not url.strip():
            raise MissingUrlError("Image URL is required")
        url = url.strip()
        if not is_valid_url(url):
            raise InvalidUrlError(url, "Invalid image URL provided")
        if self.block_private_hosts and is_private_host(urlsplit(url).hostname or ""):
            raise PrivateHostError(url)

        logger.info(f"Proxying image: {url}")
        timeout = self.timeout_ms / 1000
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=self.transport)
        try:
            request = client.build_request("GET", url, headers=self.headers_for(url))
            response = await asyncio.wait_for(client.send(request, stream=True), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            await client.aclose()
            logger.error(f"Timed out after {self.timeout_ms}ms proxying image {url}")
            raise FetchTimeoutError(url, self.timeout_ms) from e
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(f"Request error occurred while proxying image {url}: {str(e)}")
            raise FetchError(url, str(e) or type(e).__name__) from e

        if response.is_error:
            status_code = response.status_code
            await response.aclose()
            await client.aclose()
            logger.error(f"Image upstream answered {status_code} for {url}")
            raise HTTPFetchError(url, status_code)

        async def aclose() -> None:
            await response.aclose()
            await client.aclose()

        return ProxiedImage(
            content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
            chunks=response.aiter_bytes(),
            aclose=aclose
        )
