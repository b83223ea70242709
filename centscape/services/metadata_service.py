import logging
from typing import Dict, Any, Optional, Tuple
from urllib.parse import urlsplit

from centscape.core.models import ExtractedMetadata, NormalizedUrl
from .cache_service import CacheInterface
from .exceptions import InvalidUrlError, MissingContentError, MissingUrlError, PrivateHostError
from .metadata_extractor import MetadataExtractorInterface
from .url_normalizer import UrlNormalizer
from .url_validator import is_private_host


logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class MetadataService:
    """
    Main service for URL normalization and metadata extraction.

    Validates input, canonicalizes the URL, and caches extracted records by canonical URL.
    Errors are raised as ServiceError subclasses; the API layer maps them to responses.
    """

    def __init__(
        self,
        url_normalizer: UrlNormalizer,
        metadata_extractor: MetadataExtractorInterface,
        cache: CacheInterface,
        block_private_hosts: bool = True
    ):
        self.url_normalizer = url_normalizer
        self.metadata_extractor = metadata_extractor
        self.cache = cache
        self.block_private_hosts = block_private_hosts

    def normalize_url(self, url: Optional[str]) -> NormalizedUrl:
        if _is_blank(url):
            logger.warning("Empty or whitespace-only URL provided for normalization")
            raise MissingUrlError()
        return self.url_normalizer.normalize(url)

    async def extract(self, url: Optional[str]) -> Dict[str, Any]:
        """
        Extract metadata for a URL, reporting the URL transformation that was applied.

        Args:
            url: The URL to extract metadata from

        Returns:
            The ExtractedMetadata payload plus ``urlTransformation`` and ``cached``

        Raises:
            MissingUrlError, InvalidUrlError: For bad input, before any fetch
            FetchError, ParseError: When the page cannot be retrieved or parsed
        """
        normalized = self._validated(url)
        metadata, cached = await self._get_metadata(normalized)

        result = metadata.to_dict()
        result["urlTransformation"] = normalized.to_dict()
        result["cached"] = cached
        return result

    async def preview(self, url: Optional[str] = None, raw_html: Optional[str] = None) -> Dict[str, Any]:
        """
        Build the flat legacy preview record.

        When ``raw_html`` is given it is parsed directly and ``url`` only serves as its base.
        """
        if _is_blank(url) and _is_blank(raw_html):
            raise MissingContentError()
        if _is_blank(url):
            raise MissingUrlError("url is required as the base for raw_html")

        normalized = self._validated(url)
        if raw_html:
            logger.info(f"Extracting preview from supplied HTML for URL: {normalized.normalized}")
            metadata = self.metadata_extractor.extract(raw_html, normalized.normalized)
        else:
            metadata, _ = await self._get_metadata(normalized)

        return metadata.to_preview(normalized.normalized)

    def _validated(self, url: Optional[str]) -> NormalizedUrl:
        if _is_blank(url):
            logger.warning("Empty or whitespace-only URL parameter provided")
            raise MissingUrlError()
        url = url.strip()
        if not self.url_normalizer.is_valid_url(url):
            logger.warning(f"Invalid URL provided: {url}")
            raise InvalidUrlError(url)
        return self.url_normalizer.normalize(url)

    async def _get_metadata(self, normalized: NormalizedUrl) -> Tuple[ExtractedMetadata, bool]:
        key = normalized.normalized
        cached_data = self.cache.get(key)
        if cached_data:
            logger.info(f"Metadata retrieved from cache for URL: {key}")
            return cached_data, True

        self._ensure_fetchable(key)
        logger.info(f"Metadata not in cache, extracting for URL: {key}")
        metadata = await self.metadata_extractor.extract_metadata(key)
        self.cache.set(key, metadata)
        logger.info(f"Metadata extracted and cached for URL: {key}")
        return metadata, False

    def _ensure_fetchable(self, url: str) -> None:
        """
        Refuse to fetch from localhost or private network addresses.

        Raises:
            PrivateHostError: When blocking is enabled and the host is local or private
        """
        hostname = urlsplit(url).hostname or ""
        if self.block_private_hosts and is_private_host(hostname):
            logger.warning(f"Refusing to fetch private or local host: {url}")
            raise PrivateHostError(url)
