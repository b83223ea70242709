from typing import Dict, Type, TypeVar

from centscape.core.config import Settings
from .cache_service import MetadataCache, NullCache, CacheInterface
from .image_proxy import ImageProxy
from .metadata_extractor import MetadataExtractor, MetadataExtractorInterface
from .metadata_service import MetadataService
from .url_normalizer import UrlNormalizer
from .web_fetcher import WebFetcher, WebFetcherInterface

T = TypeVar('T')


class ServiceContainer:
    """Container for managing service dependencies with dependency injection"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._services: Dict[Type, object] = {}

        # Register services in dependency order
        self._register_services()

    def _register_services(self) -> None:
        """Register all services with proper dependency injection"""
        self._services[UrlNormalizer] = UrlNormalizer()
        self._services[WebFetcherInterface] = WebFetcher(
            timeout_ms=self.settings.fetch_timeout_ms,
            user_agent=self.settings.fetch_user_agent,
            follow_redirects=self.settings.fetch_follow_redirects
        )
        if self.settings.cache_enabled:
            self._services[CacheInterface] = MetadataCache(
                maxsize=self.settings.cache_maxsize,
                ttl=self.settings.cache_ttl_seconds
            )
        else:
            self._services[CacheInterface] = NullCache()
        self._services[MetadataExtractorInterface] = MetadataExtractor(
            self._services[WebFetcherInterface]
        )

        # Main service that depends on others
        self._services[MetadataService] = MetadataService(
            self._services[UrlNormalizer],
            self._services[MetadataExtractorInterface],
            self._services[CacheInterface],
            block_private_hosts=not self.settings.allow_private_hosts
        )
        self._services[ImageProxy] = ImageProxy(
            timeout_ms=self.settings.image_proxy_timeout_ms,
            user_agent=self.settings.fetch_user_agent,
            block_private_hosts=not self.settings.allow_private_hosts
        )

    def get_metadata_service(self) -> MetadataService:
        """Get the metadata service instance"""
        return self._services[MetadataService]  # type: ignore

    def get_image_proxy(self) -> ImageProxy:
        """Get the image proxy instance"""
        return self._services[ImageProxy]  # type: ignore

    def get_service(self, interface: Type[T]) -> T:
        """Generic method to retrieve a service by its interface"""
        service = self._services.get(interface)
        if service is None:
            raise ValueError(f"Service for interface {interface.__name__} not found")
        return service  # type: ignore
