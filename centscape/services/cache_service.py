import logging
from abc import ABC, abstractmethod
from typing import Optional

from cachetools import TTLCache

from centscape.core.models import ExtractedMetadata


logger = logging.getLogger(__name__)


class CacheInterface(ABC):
    """Interface for caching following the Dependency Inversion Principle"""

    @abstractmethod
    def get(self, key: str) -> Optional[ExtractedMetadata]:
        """
        Get metadata from cache.

        Args:
            key: The cache key (the normalized URL)

        Returns:
            The cached ExtractedMetadata if found, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: str, value: ExtractedMetadata) -> None:
        """
        Set metadata in cache.

        Args:
            key: The cache key (the normalized URL)
            value: The ExtractedMetadata to cache
        """
        pass


class MetadataCache(CacheInterface):
    """
    TTL Cache for extracted metadata with configurable size and TTL.
    """

    def __init__(self, maxsize: int = 100, ttl: float = 600):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of items to cache
            ttl: Time to live in seconds
        """
        self.cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def get(self, key: str) -> Optional[ExtractedMetadata]:
        logger.debug(f"Checking cache for key: {key}")
        cached_item = self.cache.get(key)
        if cached_item:
            logger.debug(f"Cache hit for key: {key}")
        else:
            logger.debug(f"Cache miss for key: {key}")
        return cached_item

    def set(self, key: str, value: ExtractedMetadata) -> None:
        logger.debug(f"Storing metadata in cache for key: {key}")
        self.cache[key] = value


class NullCache(CacheInterface):
    """Cache that stores nothing, used when caching is disabled"""

    def get(self, key: str) -> Optional[ExtractedMetadata]:
        return None

    def set(self, key: str, value: ExtractedMetadata) -> None:
        return None
