from functools import lru_cache

from centscape.core.config import settings
from centscape.services.container import ServiceContainer
from centscape.services.image_proxy import ImageProxy
from centscape.services.metadata_service import MetadataService


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    return ServiceContainer(settings)


def get_metadata_service() -> MetadataService:
    """FastAPI dependency returning the shared metadata service"""
    return get_container().get_metadata_service()


def get_image_proxy() -> ImageProxy:
    return get_container().get_image_proxy()
