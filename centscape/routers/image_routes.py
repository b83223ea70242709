from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from centscape.config.logging_config import get_logger
from centscape.dependencies.metadata_deps import get_image_proxy
from centscape.exceptions.metadata import map_image_proxy_error
from centscape.services.exceptions import ServiceError
from centscape.services.image_proxy import ImageProxy

logger = get_logger(__name__)

router = APIRouter()

PROXY_CACHE_CONTROL = "public, max-age=3600"


@router.get("/proxy-image")
async def proxy_image(url: Optional[str] = None, proxy: ImageProxy = Depends(get_image_proxy)):
    try:
        image = await proxy.open(url)
    except ServiceError as e:
        logger.error(f"Error proxying image {url}: {e.message}")
        raise map_image_proxy_error(e) from e

    return StreamingResponse(
        image.chunks,
        media_type=image.content_type,
        headers={
            "Cache-Control": PROXY_CACHE_CONTROL,
            "Access-Control-Allow-Origin": "*"
        },
        background=BackgroundTask(image.aclose)
    )
