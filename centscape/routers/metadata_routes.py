from fastapi import APIRouter, Depends

from centscape.config.logging_config import get_logger
from centscape.exceptions.metadata import (
    ExtractionFailedException,
    NormalizationFailedException,
    map_service_error,
)
from centscape.dependencies.metadata_deps import get_metadata_service
from centscape.models.requests import PreviewRequest, PreviewResponse, UrlRequest
from centscape.services.exceptions import ServiceError
from centscape.services.metadata_service import MetadataService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/normalize-url")
async def normalize_url(body: UrlRequest, service: MetadataService = Depends(get_metadata_service)):
    logger.info(f"Received request to normalize URL: {body.url}")
    try:
        normalized = service.normalize_url(body.url)
    except ServiceError as e:
        raise map_service_error(e, NormalizationFailedException()) from e
    return {"success": True, "data": normalized.to_dict()}


@router.post("/extract-metadata")
async def extract_metadata(body: UrlRequest, service: MetadataService = Depends(get_metadata_service)):
    logger.info(f"Received request for metadata: {body.url}")
    try:
        result = await service.extract(body.url)
    except ServiceError as e:
        logger.error(f"Error in metadata request for {body.url}: {e.message}")
        raise map_service_error(e, ExtractionFailedException()) from e

    logger.info(f"Successfully returned metadata for: {body.url}")
    return {"success": True, "data": result}


@router.post("/preview", response_model=PreviewResponse)
async def preview(body: PreviewRequest, service: MetadataService = Depends(get_metadata_service)):
    logger.info(f"Received preview request: {body.url}")
    try:
        return await service.preview(body.url, body.raw_html)
    except ServiceError as e:
        logger.error(f"Error in preview request for {body.url}: {e.message}")
        raise map_service_error(e, ExtractionFailedException("Preview endpoint error")) from e
