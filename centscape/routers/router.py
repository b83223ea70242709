from fastapi import APIRouter
from . import root_routes, metadata_routes, image_routes

router = APIRouter()

router.include_router(root_routes.router, tags=["root"])
router.include_router(metadata_routes.router, tags=["metadata"])
router.include_router(image_routes.router, tags=["images"])

__all__ = ["router"]
