"""
Destination image endpoint.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import APIError
from ..services.image_service import ImageService, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/images", tags=["images"])


@router.get("/destination")
async def destination_image(
    destination: Optional[str] = Query(default=None),
    country: Optional[str] = Query(default=None),
    count: int = Query(default=1, ge=1, le=20),
    images: ImageService = Depends(get_image_service),
):
    """One photo URL as ``imageUrl``, or several as ``imageUrls``."""
    if not destination:
        raise APIError(400, "Destination parameter is required")

    if count == 1:
        return {"imageUrl": await images.search_destination_image(destination, country)}
    return {"imageUrls": await images.get_destination_images(destination, country, count)}
