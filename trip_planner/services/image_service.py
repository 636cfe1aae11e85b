"""
Destination image lookup.
Searches the Pixabay photo API and falls back to a default travel photo.
"""
import logging
from typing import Optional

import httpx

from ..config import settings
from ..models.travel import DEFAULT_DESTINATION_IMAGE
from .cache import TTLCache

logger = logging.getLogger(__name__)

PIXABAY_URL = "https://pixabay.com/api/"
REQUEST_TIMEOUT_SECONDS = 10.0


class ImageService:
    """Finds photos for a destination, caching successful lookups."""

    def __init__(
        self,
        api_key: str = "",
        cache: Optional[TTLCache[list[str]]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=3600, max_entries=500)
        self.client = client
        if not self.api_key:
            logger.warning("Pixabay API key not configured. Using fallback images.")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def search_destination_image(self, destination: str, country: Optional[str] = None) -> str:
        return (await self.get_destination_images(destination, country, count=1))[0]

    async def get_destination_images(self, destination: str, country: Optional[str] = None, count: int = 3) -> list[str]:
        """
        Return exactly ``count`` image URLs, padding with the default photo.

        Missing credentials or any HTTP failure yields the default photo for
        every slot; those results are not cached.
        """
        count = max(1, count)
        if not self.api_key:
            return [DEFAULT_DESTINATION_IMAGE] * count

        key = (destination.lower(), (country or "").lower(), count)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            hits = await self._search(destination, country, per_page=max(count, 3))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching images from Pixabay: {e}")
            return [DEFAULT_DESTINATION_IMAGE] * count

        images = [hit["webformatURL"] for hit in hits[:count] if hit.get("webformatURL")]
        images += [DEFAULT_DESTINATION_IMAGE] * (count - len(images))
        self.cache.set(key, images)
        return images

    async def _search(self, destination: str, country: Optional[str], per_page: int) -> list[dict]:
        query = f"{destination} {country}" if country else destination
        params = {
            "key": self.api_key,
            "q": f"{query} travel destination landmark",
            "image_type": "photo",
            "orientation": "horizontal",
            "category": "travel",
            "min_width": 800,
            "min_height": 600,
            "per_page": per_page,
            "safesearch": "true",
        }
        if self.client is not None:
            response = await self.client.get(PIXABAY_URL, params=params)
        else:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
                response = await client.get(PIXABAY_URL, params=params)
        response.raise_for_status()
        return response.json().get("hits", [])


# Global service instance
_image_service: Optional[ImageService] = None


def get_image_service() -> ImageService:
    """Get or create the global image service."""
    global _image_service
    if _image_service is None:
        _image_service = ImageService(
            api_key=settings.pixabay_api_key,
            cache=TTLCache(
                ttl_seconds=settings.image_cache_ttl_seconds,
                max_entries=settings.image_cache_max_entries,
            ),
        )
    return _image_service
