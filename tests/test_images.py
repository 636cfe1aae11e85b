"""Tests for destination image lookup."""
import httpx
import pytest

from trip_planner.models.travel import DEFAULT_DESTINATION_IMAGE
from trip_planner.services.cache import TTLCache
from trip_planner.services.image_service import ImageService, get_image_service


class PixabayDouble:
    """Records requests and answers with a fixed status and hit list."""

    def __init__(self, hits=None, status_code=200):
        self.hits = hits if hits is not None else []
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"hits": self.hits})

    def service(self, cache=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return ImageService(api_key="pixabay-key", cache=cache or TTLCache(ttl_seconds=3600), client=client)


HITS = [{"webformatURL": "https://cdn.example/1.jpg"}, {"webformatURL": "https://cdn.example/2.jpg"}]


class TestImageService:
    """Test searching and caching destination photos."""

    @pytest.mark.asyncio
    async def test_without_key_uses_default(self):
        """Missing credentials yield the default photo for every slot."""
        service = ImageService(api_key="")
        assert await service.get_destination_images("Paris", "France", 3) == [DEFAULT_DESTINATION_IMAGE] * 3
        assert await service.search_destination_image("Paris") == DEFAULT_DESTINATION_IMAGE
        assert len(service.cache) == 0

    @pytest.mark.asyncio
    async def test_pads_to_count(self):
        """Fewer hits than requested are padded with the default photo."""
        pixabay = PixabayDouble(HITS)
        images = await pixabay.service().get_destination_images("Paris", "France", 3)
        assert images == ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg", DEFAULT_DESTINATION_IMAGE]

    @pytest.mark.asyncio
    async def test_query_parameters(self):
        pixabay = PixabayDouble(HITS)
        await pixabay.service().get_destination_images("Paris", "France", 2)

        params = pixabay.requests[0].url.params
        assert params["q"] == "Paris France travel destination landmark"
        assert params["key"] == "pixabay-key"
        assert params["per_page"] == "3"
        assert params["category"] == "travel"

    @pytest.mark.asyncio
    async def test_results_cached(self):
        """A repeated lookup is served from the cache, case-insensitively."""
        pixabay = PixabayDouble(HITS)
        service = pixabay.service()
        first = await service.get_destination_images("Paris", "France", 2)
        second = await service.get_destination_images("paris", "FRANCE", 2)

        assert first == second
        assert len(pixabay.requests) == 1

    @pytest.mark.asyncio
    async def test_count_is_part_of_cache_key(self):
        pixabay = PixabayDouble(HITS)
        service = pixabay.service()
        await service.get_destination_images("Paris", "France", 1)
        await service.get_destination_images("Paris", "France", 2)
        assert len(pixabay.requests) == 2

    @pytest.mark.asyncio
    async def test_http_error_not_cached(self):
        """Failures fall back to the default photo and are retried next time."""
        pixabay = PixabayDouble(status_code=500)
        service = pixabay.service()
        assert await service.get_destination_images("Paris", None, 2) == [DEFAULT_DESTINATION_IMAGE] * 2
        await service.get_destination_images("Paris", None, 2)
        assert len(pixabay.requests) == 2
        assert len(service.cache) == 0

    @pytest.mark.asyncio
    async def test_search_single_image(self):
        pixabay = PixabayDouble(HITS)
        assert await pixabay.service().search_destination_image("Kyoto", "Japan") == "https://cdn.example/1.jpg"
        assert pixabay.requests[0].url.params["q"] == "Kyoto Japan travel destination landmark"


class TestImageRoute:
    """Test GET /api/images/destination."""

    @pytest.fixture(autouse=True)
    def offline_images(self):
        from trip_planner.main import app

        app.dependency_overrides[get_image_service] = lambda: ImageService(api_key="")
        yield
        app.dependency_overrides.pop(get_image_service, None)

    def test_destination_required(self, client):
        response = client.get("/api/images/destination")
        assert response.status_code == 400
        assert response.json() == {"error": "Destination parameter is required"}

    def test_single_image(self, client):
        response = client.get("/api/images/destination", params={"destination": "Paris", "country": "France"})
        assert response.status_code == 200
        assert response.json() == {"imageUrl": DEFAULT_DESTINATION_IMAGE}

    def test_several_images(self, client):
        response = client.get("/api/images/destination", params={"destination": "Paris", "count": 3})
        assert response.status_code == 200
        assert response.json() == {"imageUrls": [DEFAULT_DESTINATION_IMAGE] * 3}
