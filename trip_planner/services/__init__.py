"""Services for the trip planner."""
from .llm_client import LLMClient, get_llm_client
from .planner import TripPlanner
from .chunked_planner import ChunkedPlanner
from .destination_recommender import DestinationRecommender
from .streaming import StreamingRelay
from .image_service import ImageService, get_image_service

__all__ = [
    "LLMClient",
    "get_llm_client",
    "TripPlanner",
    "ChunkedPlanner",
    "DestinationRecommender",
    "StreamingRelay",
    "ImageService",
    "get_image_service",
]
