"""API routes for the trip planner."""
from fastapi import APIRouter

from .ai_routes import router as ai_router
from .image_routes import router as image_router
from .shared_routes import router as shared_router
from .user_routes import router as user_router

router = APIRouter()
router.include_router(ai_router)
router.include_router(image_router)
router.include_router(user_router)
router.include_router(shared_router)

__all__ = ["router"]
