"""
FastAPI Application Entry Point.
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import router
from .config import settings
from .errors import APIError, StoreError
from .services.plan_store import SharedPlanRepository, run_shared_plan_sweeper
from .services.security import limiter, rate_limit_exceeded_handler
from .services.supabase_client import close_supabase, get_supabase

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the shared plan sweeper when the database is configured; close clients on shutdown."""
    sweeper = None
    db = get_supabase()
    if db.is_configured and settings.shared_plan_cleanup_interval_seconds > 0:
        shared = SharedPlanRepository(db, ttl_days=settings.shared_plan_ttl_days)
        sweeper = asyncio.create_task(
            run_shared_plan_sweeper(shared, settings.shared_plan_cleanup_interval_seconds)
        )
        logger.info(f"Shared plan sweeper started, every {settings.shared_plan_cleanup_interval_seconds}s")

    yield

    if sweeper is not None:
        sweeper.cancel()
        await asyncio.gather(sweeper, return_exceptions=True)
    await close_supabase()


# Create FastAPI app
app = FastAPI(
    title="Trip Planner",
    description="AI-powered destination recommendations and chunked trip planning",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected request to {request.url.path}: {len(exc.errors())} validation errors")
    return JSONResponse(
        {"error": "Missing required fields", "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Unhandled store error on {request.url.path}: {exc}")
    return JSONResponse({"error": "Internal server error"}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse({"error": "Internal server error"}, status_code=500)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "provider": settings.ai_provider
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "trip_planner.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
