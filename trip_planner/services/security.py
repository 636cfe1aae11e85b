"""
Protection for the public shared-plan endpoints.

Covers per-IP rate limiting, origin checks and validation of the plan
payload before it is stored.
"""
import json
import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from ..config import settings
from ..errors import APIError

logger = logging.getLogger(__name__)

CREATE_RATE_LIMIT = "5/15 minutes"
VIEW_RATE_LIMIT = "30/15 minutes"
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
MAX_PLAN_BYTES = 100_000

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

SUSPICIOUS_PATTERNS = (
    "crypto",
    "bitcoin",
    "click here",
    "💸",
    "🚨",
    "free money",
    "hack",
    "spam",
    "virus",
    "malware",
    "phishing",
    "http://bit.ly",
    "http://tinyurl",
    "<script",
    "javascript:",
    "eval(",
    "document.cookie",
)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    for header in ("x-real-ip", "cf-connecting-ip"):
        value = request.headers.get(header)
        if value:
            return value.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


# Initialize rate limiter
limiter = Limiter(key_func=client_ip)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {client_ip(request)} on {request.url.path} ({exc.detail})")
    return JSONResponse({"error": RATE_LIMIT_MESSAGE}, status_code=429)


def is_allowed_origin(origin: Optional[str], allowed: list[str], debug: bool = False) -> bool:
    if debug and (not origin or "localhost" in origin or "127.0.0.1" in origin):
        return True
    if not origin:
        return False
    return origin in allowed


def validate_origin(request: Request) -> None:
    origin = request.headers.get("origin")
    if not is_allowed_origin(origin, settings.allowed_origins, settings.debug):
        logger.warning(f"Rejected request from origin {origin!r}")
        raise APIError(403, "Invalid request origin")


def contains_suspicious_content(text: str) -> bool:
    lowered = text.lower()
    return any(pattern in lowered for pattern in SUSPICIOUS_PATTERNS)


def _has_string(obj: Any, key: str) -> bool:
    return isinstance(obj, dict) and isinstance(obj.get(key), str) and bool(obj[key])


def validate_travel_plan(data: Any) -> bool:
    """True when ``data`` looks like a genuine plan that is safe to share."""
    if not isinstance(data, dict):
        return False

    destination = data.get("destination")
    traveler_type = data.get("travelerType")
    if not (_has_string(destination, "id") and _has_string(destination, "name")):
        return False
    if not (_has_string(traveler_type, "id") and _has_string(traveler_type, "name")):
        return False
    if not isinstance(data.get("aiResponse"), dict):
        return False

    serialized = json.dumps(data, ensure_ascii=False)
    if len(serialized) > MAX_PLAN_BYTES:
        logger.warning(f"Rejected plan of {len(serialized)} characters")
        return False
    if contains_suspicious_content(serialized):
        logger.warning("Rejected plan containing suspicious content")
        return False
    return True
