# AGRICONNECT/core/rate_limit.py
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from AGRICONNECT.core import config

# Per-client-IP limiter; endpoints opt in with the decorators below and
# must accept a `request: Request` argument.
limiter = Limiter(key_func=get_remote_address, enabled=config.RATE_LIMIT_ENABLED)

signup_limit = limiter.limit(config.SIGNUP_RATE_LIMIT)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    retry_after = getattr(exc, "reset_in", None) or 60
    response = JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": str(exc.detail),
            "retry_after_seconds": retry_after,
        },
    )
    response.headers["Retry-After"] = str(retry_after)
    return response
