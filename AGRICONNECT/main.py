# file: AGRICONNECT/main.py

# Standard library
import logging

# FastAPI core + responses
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Third‑party
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from slowapi.errors import RateLimitExceeded

from AGRICONNECT.core import config
from AGRICONNECT.core.cleanup import run_temp_user_sweep
from AGRICONNECT.core.logger import setup_logging
from AGRICONNECT.core.rate_limit import limiter, rate_limit_handler
from AGRICONNECT.location.geocoding import close_client as close_geocoding_client
from AGRICONNECT.Notification.expo import close_client as close_push_client

# ------------------------------
# Routers
# ------------------------------
from AGRICONNECT.Notification.notification import router as notification_router
from AGRICONNECT.ORDERS.order import router as order_router
from AGRICONNECT.location.address import router as address_router
from AGRICONNECT.PRODUCTS.product import router as product_router
from AGRICONNECT.Store.store import router as store_router
from AGRICONNECT.USERS.user_routes import router as user_router

# Logging setup
setup_logging()
logger = logging.getLogger("main")

# App initialization
app = FastAPI(title="AgriConnect API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in prod if needed
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# ------------------------------
# Validation errors → 400
# ------------------------------
MISSING_ERROR_TYPES = {"missing", "string_too_short", "too_short"}


def _field_name(loc) -> str:
    # loc looks like ("body", "products", 0, "price")
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    missing = [_field_name(e["loc"]) for e in errors if e["type"] in MISSING_ERROR_TYPES]
    if missing:
        message = "Missing required fields: " + ", ".join(missing)
    else:
        message = errors[0]["msg"].removeprefix("Value error, ") if errors else "Invalid request"

    logger.info("[VALIDATION] %s %s → %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": message,
            "errors": jsonable_encoder(
                [{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in errors]
            ),
        },
    )


# Routers
app.include_router(notification_router)
app.include_router(order_router)
app.include_router(address_router)
app.include_router(product_router)
app.include_router(store_router)
app.include_router(user_router)


@app.get("/")
async def read_root():
    return {"message": "AgriConnect API running"}


# Startup scheduled job
@app.on_event("startup")
async def startup_event():
    """
    Stale temp user sweep for buyer signups that never completed.
    Disabled with TEMP_USER_SWEEP_MINUTES=0.
    """
    if config.TEMP_USER_SWEEP_MINUTES <= 0:
        logger.info("[SCHEDULER] temp user sweep disabled")
        return

    scheduler = AsyncIOScheduler()
    scheduler.add_job(run_temp_user_sweep, "interval", minutes=config.TEMP_USER_SWEEP_MINUTES)
    scheduler.start()
    app.state.scheduler = scheduler
    logger.info("[SCHEDULER] temp user sweep every %d min", config.TEMP_USER_SWEEP_MINUTES)


@app.on_event("shutdown")
async def shutdown_event():
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.shutdown(wait=False)

    await close_geocoding_client()
    await close_push_client()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("AGRICONNECT.main:app", host="0.0.0.0", port=config.PORT)
