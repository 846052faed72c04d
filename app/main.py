import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import cache_backend
from app.logging_config import configure_logging
from app.middleware import TimingMiddleware
from app.result import ErrorCode
from app.routers import categories, coffees, health, ingredients, metrics

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Coffee API (%s, cache=%s)", settings.APP_ENV, cache_backend.name)
    await cache_backend.connect()  # never raises; the API runs without a cache
    yield
    # Shutdown
    await cache_backend.disconnect()
    logger.info("Coffee API stopped")


app = FastAPI(
    title="Coffee API",
    description="CRUD API for coffees, categories and ingredients with a read-through cache",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request shapes (bad JSON, non-integer page, ...) are 400s."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return JSONResponse(
        status_code=400,
        content={"error": "; ".join(messages), "code": ErrorCode.VALIDATION_ERROR.value},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred. Please try again later.",
            "code": ErrorCode.INTERNAL_ERROR.value,
        },
    )


# Routers
app.include_router(coffees.router)
app.include_router(categories.router)
app.include_router(ingredients.router)
app.include_router(metrics.router)
app.include_router(health.router)
