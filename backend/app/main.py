# backend/app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.app.api.v1.router import api_router
from backend.app.core.config import settings, validate_settings
from backend.app.core.errors import add_exception_handlers
from backend.app.core.logging import get_logger, setup_logging
from backend.app.core.middleware import (
    PreflightCORSMiddleware,
    RequestLoggingMiddleware,
    build_cors_middleware_options,
)
from backend.app.db import init_models
from backend.app.schemas.user import HealthResponse

setup_logging()
logger = get_logger(__name__)


# --- LIFESPAN: validate config and create tables on startup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_settings()
    await init_models()
    logger.info("%s API started (environment=%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield
    logger.info("%s API shutting down", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

add_exception_handlers(app)

# Last added runs first: CORS wraps request logging
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    PreflightCORSMiddleware,
    **build_cors_middleware_options(settings.BACKEND_CORS_ORIGINS),
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok", "message": "Quizora Backend API is running"}
