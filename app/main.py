"""
Control Compass API - FastAPI Application Entry Point.

Directory of industrial controls and automation companies: public browse,
owner-submitted listings and an admin approval workflow.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.database import close_db, init_db
from app.core.exceptions import APIException
from app.core.logging import RequestIDMiddleware, get_logger, setup_logging
from app.core.rate_limit import limiter
from app.api.routes import api_router
from app.schemas.base import BaseSchema

logger = get_logger(__name__)


class RootResponse(BaseSchema):
    name: str
    version: str
    docs: Optional[str] = None
    health: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("starting_app", app_name=settings.app_name, env=settings.environment)

    if settings.environment == "development":
        # Schema is owned by Alembic everywhere else.
        await init_db()
        logger.info("database_initialized")

    yield

    logger.info("shutting_down")
    try:
        await close_db()
    except Exception as exc:
        logger.error("database_close_failed", error=str(exc), exc_info=True)


def _error_body(code: str, message: str, details=None) -> dict:
    return {"error": code, "message": message, "details": details}


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Directory of industrial controls and automation companies",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    if exc.status_code >= 500:
        logger.error("api_error", code=exc.code, message=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.details),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query strings use the same envelope as APIException."""
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            jsonable_encoder(exc.errors()),
        ),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log full detail, return a sanitized message."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", response_model=RootResponse)
async def root():
    return RootResponse(
        name=settings.app_name,
        version=settings.app_version,
        docs="/docs" if settings.debug else None,
        health=f"{settings.api_prefix}/health",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
