"""Main FastAPI application for the Fuzzy Ranker service."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .api import health_router, match_router, metrics_router, score_router
from .config import get_settings
from .core.exceptions import FuzzyRankerError
from .engine_instance import ranker
from .models.response import ErrorResponse

settings = get_settings()

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info(
        "Starting Fuzzy Ranker service",
        version=settings.app_version,
        parallel_workers=ranker.parallel_workers,
        prefer_prefix=ranker.config.prefer_prefix,
        path_aware_boundaries=ranker.config.path_aware_boundaries,
    )

    yield

    # Shutdown
    ranker.close()
    logger.info("Shutting down Fuzzy Ranker service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Fuzzy, exact and prefix ranking of candidate strings for interactive filtering",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None,
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2),
    )

    return response


@app.exception_handler(FuzzyRankerError)
async def ranker_exception_handler(request: Request, exc: FuzzyRankerError) -> JSONResponse:
    """Report core errors that escaped an endpoint as bad requests."""
    logger.warning(
        "Rejected request",
        method=request.method,
        url=str(request.url),
        error=str(exc),
    )

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error=type(exc).__name__,
            message=str(exc),
        ).model_dump(mode="json"),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        url=str(request.url),
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None,
        ).model_dump(mode="json"),
    )


# Include API routers
app.include_router(match_router)
app.include_router(score_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Fuzzy, exact and prefix ranking of candidate strings",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running",
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "endpoints": {
            "match": "/api/v1/match",
            "batch_match": "/api/v1/match/batch",
            "score": "/api/v1/score",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics",
        },
        "query_syntax": {
            "word": "fuzzy (ordered subsequence) match",
            "'word": "exact substring match",
            "\"two words\"": "exact substring match including spaces",
            "^word": "prefix match",
            "word$": "suffix match",
            "^word$": "whole-string match",
            "!word": "exclude candidates containing word",
            "a | b": "either a or b",
        },
        "limits": {
            "max_query_length": settings.max_query_length,
            "max_candidates": settings.max_candidates,
            "max_results": settings.max_results,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fuzzy_ranker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower(),
    )
