"""FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.auth_middleware import page_guard
from app.core.error_messages import GENERAL_ERRORS
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(
    title="Investor Hub",
    description="Investor relations portal: sessions and versioned site documents",
    version="0.1.0",
)

app.middleware("http")(page_guard)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Missing deployment configuration is a server error, never retried."""
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": GENERAL_ERRORS.UNKNOWN})


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


app.include_router(api_router, prefix="/api")
