from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ipstack_client.errors import ConfigurationError
from ipstack_client.logger import logger


async def configuration_exception_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Handle a missing or invalid ipstack client setup (e.g. no IPSTACK_ACCESS_KEY)."""
    logger.error(
        "ipstack client is not configured "
        f"path={request.url.path} method={request.method} error={exc}"
    )
    content: dict[str, Any] = {
        "code": "not_configured",
        "message": str(exc),
    }
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
