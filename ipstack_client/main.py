from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status

from ipstack_client import default
from ipstack_client.client import IpstackClient
from ipstack_client.config import ClientConfig
from ipstack_client.errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    InvalidIpError,
    IpstackError,
    NotInitializedError,
    UpstreamServiceError,
)
from ipstack_client.exception_handlers import configuration_exception_handler, unhandled_exception_handler
from ipstack_client.logger import configure_logging, logger
from ipstack_client.models.records import GeoRecord
from ipstack_client.models.response_models import HealthResponse

app = FastAPI(
    title="ipstack Geolocation Service",
    version="0.1.0",
    description="HTTP front for the ipstack geolocation client.",
)
configure_logging()
logger.info("Started ipstack Geolocation Service")


def get_ipstack_client() -> IpstackClient:
    """Dependency returning the default client, creating it from IPSTACK_* env vars on first use."""
    try:
        return default.get_default_client()
    except NotInitializedError:
        return default.init(ClientConfig.from_env())


app.add_exception_handler(ConfigurationError, configuration_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


def _http_error(request: Request, exc: IpstackError, target: str) -> HTTPException:
    """Map a client error to the HTTP error returned by the service."""
    context = f"path={request.url.path} method={request.method} target={target} error={exc}"

    if isinstance(exc, InvalidIpError):
        logger.error(f"Invalid IP error during lookup {context}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_ip", "message": str(exc)},
        )
    if isinstance(exc, ApiError):
        logger.error(f"ipstack API error during lookup {context}")
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "code": "api_error",
                "message": str(exc),
                "api_code": exc.code,
                "api_type": exc.type,
                "api_info": exc.info,
            },
        )
    if isinstance(exc, DecodeError):
        logger.exception(f"Undecodable ipstack response during lookup {context}")
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "decode_error", "message": str(exc)},
        )
    if isinstance(exc, UpstreamServiceError):
        logger.exception(f"Upstream ipstack error during lookup {context}")
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "upstream_error", "message": str(exc)},
        )
    logger.error(f"ipstack client is not usable {context}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"code": "not_configured", "message": str(exc)},
    )


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/ip/lookup",
    response_model=GeoRecord,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up geolocation information for an IP address.",
)
def ip_lookup(
    request: Request,
    client: Annotated[IpstackClient, Depends(get_ipstack_client)],
    ip: Annotated[
        str | None,
        Query(description="IPv4 or IPv6 address to look up. If omitted, the service's own IP is used."),
    ] = None,
    force_refresh: Annotated[bool, Query(description="Bypass the cached own-IP record.")] = False,
) -> GeoRecord:
    """Look up geolocation information for either a specific IP or the service's own IP.

    The own-IP record is cached by the client; `force_refresh` bypasses the cache.
    """
    target = ip or "check"
    try:
        if ip is not None and ip.strip():
            logger.info(f"Performing explicit IP lookup path={request.url.path} method={request.method} ip={ip}")
            return client.lookup_ip(ip)

        logger.info(
            "Performing client IP lookup "
            f"path={request.url.path} method={request.method} force_refresh={force_refresh}"
        )
        return client.lookup_client_ip(force_fetch=force_refresh)
    except IpstackError as exc:
        raise _http_error(request, exc, target) from exc


@app.get(
    "/v1/ip/batch",
    response_model=list[GeoRecord],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up geolocation information for several IP addresses.",
)
def ip_batch_lookup(
    request: Request,
    client: Annotated[IpstackClient, Depends(get_ipstack_client)],
    ips: Annotated[str, Query(description="Comma-separated IP addresses (up to 50). Invalid entries are skipped.")],
) -> list[GeoRecord]:
    """Look up several IP addresses with a single ipstack request."""
    addresses = ips.split(",")
    logger.info(
        f"Performing batch IP lookup path={request.url.path} method={request.method} count={len(addresses)}"
    )
    try:
        return client.lookup_ips(*addresses)
    except IpstackError as exc:
        raise _http_error(request, exc, ips) from exc
