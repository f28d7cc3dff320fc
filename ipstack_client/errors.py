from typing import Any


class IpstackError(Exception):
    """Base error for the ipstack client.

    `stale_record` is only populated by a failed client IP refresh, where it
    holds the previously cached record (if any).
    """

    stale_record: Any = None


class ConfigurationError(IpstackError):
    """Raised when the client or request state is absent or invalid (e.g. no access key)."""


class NotInitializedError(ConfigurationError):
    """Raised by the package-level helpers when no default client has been initialized."""


class InvalidIpError(IpstackError):
    """Raised when the supplied IP address (or every address of a batch) is empty or malformed."""


class UpstreamServiceError(IpstackError):
    """Raised when the request to ipstack fails at the transport level or the body can't be read."""


class DecodeError(IpstackError):
    """Raised when an ipstack response can't be decoded as JSON or into the requested shape."""


class ApiError(IpstackError):
    """Error reported by the ipstack API itself.

    ipstack answers most failures with HTTP 200 and a body like
    `{"success": false, "error": {"code": 104, "type": "...", "info": "..."}}`.
    """

    def __init__(self, code: int, type: str, info: str) -> None:
        super().__init__(code, type, info)
        self.code = code
        self.type = type
        self.info = info

    def __str__(self) -> str:
        return f"[{self.code}]: {self.type} ({self.info})"


def as_api_error(exc: BaseException | None) -> ApiError | None:
    """Return `exc` if it is an ApiError, otherwise None."""
    if isinstance(exc, ApiError):
        return exc
    return None
