import os
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ipstack_client.errors import ConfigurationError
from ipstack_client.request import API_HOST

DEFAULT_TIMEOUT_SECONDS = 5.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ClientConfig(BaseModel):
    """Options an IpstackClient is built from.

    Build it with keyword arguments, from a loose parameter list via
    `from_params`, or from `IPSTACK_*` environment variables via `from_env`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    access_key: str | None = None
    http_client: httpx.Client | None = None
    use_https: bool = False
    host: str = API_HOST
    fields: list[str] = Field(default_factory=list)
    enable_security: bool = False
    skip_self_check: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @field_validator("access_key", mode="before")
    @classmethod
    def _normalize_access_key(cls, value: Any) -> str | None:
        """Trim the access key; a blank key is the same as no key."""
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray)):
            value = _decode_token(value)
        value = str(value).strip()
        return value or None

    @classmethod
    def from_params(cls, *params: Any) -> "ClientConfig":
        """Resolve a config from values of mixed types, in any order.

        - options created by the `param_*` helpers are applied first, in order;
        - a `str`/`bytes` value is the access key (last one wins);
        - an `httpx.Client` is the HTTP client (last one wins);
        - anything else, including None, is ignored.

        Values set by options take priority over the ones found by type.
        """
        config = cls()
        for param in params:
            if isinstance(param, ClientOption):
                param(config)

        if config.access_key is None:
            config.access_key = _extract_access_key(params)
        if config.http_client is None:
            config.http_client = _extract_http_client(params)
        return config

    @classmethod
    def from_env(cls) -> "ClientConfig":
        fields = [name.strip() for name in os.getenv("IPSTACK_FIELDS", "").split(",") if name.strip()]
        return cls(
            access_key=os.getenv("IPSTACK_ACCESS_KEY"),
            use_https=_env_flag("IPSTACK_USE_HTTPS"),
            host=os.getenv("IPSTACK_HOST", API_HOST),
            fields=fields,
            enable_security=_env_flag("IPSTACK_SECURITY"),
            skip_self_check=_env_flag("IPSTACK_SKIP_SELF_CHECK"),
            timeout_seconds=float(os.getenv("IPSTACK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        )


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


def _decode_token(value: bytes | bytearray) -> str:
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"ipstack access key is not valid UTF-8: {exc}") from exc


def _extract_access_key(params: tuple[Any, ...]) -> str | None:
    token: str | None = None
    for param in params:
        if isinstance(param, str):
            token = param
        elif isinstance(param, (bytes, bytearray)):
            token = _decode_token(param)
    if token is None:
        return None
    return token.strip() or None


def _extract_http_client(params: tuple[Any, ...]) -> httpx.Client | None:
    client: httpx.Client | None = None
    for param in params:
        if isinstance(param, httpx.Client):
            client = param
    return client


class ClientOption:
    """A named configuration step accepted by `ClientConfig.from_params`."""

    def __init__(self, name: str, apply: Callable[[ClientConfig], None]) -> None:
        self.name = name
        self._apply = apply

    def __call__(self, config: ClientConfig) -> None:
        self._apply(config)

    def __repr__(self) -> str:
        return f"ClientOption({self.name})"


def param_token(token: str) -> ClientOption | None:
    """Access key option. Returns None for a blank token, which from_params ignores."""
    token = token.strip()
    if not token:
        return None

    def _apply(config: ClientConfig) -> None:
        config.access_key = token

    return ClientOption("token", _apply)


def param_http_client(client: httpx.Client) -> ClientOption:
    def _apply(config: ClientConfig) -> None:
        config.http_client = client

    return ClientOption("http_client", _apply)


def param_use_https(enabled: bool) -> ClientOption:
    """Always use the https endpoint (requires a paid ipstack plan)."""

    def _apply(config: ClientConfig) -> None:
        config.use_https = enabled

    return ClientOption("use_https", _apply)


def param_fields(*names: str) -> ClientOption:
    """Only request these fields from ipstack."""

    def _apply(config: ClientConfig) -> None:
        config.fields = list(names) + config.fields

    return ClientOption("fields", _apply)


def param_enable_security() -> ClientOption:
    """Enable the security module (requires a paid ipstack plan)."""

    def _apply(config: ClientConfig) -> None:
        config.enable_security = True

    return ClientOption("enable_security", _apply)


def param_disable_first_self_check() -> ClientOption:
    """Don't look up the client's own IP while constructing the client."""

    def _apply(config: ClientConfig) -> None:
        config.skip_self_check = True

    return ClientOption("skip_self_check", _apply)
