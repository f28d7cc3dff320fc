"""Optional process-wide client for call sites that don't want to carry one around.

    from ipstack_client import default

    default.init(access_key="...")
    record = default.lookup_ip("8.8.8.8")

Passing an explicit IpstackClient is preferred; these helpers only delegate.
"""

import threading
from typing import TYPE_CHECKING, Any

from ipstack_client.errors import NotInitializedError

if TYPE_CHECKING:
    from ipstack_client.client import IpstackClient
    from ipstack_client.config import ClientConfig
    from ipstack_client.models.records import GeoRecord
    from ipstack_client.request import RequestTemplate

_default_client: "IpstackClient | None" = None
_lock = threading.Lock()


def init(config: "ClientConfig | Any" = None, *params: Any, **options: Any) -> "IpstackClient":
    """Create a client and make it the default one, replacing any previous default.

    Accepts either a ClientConfig (plus keyword overrides) or loose params
    resolved like `ClientConfig.from_params`, e.g. `init("key", http_client)`.
    If the client can't be created, the error propagates and the current
    default is kept.
    """
    from ipstack_client.client import IpstackClient
    from ipstack_client.config import ClientConfig

    if isinstance(config, ClientConfig) or (config is None and not params):
        client = IpstackClient(config, **options)
    else:
        # from_params skips a None config.
        client = IpstackClient.from_params(config, *params)

    global _default_client
    with _lock:
        _default_client = client
    return client


def set_default_client_if_unset(client: "IpstackClient") -> None:
    global _default_client
    with _lock:
        if _default_client is None:
            _default_client = client


def get_default_client() -> "IpstackClient":
    with _lock:
        client = _default_client
    if client is None:
        raise NotInitializedError("Default ipstack client isn't initialized")
    return client


def reset_default_client() -> None:
    global _default_client
    with _lock:
        _default_client = None


def request() -> "RequestTemplate":
    return get_default_client().request()


def lookup_ip(ip: str) -> "GeoRecord":
    return get_default_client().lookup_ip(ip)


def lookup_ips(*ips: str) -> "list[GeoRecord]":
    return get_default_client().lookup_ips(*ips)


def lookup_client_ip(force_fetch: bool = False) -> "GeoRecord":
    return get_default_client().lookup_client_ip(force_fetch)
