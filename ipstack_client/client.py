import threading
from typing import Any

import httpx

from ipstack_client import default
from ipstack_client.config import ClientConfig
from ipstack_client.errors import ConfigurationError, IpstackError
from ipstack_client.logger import logger
from ipstack_client.models.records import GeoRecord
from ipstack_client.request import RequestTemplate


class IpstackClient:
    """Client for the ipstack IP geolocation API (https://ipstack.com).

    The client owns a baseline RequestTemplate built from its config. Every
    lookup works on a copy of that template, so customizing a single call via
    `request()` never leaks into later calls.

    Unless `skip_self_check` is set, constructing the client performs a first
    lookup of the caller's own IP; its result is cached and served by
    `lookup_client_ip()`. A client that constructs successfully becomes the
    package default client if none is set yet.
    """

    def __init__(self, config: ClientConfig | None = None, **options: Any) -> None:
        if config is None:
            config = ClientConfig(**options)
        elif options:
            # Rebuild rather than model_copy so the overrides are validated too.
            config = ClientConfig(**{**dict(config), **options})

        if not config.access_key:
            raise ConfigurationError("An ipstack access key is required")

        http_client = config.http_client
        if http_client is None:
            http_client = httpx.Client(timeout=config.timeout_seconds)

        self._config = config
        self._base_request = (
            RequestTemplate(access_key=config.access_key, http_client=http_client, host=config.host)
            .with_https(config.use_https)
            .with_security(config.enable_security)
            .with_fields(*config.fields)
        )
        self._client_ip_record: GeoRecord | None = None
        self._cache_lock = threading.Lock()

        if not config.skip_self_check:
            try:
                self.lookup_client_ip()
            except IpstackError as exc:
                logger.error(f"Initial client IP lookup failed error={exc}")
                raise

        default.set_default_client_if_unset(self)

    @classmethod
    def from_params(cls, *params: Any) -> "IpstackClient":
        """Build a client from loosely typed params, see `ClientConfig.from_params`."""
        return cls(ClientConfig.from_params(*params))

    @classmethod
    def from_env(cls) -> "IpstackClient":
        return cls(ClientConfig.from_env())

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def client_ip(self) -> GeoRecord | None:
        """The cached result of the last successful client IP lookup."""
        with self._cache_lock:
            return self._client_ip_record

    def request(self) -> RequestTemplate:
        """Return a copy of the baseline request for per-call customization.

        Lookups made through the returned template give back raw envelopes:

            envelope = client.request().with_fields(FIELD_COUNTRY_CODE).ip("8.8.8.8")
            record = envelope.resolve(GeoRecord)
        """
        return self._base_request.clone()

    def lookup_ip(self, ip: str) -> GeoRecord:
        """Look up geolocation information for an explicit IP address."""
        return self.request().ip(ip).resolve(GeoRecord)

    def lookup_ips(self, *ips: str) -> list[GeoRecord]:
        """Look up geolocation information for several IP addresses at once.

        Invalid addresses are dropped from the batch; InvalidIpError is raised
        only if none of them is valid.
        """
        # A batch reduced to one valid address hits the single-IP endpoint, which answers with an object.
        result = self.request().ips(*ips).resolve(GeoRecord | list[GeoRecord])
        if isinstance(result, GeoRecord):
            return [result]
        return result

    def lookup_client_ip(self, force_fetch: bool = False) -> GeoRecord:
        """Look up geolocation information for the calling client IP.

        The last successful result is cached and returned without a request
        unless `force_fetch` is set. A failed lookup leaves the cache as it
        was; the cached record is attached to the raised error as
        `stale_record`.
        """
        with self._cache_lock:
            cached = self._client_ip_record
        if cached is not None and not force_fetch:
            return cached

        try:
            record = self.request().check().resolve(GeoRecord)
        except IpstackError as exc:
            exc.stale_record = cached
            raise

        with self._cache_lock:
            self._client_ip_record = record
        return record
