from collections.abc import Iterable
from http import HTTPStatus
from ipaddress import ip_address
from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ipstack_client.errors import ConfigurationError, InvalidIpError, UpstreamServiceError
from ipstack_client.logger import logger
from ipstack_client.response import ResponseEnvelope

API_HOST = "api.ipstack.com"
# Appended verbatim after the encoded query string; its value never changes.
SECURITY_PARAM = "security=1"
CLIENT_IP_PATH = "check"
# Documented limit of the bulk endpoint. Not enforced client-side.
MAX_BATCH_SIZE = 50

Scheme = Literal["http", "https"]


def _valid_ip(value: str) -> str | None:
    """Return the trimmed literal if it is a valid IPv4/IPv6 address, else None."""
    value = value.strip()
    if not value:
        return None
    try:
        ip_address(value)
    except ValueError:
        return None
    return value


class RequestTemplate(BaseModel):
    """Everything needed to perform a request against ipstack.

    Templates are frozen: every `with_*` method returns a new template and
    leaves the receiver untouched, so the baseline held by a client can be
    handed out and customized per call without affecting other calls:

        client.request().with_fields(FIELD_IP, FIELD_CITY).with_https(True).ip("8.8.8.8")

    The lookup methods (`ip`, `ips`, `check`) return a ResponseEnvelope that
    still has to be resolved by the caller.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    access_key: str = Field(min_length=1)
    http_client: httpx.Client
    scheme: Scheme = "http"
    host: str = API_HOST
    fields: tuple[str, ...] = ()
    security_enabled: bool = False

    @model_validator(mode="before")
    @classmethod
    def _require_credentials(cls, data: Any) -> Any:
        """Reject a template without access key or HTTP client as a configuration error."""
        if isinstance(data, dict):
            access_key = data.get("access_key")
            if not isinstance(access_key, str) or not access_key.strip():
                raise ConfigurationError("An ipstack access key is required")
            if not isinstance(data.get("http_client"), httpx.Client):
                raise ConfigurationError("An httpx.Client is required to perform ipstack requests")
        return data

    @property
    def endpoint(self) -> str:
        return f"{self.scheme}://{self.host}/"

    @property
    def fields_param(self) -> str:
        return ",".join(self.fields)

    @property
    def query_string(self) -> str:
        """Encoded query string, always rebuilt from the current field values."""
        params = {"access_key": self.access_key}
        if self.fields:
            params["fields"] = self.fields_param
        params["output"] = "json"
        return "?" + str(httpx.QueryParams(params))

    def clone(self) -> "RequestTemplate":
        return self.model_copy()

    def with_https(self, enabled: bool) -> "RequestTemplate":
        """Switch between the http and https endpoints (https requires a paid plan)."""
        return self.model_copy(update={"scheme": "https" if enabled else "http"})

    def with_security(self, enabled: bool) -> "RequestTemplate":
        """Enable the security module. Passing False never disables it once enabled."""
        if not enabled:
            return self.model_copy()
        return self.model_copy(update={"security_enabled": True})

    def with_fields(self, *names: str) -> "RequestTemplate":
        """Request additional fields on top of the ones already selected.

        New names are placed in front of the previously accumulated ones.
        """
        if not names:
            return self.model_copy()
        return self.model_copy(update={"fields": tuple(names) + self.fields})

    def ip(self, address: str) -> ResponseEnvelope:
        """Look up a single IP address.

        An empty or malformed address short-circuits with an InvalidIpError
        and no request is made.
        """
        address = address.strip()
        if not address:
            return ResponseEnvelope.failed(InvalidIpError("Empty IP"))
        if _valid_ip(address) is None:
            return ResponseEnvelope.failed(InvalidIpError(f"Invalid IP ({address})"))
        return self._execute(address)

    def ips(self, *addresses: str) -> ResponseEnvelope:
        """Look up several IP addresses in one request (up to MAX_BATCH_SIZE).

        Unlike `ip`, invalid entries are skipped instead of failing the call;
        only a batch without any valid address is rejected.
        """
        if not addresses:
            return ResponseEnvelope.failed(InvalidIpError("No IP passed"))

        valid_ips = [ip for ip in (_valid_ip(address) for address in addresses) if ip is not None]
        if not valid_ips:
            return ResponseEnvelope.failed(InvalidIpError("No valid IP passed"))
        if len(valid_ips) < len(addresses):
            logger.debug(f"Skipped {len(addresses) - len(valid_ips)} invalid IP(s) in batch lookup")

        return self._execute(",".join(valid_ips))

    def check(self) -> ResponseEnvelope:
        """Look up the IP address the request originates from."""
        return self._execute(CLIENT_IP_PATH)

    def build_url(self, path: str) -> str:
        url = self.endpoint + path + self.query_string
        if self.security_enabled:
            url = url + "&" + SECURITY_PARAM
        return url

    def _execute(self, path: str) -> ResponseEnvelope:
        """Perform the GET request and capture either the whole body or the failure."""
        url = self.build_url(path)
        logger.debug(
            f"Requesting ipstack endpoint={self.endpoint} path={path} "
            f"fields={self.fields_param!r} security={self.security_enabled}"
        )

        try:
            with self.http_client.stream("GET", url) as response:
                if response.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
                    # 5xx – upstream service failure, the body is not a JSON document.
                    return ResponseEnvelope.failed(
                        UpstreamServiceError(f"ipstack returned HTTP {response.status_code}")
                    )
                try:
                    raw_data = response.read()
                except (httpx.HTTPError, httpx.StreamError) as exc:
                    logger.error(f"Error reading body of ipstack response path={path} error={exc!r}")
                    return ResponseEnvelope.failed(
                        UpstreamServiceError(f"Error reading body of ipstack response: {exc!r}")
                    )
        except httpx.RequestError as exc:
            logger.error(f"Request to ipstack failed path={path} error={exc!r}")
            return ResponseEnvelope.failed(UpstreamServiceError(f"Request to ipstack failed: {exc!r}"))

        if not raw_data:
            return ResponseEnvelope.failed(UpstreamServiceError("ipstack response has no body"))
        return ResponseEnvelope.ok(raw_data)


def clone_template(template: RequestTemplate | None) -> RequestTemplate | None:
    """Clone `template`, propagating None instead of failing."""
    if template is None:
        return None
    return template.clone()


def configure(
    template: RequestTemplate | None,
    *,
    https: bool | None = None,
    security: bool | None = None,
    fields: Iterable[str] = (),
) -> RequestTemplate | None:
    """Apply several configurators at once. A missing template is forwarded as None."""
    if template is None:
        return None
    if https is not None:
        template = template.with_https(https)
    if security is not None:
        template = template.with_security(security)
    return template.with_fields(*fields)
