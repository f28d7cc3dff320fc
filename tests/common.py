import json
from collections.abc import Iterator
from http import HTTPStatus
from typing import Any

import httpx

from ipstack_client.client import IpstackClient
from ipstack_client.config import ClientConfig
from ipstack_client.request import RequestTemplate

ACCESS_KEY = "test-key"

US_RECORD: dict[str, Any] = {
    "ip": "8.8.8.8",
    "type": "ipv4",
    "continent_code": "NA",
    "continent_name": "North America",
    "country_code": "US",
    "country_name": "United States",
    "region_code": "CA",
    "region_name": "California",
    "city": "Mountain View",
    "zip": "94043",
    "latitude": 37.386,
    "longitude": -122.0838,
}

DE_RECORD: dict[str, Any] = {
    "ip": "198.51.100.42",
    "country_code": "DE",
    "country_name": "Germany",
    "latitude": 52.52,
    "longitude": 13.405,
}


def api_error_payload(code: int, type_: str, info: str) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "type": type_, "info": info}}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with queued responses and remembers every requested URL.

    The last queued response is reused once the queue is down to one item.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        # Hand out a fresh Response each time so a queued one can be served repeatedly.
        return httpx.Response(response.status_code, headers=response.headers, stream=response.stream)


def json_response(payload: Any, status_code: int = HTTPStatus.OK) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


class FailingStream(httpx.SyncByteStream):
    """Response body that breaks half-way through reading."""

    def __iter__(self) -> Iterator[bytes]:
        yield b'{"ip": '
        raise httpx.ReadError("connection reset while reading body")


def make_template(transport: RecordingTransport, **kwargs: Any) -> RequestTemplate:
    return RequestTemplate(access_key=ACCESS_KEY, http_client=httpx.Client(transport=transport), **kwargs)


def make_client(transport: RecordingTransport, **options: Any) -> IpstackClient:
    """Client wired to `transport` that skips the initial own-IP lookup unless told otherwise."""
    options.setdefault("skip_self_check", True)
    config = ClientConfig(access_key=ACCESS_KEY, http_client=httpx.Client(transport=transport), **options)
    return IpstackClient(config)
