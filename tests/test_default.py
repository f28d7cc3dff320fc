import httpx
import pytest

from ipstack_client import default
from ipstack_client.config import ClientConfig, param_disable_first_self_check
from ipstack_client.errors import ApiError, ConfigurationError, NotInitializedError
from tests.common import ACCESS_KEY, DE_RECORD, US_RECORD, RecordingTransport, api_error_payload, json_response


def _config(transport: RecordingTransport, **options: object) -> ClientConfig:
    return ClientConfig(access_key=ACCESS_KEY, http_client=httpx.Client(transport=transport), **options)


@pytest.mark.parametrize(
    "call",
    [
        lambda: default.lookup_ip("8.8.8.8"),
        lambda: default.lookup_ips("8.8.8.8"),
        lambda: default.lookup_client_ip(),
        lambda: default.request(),
    ],
)
def test_helpers_fail_when_not_initialized(call) -> None:
    with pytest.raises(NotInitializedError):
        call()


def test_not_initialized_is_a_configuration_error() -> None:
    assert issubclass(NotInitializedError, ConfigurationError)


def test_init_sets_default_client() -> None:
    transport = RecordingTransport(json_response(DE_RECORD), json_response(US_RECORD))

    client = default.init(_config(transport))

    assert default.get_default_client() is client
    # the initial own-IP lookup is cached
    assert default.lookup_client_ip().ip == "198.51.100.42"
    assert default.lookup_ip("8.8.8.8").ip == "8.8.8.8"
    assert transport.paths == ["/check", "/8.8.8.8"]


def test_init_overwrites_existing_default() -> None:
    transport = RecordingTransport(json_response(US_RECORD))

    first = default.init(_config(transport, skip_self_check=True))
    second = default.init(_config(transport, skip_self_check=True))

    assert second is not first
    assert default.get_default_client() is second


def test_failed_init_keeps_current_default() -> None:
    transport = RecordingTransport(json_response(US_RECORD))
    current = default.init(_config(transport, skip_self_check=True))
    failing = RecordingTransport(json_response(api_error_payload(101, "invalid_access_key", "Bad key")))

    with pytest.raises(ApiError):
        default.init(_config(failing))
    with pytest.raises(ConfigurationError):
        default.init(access_key="  ")

    assert default.get_default_client() is current


def test_init_from_params() -> None:
    transport = RecordingTransport(json_response(US_RECORD))

    default.init(None, ACCESS_KEY, httpx.Client(transport=transport), param_disable_first_self_check())
    records = default.lookup_ips("8.8.8.8", "bogus")

    assert len(records) == 1
    assert transport.requests[0].url.params["access_key"] == ACCESS_KEY


def test_init_with_loose_token_and_http_client() -> None:
    transport = RecordingTransport(json_response(DE_RECORD), json_response(US_RECORD))

    client = default.init(f" {ACCESS_KEY} ", httpx.Client(transport=transport))

    assert default.get_default_client() is client
    assert client.config.access_key == ACCESS_KEY
    assert default.lookup_client_ip().ip == "198.51.100.42"
    assert default.lookup_ip("8.8.8.8").ip == "8.8.8.8"
    assert [request.url.params["access_key"] for request in transport.requests] == [ACCESS_KEY, ACCESS_KEY]


def test_request_returns_independent_template() -> None:
    transport = RecordingTransport(json_response(US_RECORD))
    default.init(_config(transport, skip_self_check=True))

    default.request().with_fields("ip")

    assert default.request().fields == ()
