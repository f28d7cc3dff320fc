import httpx
import pytest

from ipstack_client.config import (
    DEFAULT_TIMEOUT_SECONDS,
    ClientConfig,
    param_disable_first_self_check,
    param_enable_security,
    param_fields,
    param_http_client,
    param_token,
    param_use_https,
)
from ipstack_client.errors import ConfigurationError
from ipstack_client.fields import FIELD_CITY, FIELD_IP


def test_from_params_sniffs_token_and_http_client() -> None:
    http_client = httpx.Client()

    config = ClientConfig.from_params(http_client, "  my-key \n")

    assert config.access_key == "my-key"
    assert config.http_client is http_client


def test_from_params_accepts_bytes_token() -> None:
    assert ClientConfig.from_params(b" my-key ").access_key == "my-key"


def test_non_utf8_bytes_token_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        ClientConfig.from_params(b"\xff\xfe")

    with pytest.raises(ConfigurationError):
        ClientConfig(access_key=b"\xff")


def test_from_params_last_value_wins() -> None:
    first, second = httpx.Client(), httpx.Client()

    config = ClientConfig.from_params("first-key", first, b"second-key", second)

    assert config.access_key == "second-key"
    assert config.http_client is second


def test_from_params_ignores_unknown_values() -> None:
    config = ClientConfig.from_params(None, 42, 3.14, object(), ["list"], "my-key")

    assert config.access_key == "my-key"
    assert config.http_client is None


def test_from_params_options_take_priority_over_sniffed_values() -> None:
    option_client, sniffed_client = httpx.Client(), httpx.Client()

    config = ClientConfig.from_params(
        "sniffed-key",
        sniffed_client,
        param_token("option-key"),
        param_http_client(option_client),
    )

    assert config.access_key == "option-key"
    assert config.http_client is option_client


def test_from_params_applies_options_in_order() -> None:
    config = ClientConfig.from_params(
        "my-key",
        param_use_https(True),
        param_fields(FIELD_IP),
        param_fields(FIELD_CITY),
        param_use_https(False),
        param_enable_security(),
        param_disable_first_self_check(),
    )

    assert config.use_https is False
    assert config.fields == [FIELD_CITY, FIELD_IP]
    assert config.enable_security is True
    assert config.skip_self_check is True


def test_param_token_ignores_blank_token() -> None:
    assert param_token("   ") is None
    assert ClientConfig.from_params(param_token("  "), "my-key").access_key == "my-key"


def test_from_params_without_token() -> None:
    assert ClientConfig.from_params("   ").access_key is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IPSTACK_ACCESS_KEY", " env-key ")
    monkeypatch.setenv("IPSTACK_USE_HTTPS", "true")
    monkeypatch.setenv("IPSTACK_FIELDS", "ip, city,,")
    monkeypatch.setenv("IPSTACK_SECURITY", "1")
    monkeypatch.setenv("IPSTACK_SKIP_SELF_CHECK", "yes")
    monkeypatch.setenv("IPSTACK_TIMEOUT_SECONDS", "2.5")

    config = ClientConfig.from_env()

    assert config.access_key == "env-key"
    assert config.use_https is True
    assert config.fields == ["ip", "city"]
    assert config.enable_security is True
    assert config.skip_self_check is True
    assert config.timeout_seconds == 2.5


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "IPSTACK_ACCESS_KEY",
        "IPSTACK_USE_HTTPS",
        "IPSTACK_FIELDS",
        "IPSTACK_SECURITY",
        "IPSTACK_SKIP_SELF_CHECK",
        "IPSTACK_HOST",
        "IPSTACK_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = ClientConfig.from_env()

    assert config.access_key is None
    assert config.use_https is False
    assert config.fields == []
    assert config.host == "api.ipstack.com"
    assert config.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
