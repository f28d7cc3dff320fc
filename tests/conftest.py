from collections.abc import Iterator

import pytest

from ipstack_client import default


@pytest.fixture(autouse=True)
def _reset_default_client() -> Iterator[None]:
    """Every test starts without a package-level default client."""
    default.reset_default_client()
    yield
    default.reset_default_client()
