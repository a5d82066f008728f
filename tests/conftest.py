from collections.abc import Iterator

import pytest
import structlog

from tests.fakes import FakeHost, FakePlayer


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def alice() -> FakePlayer:
    return FakePlayer()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
