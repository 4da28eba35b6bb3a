"""Shared fixtures for unit tests."""

import pytest

from shop_smoke.cart.mock_state import MockCartState
from shop_smoke.config import Config

from .fakes import FakeRouteTarget


@pytest.fixture
def settings() -> Config:
    """Default config with short waits so failing paths stay fast."""
    return Config(
        timeouts={"cart_wait_ms": 300, "poll_interval_ms": 10, "settle_ms": 0},
    )


@pytest.fixture
def cart_state() -> MockCartState:
    return MockCartState(token="mock-cart-token-test")


@pytest.fixture
def route_target() -> FakeRouteTarget:
    return FakeRouteTarget()
