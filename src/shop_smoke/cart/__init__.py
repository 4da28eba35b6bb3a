"""Cart API client, mock cart state and route interception."""

from .api import CartApi
from .cleanup import cleanup_cart, get_current_cart_count, verify_cart_empty
from .interception import (
    CartApiMock,
    CartRequest,
    CartRoute,
    MockResponse,
    disable_cart_mocking,
    enable_cart_mocking,
    handle_cart_request,
)
from .mock_state import MockCartState

__all__ = [
    "CartApi",
    "CartApiMock",
    "CartRequest",
    "CartRoute",
    "MockCartState",
    "MockResponse",
    "cleanup_cart",
    "disable_cart_mocking",
    "enable_cart_mocking",
    "get_current_cart_count",
    "handle_cart_request",
    "verify_cart_empty",
]
