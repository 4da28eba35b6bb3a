"""shop-smoke - storefront smoke tests with selector fallbacks and a mock cart API."""

__version__ = "0.1.0"

from .config import Config, load_config
from .errors import CleanupFailure, ElementNotFoundError, ShopSmokeError, WaitTimeoutError
from .models import CartLineItem, CartSnapshot, SelectorConfig, ViewportInfo

__all__ = [
    "CartLineItem",
    "CartSnapshot",
    "CleanupFailure",
    "Config",
    "ElementNotFoundError",
    "SelectorConfig",
    "ShopSmokeError",
    "ViewportInfo",
    "WaitTimeoutError",
    "load_config",
]
