"""Exceptions raised by shop-smoke."""

from typing import Any


class ShopSmokeError(Exception):
    """Base class for all shop-smoke errors."""


class ElementNotFoundError(ShopSmokeError):
    """The primary selector and every fallback failed to resolve."""
    
    def __init__(self, primary: str, fallbacks_tried: int, attempted: tuple[str, ...] = ()):
        self.primary = primary
        self.fallbacks_tried = fallbacks_tried
        self.attempted = attempted
        super().__init__(
            f"Element not found: {primary} (all {fallbacks_tried} fallbacks exhausted). "
            "This may indicate a theme update or page structure change. "
            "Please update selectors in shop_smoke/selectors/registry.py"
        )


class WaitTimeoutError(ShopSmokeError):
    """A polled condition did not become true within its budget."""
    
    def __init__(self, last_value: Any, timeout_ms: int, description: str | None = None):
        self.last_value = last_value
        self.timeout_ms = timeout_ms
        self.description = description
        what = description or "condition"
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for {what}. Last observed value: {last_value!r}"
        )


class CleanupFailure(ShopSmokeError):
    """A post-test cleanup step failed. Logged, never propagated out of cleanup."""
