"""In-memory stand-in for the storefront cart.

The real cart API is rate limited, so repeated setup and teardown across
runs is unreliable against it. This keeps the same response shape while
staying deterministic. One instance per test session; never share it.
"""

import time

from ..models import CartLineItem, CartSnapshot


class MockCartState:
    """Ordered line items plus a stable session token."""
    
    def __init__(
        self,
        currency: str = "USD",
        unit_price: int = 1200,
        grams: int = 100,
        token: str | None = None,
    ):
        self.currency = currency
        self.unit_price = unit_price
        self.grams = grams
        self.token = token or f"mock-cart-token-{int(time.time() * 1000)}"
        self._items: list[CartLineItem] = []
    
    def __len__(self) -> int:
        return len(self._items)
    
    def snapshot(self) -> CartSnapshot:
        """Current cart as an immutable snapshot with freshly derived totals."""
        return CartSnapshot.capture(self.token, self._items, self.currency)
    
    def add(self, variant_id: str, quantity: int = 1) -> CartSnapshot:
        """Add a variant, merging into its existing line if present."""
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")
        
        for item in self._items:
            if item.variant_id == variant_id:
                item.quantity += quantity
                break
        else:
            self._items.append(CartLineItem(
                variant_id=variant_id,
                quantity=quantity,
                price=self.unit_price,
                grams=self.grams,
            ))
        
        return self.snapshot()
    
    def update(self, line_index: int, quantity: int) -> CartSnapshot:
        """Set a line's quantity. Zero removes the line; unknown lines are ignored."""
        if quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {quantity}")
        
        if not self._in_range(line_index):
            return self.snapshot()
        
        if quantity == 0:
            return self.remove(line_index)
        
        self._items[line_index].quantity = quantity
        return self.snapshot()
    
    def remove(self, line_index: int) -> CartSnapshot:
        """Delete a line. Out-of-range indexes are a no-op."""
        if self._in_range(line_index):
            del self._items[line_index]
        return self.snapshot()
    
    def clear(self) -> CartSnapshot:
        self._items.clear()
        return self.snapshot()
    
    def _in_range(self, line_index: int) -> bool:
        # Negative indexes are out of range, not Python-style from-the-end
        return 0 <= line_index < len(self._items)
