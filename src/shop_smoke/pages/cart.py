"""Cart page object: line items, removal and the empty state."""

from playwright.async_api import Locator, expect

from ..errors import ShopSmokeError
from ..log import get_logger
from ..selectors import any_of, get_selector
from .base import BasePage

logger = get_logger(__name__)


class CartPage(BasePage):
    """The /cart page."""
    
    path = "/cart"
    
    def get_cart_items(self) -> Locator:
        """Visible line items; hidden cart-drawer copies are excluded."""
        return self.page.locator(any_of(get_selector("cart_item")))
    
    async def get_cart_count(self) -> int:
        """Item count from /cart.js, the source of truth (the badge can be stale)."""
        return await self.cart.safe_item_count()
    
    def get_remove_button(self, item: Locator) -> Locator:
        return item.locator(any_of(get_selector("remove_from_cart"))).first
    
    async def click_remove_button(self, item: Locator) -> int:
        """Remove one line and block until the count drops by that line's quantity.
        
        Returns:
            The new cart item count
        """
        current = await self.cart.item_count()
        removed = await self._line_quantity(item)
        
        await self.get_remove_button(item).click()
        
        new_count = await self.cart.wait_for_count(max(current - removed, 0))
        logger.info("[CART] Removed item - count: %d -> %d", current, new_count)
        return new_count
    
    async def remove_all_items(self) -> None:
        """Remove every line through the UI. Idempotent."""
        items = self.get_cart_items()
        item_count = await items.count()
        
        if item_count == 0:
            logger.info("[CART] Cart already empty")
            return
        
        logger.info("[CART] Removing %d item(s) from cart...", item_count)
        for _ in range(item_count):
            # Always remove the first line; the list reflows
            await self.click_remove_button(items.first)
        logger.info("[CART] All items removed")
    
    async def is_empty(self) -> bool:
        return await self.get_cart_count() == 0
    
    def get_empty_state_message(self) -> Locator:
        return self.page.locator(any_of(get_selector("empty_cart_message"))).first
    
    async def verify_empty_state(self) -> None:
        """Check the count is 0 and the empty-cart message is visible.
        
        Raises:
            ShopSmokeError: if the cart API still reports items
        """
        count = await self.get_cart_count()
        if count != 0:
            raise ShopSmokeError(f"Cart API still reports {count} item(s)")
        await expect(self.get_empty_state_message()).to_be_visible(
            timeout=self.config.timeouts.selector_ms,
        )
    
    async def get_cart_item_count(self) -> int:
        """Number of line item elements on the page, unlike get_cart_count()."""
        return await self.get_cart_items().count()
    
    async def _line_quantity(self, item: Locator) -> int:
        quantity_input = item.locator(get_selector("cart_quantity_input").primary).first
        if await quantity_input.count() == 0:
            return 1
        value = await quantity_input.input_value()
        return int(value) if value.isdigit() else 1
