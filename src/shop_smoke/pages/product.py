"""Product detail page object."""

from playwright.async_api import Locator, Page

from ..config import Config
from ..errors import ShopSmokeError
from ..log import get_logger
from .base import BasePage

logger = get_logger(__name__)


class ProductPage(BasePage):
    """A product detail page, /products/<handle>."""
    
    def __init__(self, page: Page, config: Config, handle: str | None = None):
        super().__init__(page, config)
        self.handle = handle
    
    @property
    def path(self) -> str:
        if self.handle is None:
            raise ShopSmokeError("ProductPage.goto() needs a product handle; open products via a collection instead")
        return f"/products/{self.handle}"
    
    async def get_title(self) -> Locator:
        return await self.first_element("product_title")
    
    async def get_price(self) -> Locator:
        """Price, formatted as currency like '$12.00 USD'."""
        return await self.first_element("product_price")
    
    async def get_add_to_cart_button(self) -> Locator:
        return await self.first_element("add_to_cart_button")
    
    async def click_add_to_cart(self) -> int:
        """Click 'Add to cart' and block until /cart.js shows one more item.
        
        Returns:
            The new cart item count
        """
        current = await self.cart.item_count()
        
        button = await self.get_add_to_cart_button()
        await button.click()
        
        new_count = await self.cart.wait_for_count(current + 1)
        logger.info("[PRODUCT] Added to cart - count: %d -> %d", current, new_count)
        return new_count
    
    async def is_add_to_cart_enabled(self) -> bool:
        """False when out of stock or no variant selected."""
        try:
            button = await self.get_add_to_cart_button()
        except ShopSmokeError:
            return False
        return await button.is_enabled()
    
    async def is_add_to_cart_visible(self) -> bool:
        try:
            button = await self.get_add_to_cart_button()
        except ShopSmokeError:
            return False
        return await button.is_visible()
    
    def current_url(self) -> str:
        return self.page.url
    
    def is_on_product_page(self) -> bool:
        return "/products/" in self.page.url
