"""Collection page object: product grid and navigation into products."""

import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from ..config import Config
from ..errors import ShopSmokeError
from ..log import get_logger
from ..selectors import any_of, get_selector
from ..waits import wait_for_product_card
from .base import BasePage

logger = get_logger(__name__)

PRODUCT_URL = re.compile(r"/products/")


class CollectionPage(BasePage):
    """A collection listing, the configured anchor collection by default."""
    
    def __init__(self, page: Page, config: Config, handle: str | None = None):
        super().__init__(page, config)
        self.handle = handle or config.collection_handle
    
    @property
    def path(self) -> str:
        return f"/collections/{self.handle}"
    
    async def goto(self) -> None:
        """Navigate and wait for the first product card.
        
        An empty collection is logged, not raised, so callers can assert on it.
        """
        await super().goto()
        try:
            await wait_for_product_card(self.page, timeout_ms=self.config.timeouts.selector_ms)
        except (ShopSmokeError, PlaywrightError, AssertionError):
            logger.warning("[COLLECTION] No products found in %s collection", self.handle)
    
    def get_product_cards(self) -> Locator:
        return self.page.locator(get_selector("product_card").primary)
    
    def get_first_product_card(self) -> Locator:
        """First card, for dynamic product selection without hardcoded IDs."""
        return self.get_product_cards().first
    
    def get_product_card_at(self, index: int = 0) -> Locator:
        return self.get_product_cards().nth(index)
    
    def get_product_title(self, card: Locator) -> Locator:
        # Collection cards use h3, product pages use h1
        return card.locator(any_of(get_selector("card_title"))).first
    
    def get_product_price(self, card: Locator) -> Locator:
        return card.locator(any_of(get_selector("card_price"))).first
    
    def get_product_image(self, card: Locator) -> Locator:
        return card.locator("img").first
    
    async def click_product(self, card: Locator) -> None:
        """Open a product card and wait for the product detail URL."""
        await card.click()
        await self.page.wait_for_load_state("load", timeout=self.config.timeouts.navigation_ms)
        await self.page.wait_for_url(PRODUCT_URL, timeout=self.config.timeouts.navigation_ms)
        await self.settle()
    
    async def has_products(self) -> bool:
        return await self.get_product_count() > 0
    
    async def get_product_count(self) -> int:
        return await self.get_product_cards().count()
