"""Base page object shared by every storefront page."""

from playwright.async_api import Locator, Page

from ..cart.api import CartApi
from ..config import Config
from ..models import ViewportInfo
from ..selectors import SelectorResolver, get_selector
from ..viewport import get_viewport_info
from ..waits import wait_for_page_load


class BasePage:
    """Wires a Playwright page to the resolver, the cart API and config."""
    
    path: str = "/"
    
    def __init__(self, page: Page, config: Config):
        self.page = page
        self.config = config
        self.resolver = SelectorResolver(page, probe_timeout_ms=config.timeouts.probe_ms)
        self.cart = CartApi(page, config)
    
    @property
    def url(self) -> str:
        return self.config.url(self.path)
    
    @property
    def viewport(self) -> ViewportInfo:
        return get_viewport_info(self.page)
    
    async def goto(self) -> None:
        """Navigate to this page and wait for the load event."""
        await wait_for_page_load(
            self.page,
            self.url,
            timeout_ms=self.config.timeouts.navigation_ms,
            settle_ms=self.config.timeouts.settle_ms,
        )
    
    async def element(self, name: str) -> Locator:
        """Resolve a registered selector by name."""
        return await self.resolver.resolve(get_selector(name))
    
    async def first_element(self, name: str) -> Locator:
        return await self.resolver.resolve_first(get_selector(name))
    
    async def settle(self) -> None:
        if self.config.timeouts.settle_ms:
            await self.page.wait_for_timeout(self.config.timeouts.settle_ms)
