"""Homepage page object: brand title and primary navigation."""

from playwright.async_api import Locator

from ..log import get_logger
from ..selectors import get_selector
from .base import BasePage

logger = get_logger(__name__)


class HomePage(BasePage):
    """The storefront homepage."""
    
    path = "/"
    
    async def get_brand_title(self) -> Locator:
        """Brand title: a text heading or a logo image."""
        return await self.element("brand_title")
    
    async def get_navigation(self) -> Locator:
        """Primary navigation; expected to hold at least 3 links."""
        if self.viewport.is_mobile:
            await self.open_mobile_menu()
        return await self.element("navigation")
    
    async def get_navigation_links(self) -> Locator:
        navigation = await self.get_navigation()
        return navigation.locator("a")
    
    async def get_navigation_link_count(self) -> int:
        links = await self.get_navigation_links()
        return await links.count()
    
    async def get_collections_link(self) -> Locator:
        """Collections link, labelled 'Collections', 'Shop' or similar."""
        if self.viewport.is_mobile:
            await self.open_mobile_menu()
        return await self.first_element("collections_link")
    
    async def click_collections_link(self) -> None:
        link = await self.get_collections_link()
        await link.click()
        await self.page.wait_for_load_state("load", timeout=self.config.timeouts.navigation_ms)
        await self.settle()
    
    async def open_mobile_menu(self) -> None:
        """Open the mobile menu drawer unless it is already open."""
        if await self.resolver.exists_now(get_selector("mobile_menu_open")):
            return
        
        toggle = await self.first_element("mobile_menu_toggle")
        await toggle.click()
        logger.info("[HOMEPAGE] Opened mobile menu drawer")
