"""Tests for page object sequencing, with the browser mocked out."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shop_smoke.errors import ElementNotFoundError, ShopSmokeError, WaitTimeoutError
from shop_smoke.pages import CartPage, CollectionPage, HomePage, ProductPage


def fake_page(width=1920, height=1080):
    page = MagicMock()
    page.viewport_size = {"width": width, "height": height}
    page.url = "https://prometheamosaic.com/products/bookmark"
    page.goto = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_url = AsyncMock()
    return page


def fake_cart(*counts):
    cart = MagicMock()
    cart.item_count = AsyncMock(side_effect=list(counts))
    cart.wait_for_count = AsyncMock(side_effect=lambda expected: expected)
    cart.safe_item_count = AsyncMock(return_value=counts[-1] if counts else 0)
    return cart


class TestPaths:
    def test_urls(self, settings):
        page = fake_page()
        
        assert HomePage(page, settings).url == "https://prometheamosaic.com/"
        assert CollectionPage(page, settings).url == "https://prometheamosaic.com/collections/bookmarks"
        assert CollectionPage(page, settings, "prints").url.endswith("/collections/prints")
        assert CartPage(page, settings).url == "https://prometheamosaic.com/cart"
        assert ProductPage(page, settings, "bookmark").url.endswith("/products/bookmark")
    
    def test_product_page_without_handle(self, settings):
        with pytest.raises(ShopSmokeError):
            ProductPage(fake_page(), settings).url
    
    @pytest.mark.asyncio
    async def test_goto_waits_for_load(self, settings):
        page = fake_page()
        await CartPage(page, settings).goto()
        
        page.goto.assert_awaited_once_with(
            "https://prometheamosaic.com/cart",
            wait_until="load",
            timeout=settings.timeouts.navigation_ms,
        )


class TestProductPage:
    """Add to cart blocks on the authoritative count."""
    
    @pytest.mark.asyncio
    async def test_click_add_to_cart_waits_for_increment(self, settings):
        product = ProductPage(fake_page(), settings)
        product.cart = fake_cart(2)
        button = MagicMock(click=AsyncMock())
        product.resolver.resolve_first = AsyncMock(return_value=button)
        
        assert await product.click_add_to_cart() == 3
        button.click.assert_awaited_once()
        product.cart.wait_for_count.assert_awaited_once_with(3)
    
    @pytest.mark.asyncio
    async def test_add_to_cart_timeout_propagates(self, settings):
        product = ProductPage(fake_page(), settings)
        product.cart = fake_cart(0)
        product.cart.wait_for_count = AsyncMock(side_effect=WaitTimeoutError(0, 300))
        product.resolver.resolve_first = AsyncMock(return_value=MagicMock(click=AsyncMock()))
        
        with pytest.raises(WaitTimeoutError):
            await product.click_add_to_cart()
    
    @pytest.mark.asyncio
    async def test_missing_button_reports_disabled(self, settings):
        product = ProductPage(fake_page(), settings)
        product.resolver.resolve_first = AsyncMock(side_effect=ElementNotFoundError("button", 3))
        
        assert await product.is_add_to_cart_enabled() is False
        assert await product.is_add_to_cart_visible() is False
    
    def test_is_on_product_page(self, settings):
        assert ProductPage(fake_page(), settings).is_on_product_page()


class TestCartPage:
    """Removal blocks on the decremented count."""
    
    @pytest.mark.asyncio
    async def test_click_remove_waits_for_decrement(self, settings):
        cart_page = CartPage(fake_page(), settings)
        cart_page.cart = fake_cart(3)
        
        remove_button = MagicMock(click=AsyncMock())
        quantity_input = MagicMock(count=AsyncMock(return_value=1), input_value=AsyncMock(return_value="1"))
        item = MagicMock()
        item.locator.side_effect = lambda expression: MagicMock(
            first=quantity_input if "updates[]" in expression else remove_button
        )
        
        assert await cart_page.click_remove_button(item) == 2
        remove_button.click.assert_awaited_once()
        cart_page.cart.wait_for_count.assert_awaited_once_with(2)
    
    @pytest.mark.asyncio
    async def test_is_empty_uses_cart_endpoint(self, settings):
        cart_page = CartPage(fake_page(), settings)
        cart_page.cart = fake_cart(0)
        
        assert await cart_page.is_empty()
    
    @pytest.mark.asyncio
    async def test_verify_empty_state_raises_when_items_remain(self, settings):
        cart_page = CartPage(fake_page(), settings)
        cart_page.cart = fake_cart(2)
        
        with pytest.raises(ShopSmokeError, match="2 item"):
            await cart_page.verify_empty_state()
    
    @pytest.mark.asyncio
    async def test_remove_all_items_on_empty_cart(self, settings):
        page = fake_page()
        items = MagicMock(count=AsyncMock(return_value=0))
        page.locator.return_value = items
        cart_page = CartPage(page, settings)
        cart_page.click_remove_button = AsyncMock()
        
        await cart_page.remove_all_items()
        cart_page.click_remove_button.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_remove_all_items_removes_first_each_time(self, settings):
        page = fake_page()
        items = MagicMock(count=AsyncMock(return_value=3))
        page.locator.return_value = items
        cart_page = CartPage(page, settings)
        cart_page.click_remove_button = AsyncMock()
        
        await cart_page.remove_all_items()
        
        assert cart_page.click_remove_button.await_count == 3
        cart_page.click_remove_button.assert_awaited_with(items.first)


class TestHomePage:
    """Mobile drawer handling."""
    
    @pytest.mark.asyncio
    async def test_mobile_menu_already_open_is_not_toggled(self, settings):
        home = HomePage(fake_page(width=375, height=812), settings)
        home.resolver.exists_now = AsyncMock(return_value=True)
        home.resolver.resolve_first = AsyncMock()
        
        await home.open_mobile_menu()
        home.resolver.resolve_first.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_mobile_navigation_opens_drawer_first(self, settings):
        home = HomePage(fake_page(width=375, height=812), settings)
        toggle = MagicMock(click=AsyncMock())
        home.resolver.exists_now = AsyncMock(return_value=False)
        home.resolver.resolve_first = AsyncMock(return_value=toggle)
        home.resolver.resolve = AsyncMock(return_value=MagicMock())
        
        await home.get_navigation()
        
        toggle.click.assert_awaited_once()
        home.resolver.resolve.assert_awaited_once()
    
    @pytest.mark.asyncio
    async def test_desktop_navigation_skips_drawer(self, settings):
        home = HomePage(fake_page(), settings)
        home.resolver.exists_now = AsyncMock()
        home.resolver.resolve = AsyncMock(return_value=MagicMock())
        
        await home.get_navigation()
        home.resolver.exists_now.assert_not_awaited()
