"""Guaranteed post-test cart cleanup.

Runs after every test regardless of outcome and must never raise: a broken
teardown should not mask or compound a different test's result.
Idempotent for empty, single-item and multi-item carts.
"""

from playwright.async_api import Page, expect

from ..config import Config
from ..errors import CleanupFailure
from ..log import get_logger
from ..selectors import any_of, get_selector
from .interception import CartApiMock

logger = get_logger(__name__)


async def cleanup_cart(page: Page, config: Config, cart_mock: CartApiMock | None = None) -> bool:
    """Empty the cart, logging instead of raising. Returns True if it succeeded."""
    try:
        logger.info("[CLEANUP] Starting cart cleanup...")
        
        if cart_mock is not None and cart_mock.enabled:
            cart_mock.state.clear()
            logger.info("[CLEANUP] Mock cart cleared")
            return True
        
        try:
            await _clear_via_api(page, config)
        except Exception as e:
            logger.warning("[CLEANUP] Cart API clear failed (%s), falling back to manual removal", e)
            return await _clear_manually(page, config)
        
        logger.info("[CLEANUP] Cart cleared via cart API")
        return True
    except Exception as e:
        failure = e if isinstance(e, CleanupFailure) else CleanupFailure(str(e))
        logger.error("[CLEANUP] Cart cleanup failed: %s", failure)
        return False


async def _clear_via_api(page: Page, config: Config) -> None:
    # page.request goes straight to the network, bypassing page routes
    response = await page.request.post(config.url("/cart/clear.js"))
    if not response.ok:
        raise CleanupFailure(f"clear endpoint returned {response.status}")
    if config.timeouts.settle_ms:
        await page.wait_for_timeout(config.timeouts.settle_ms)


async def _clear_manually(page: Page, config: Config) -> bool:
    """Set every quantity input on the cart page to 0 and submit."""
    await page.goto(config.url("/cart"), wait_until="load", timeout=config.timeouts.navigation_ms)
    
    items = page.locator(any_of(get_selector("cart_item")))
    item_count = await items.count()
    if item_count == 0:
        logger.info("[CLEANUP] Cart already empty")
        return True
    
    logger.info("[CLEANUP] Found %d item(s), removing manually...", item_count)
    
    quantity_inputs = page.locator(get_selector("cart_quantity_input").primary)
    for i in range(await quantity_inputs.count()):
        try:
            await quantity_inputs.nth(i).fill("0")
        except Exception as e:
            # Keep going with the other lines
            logger.warning("[CLEANUP] Failed to set quantity to 0 for item %d: %s", i + 1, e)
    
    update_button = page.locator(any_of(get_selector("cart_update_button"))).first
    if await update_button.count() > 0:
        await update_button.click()
        await page.wait_for_load_state("load", timeout=config.timeouts.navigation_ms)
    
    logger.info("[CLEANUP] Manual removal attempted")
    return True


async def get_current_cart_count(page: Page, config: Config) -> int:
    """Item count straight from the network (bypasses mocks). 0 on failure."""
    try:
        response = await page.request.get(config.url("/cart.js"))
        data = await response.json()
        return int(data.get("item_count") or 0)
    except Exception as e:
        logger.warning("[CART] Failed to get cart count from API: %s", e)
        return 0


async def verify_cart_empty(page: Page, config: Config) -> None:
    """Assert the cart page shows no line items."""
    await page.goto(config.url("/cart"), wait_until="load", timeout=config.timeouts.navigation_ms)
    items = page.locator(any_of(get_selector("cart_item")))
    await expect(items).to_have_count(0)
