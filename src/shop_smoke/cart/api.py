"""Cart API client that works against both the real and the mocked endpoints.

Requests are issued with ``fetch`` from inside the page so route
interception applies; ``page.request`` would bypass it.
"""

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ..config import Config
from ..log import get_logger
from ..waits import wait_for_cart_count

logger = get_logger(__name__)

_FETCH_JSON = """async (url) => {
    const response = await fetch(url, {headers: {Accept: 'application/json'}});
    return await response.json();
}"""

_POST_JSON = """async ([url, payload]) => {
    const response = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json', Accept: 'application/json'},
        body: payload === null ? undefined : JSON.stringify(payload),
    });
    return {ok: response.ok, status: response.status, body: await response.text()};
}"""


class CartApi:
    """Read and mutate the cart through the storefront's JSON endpoints."""
    
    def __init__(self, page: Page, config: Config):
        self.page = page
        self.config = config
    
    async def fetch(self) -> dict:
        """GET /cart.js."""
        return await self.page.evaluate(_FETCH_JSON, self.config.url("/cart.js"))
    
    async def item_count(self) -> int:
        """Authoritative item count. Errors propagate so pollers can classify them."""
        data = await self.fetch()
        return int(data["item_count"])
    
    async def safe_item_count(self) -> int:
        """Item count, or 0 when the endpoint cannot be read."""
        try:
            return await self.item_count()
        except (PlaywrightError, KeyError, TypeError, ValueError) as e:
            logger.warning("[CART API] Failed to get cart count: %s", e)
            return 0
    
    async def add(self, variant_id: str | int, quantity: int = 1) -> dict:
        """POST /cart/add.js. Returns the raw response descriptor."""
        return await self._post("/cart/add.js", {"id": variant_id, "quantity": quantity})
    
    async def change(self, line: int, quantity: int) -> dict:
        """POST /cart/change.js with a 1-based line number."""
        return await self._post("/cart/change.js", {"line": line, "quantity": quantity})
    
    async def clear(self) -> bool:
        """POST /cart/clear.js. Returns False instead of raising."""
        try:
            result = await self._post("/cart/clear.js", None)
        except PlaywrightError as e:
            logger.warning("[CART API] Failed to clear cart: %s", e)
            return False
        return bool(result["ok"])
    
    async def wait_for_count(self, expected: int, timeout_ms: int | None = None) -> int:
        """Block until the cart holds ``expected`` items."""
        timeouts = self.config.timeouts
        return await wait_for_cart_count(
            self,
            expected,
            timeout_ms=timeout_ms or timeouts.cart_wait_ms,
            interval_ms=timeouts.poll_interval_ms,
        )
    
    async def _post(self, path: str, payload: dict | None) -> dict:
        return await self.page.evaluate(_POST_JSON, [self.config.url(path), payload])
