"""Polling waits tied to observable state. No blind sleeps beyond a short settle."""

import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, expect
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception,
    retry_if_result,
    stop_after_delay,
    wait_fixed,
)

from .errors import WaitTimeoutError
from .log import get_logger
from .selectors import SelectorResolver, get_selector

if TYPE_CHECKING:
    from .cart.api import CartApi

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_INTERVAL_MS = 100


def is_transient_poll_error(exc: BaseException) -> bool:
    """Errors worth retrying during a poll: a failed fetch or a half-formed response."""
    return isinstance(exc, (PlaywrightError, json.JSONDecodeError, KeyError))


class _LastValue:
    """Remembers the most recent successfully polled value."""
    
    def __init__(self) -> None:
        self.value: Any = None


async def await_condition(
    poll: Callable[[], Awaitable[T]],
    predicate: Callable[[T], bool],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    is_transient: Callable[[BaseException], bool] = is_transient_poll_error,
    description: str | None = None,
) -> T:
    """
    Poll until ``predicate(value)`` holds and return that value.
    
    Args:
        poll: Coroutine function producing the observed value
        predicate: Success test applied to each observed value
        timeout_ms: Total budget; no new attempt starts once it is spent
        interval_ms: Fixed sleep between attempts
        is_transient: Classifies poll exceptions; True means retry, False re-raises
        description: Human label used in the timeout error
    
    Raises:
        WaitTimeoutError: carrying the last successfully polled value
    """
    if timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be > 0, got {timeout_ms}")
    
    last = _LastValue()
    
    async def attempt() -> T:
        value = await poll()
        last.value = value
        return value
    
    retrying = AsyncRetrying(
        stop=stop_after_delay(timeout_ms / 1000),
        wait=wait_fixed(interval_ms / 1000),
        retry=retry_if_exception(is_transient) | retry_if_result(lambda value: not predicate(value)),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
    )
    
    try:
        return await retrying(attempt)
    except RetryError as e:
        raise WaitTimeoutError(last.value, timeout_ms, description) from e


async def wait_for_cart_count(
    cart_api: "CartApi",
    expected: int,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> int:
    """Block until /cart.js reports ``expected`` items.
    
    The badge in the header can lag or show cached values, so the cart
    endpoint is the source of truth.
    """
    return await await_condition(
        cart_api.item_count,
        lambda count: count == expected,
        timeout_ms=timeout_ms,
        interval_ms=interval_ms,
        description=f"cart count to reach {expected}",
    )


async def wait_for_page_load(
    page: Page,
    url: str,
    timeout_ms: int = 30000,
    settle_ms: int = 500,
) -> None:
    """Navigate and wait for 'load'.
    
    Live stores keep analytics connections open, so 'networkidle' never fires.
    """
    await page.goto(url, wait_until="load", timeout=timeout_ms)
    if settle_ms:
        await page.wait_for_timeout(settle_ms)


async def wait_for_product_card(page: Page, timeout_ms: int = 10000) -> None:
    """Wait for the first product card and its image to finish loading."""
    resolver = SelectorResolver(page, state="visible")
    card = await resolver.resolve_first(get_selector("product_card"))
    
    img = card.locator("img").first
    await expect(img).to_be_visible(timeout=timeout_ms)
    await img.evaluate(
        """(element) => {
            if (element.complete) return;
            return new Promise((resolve) => {
                element.onload = resolve;
                element.onerror = resolve;
            });
        }"""
    )
