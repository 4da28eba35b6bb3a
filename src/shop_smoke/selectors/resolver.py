"""Selector resolver - locate elements through a ranked fallback chain."""

from dataclasses import dataclass
from typing import Literal

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from ..errors import ElementNotFoundError
from ..log import get_logger
from ..models import SelectorConfig

logger = get_logger(__name__)

WaitState = Literal["attached", "detached", "visible", "hidden"]

DEFAULT_PROBE_TIMEOUT_MS = 1000


@dataclass(frozen=True)
class Resolved:
    """A candidate expression that resolved to a usable element."""
    
    locator: Locator
    expression: str
    index: int  # 0 is the primary, n is fallback[n - 1]
    attempted: tuple[str, ...]
    
    @property
    def used_fallback(self) -> bool:
        return self.index > 0


@dataclass(frozen=True)
class Exhausted:
    """Every candidate was tried and none resolved."""
    
    primary: str
    attempted: tuple[str, ...]
    
    @property
    def fallbacks_tried(self) -> int:
        return max(len(self.attempted) - 1, 0)


Resolution = Resolved | Exhausted


class SelectorResolver:
    """Resolve SelectorConfigs against a page.
    
    Each candidate gets its own full ``timeout_ms`` window; budgets are not
    shared across the chain. A candidate counts as resolved once it reaches
    ``state`` (Playwright's ``wait_for`` semantics).
    """
    
    def __init__(
        self,
        page: Page,
        probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
        state: WaitState = "attached",
    ):
        self.page = page
        self.probe_timeout_ms = probe_timeout_ms
        self.state = state
    
    async def try_resolve(self, config: SelectorConfig) -> Resolution:
        """Walk the candidate chain in order and report what happened."""
        attempted: list[str] = []
        
        for index, expression in enumerate(config.candidates):
            attempted.append(expression)
            locator = await self._wait_ready(expression, config.timeout_ms)
            if locator is not None:
                return Resolved(
                    locator=locator,
                    expression=expression,
                    index=index,
                    attempted=tuple(attempted),
                )
        
        return Exhausted(primary=config.primary, attempted=tuple(attempted))
    
    async def resolve(self, config: SelectorConfig) -> Locator:
        """Return the first candidate that resolves, or raise ElementNotFoundError."""
        result = await self.try_resolve(config)
        
        if isinstance(result, Exhausted):
            raise ElementNotFoundError(
                primary=result.primary,
                fallbacks_tried=result.fallbacks_tried,
                attempted=result.attempted,
            )
        
        if result.used_fallback:
            # The primary contract with the theme has drifted
            logger.warning(
                "[SELECTOR] Fallback used: %s (primary: %s)",
                result.expression,
                config.primary,
            )
        return result.locator
    
    async def resolve_first(self, config: SelectorConfig) -> Locator:
        """Resolve and narrow to the first match, for collections of elements."""
        locator = await self.resolve(config)
        return locator.first
    
    async def exists_now(self, config: SelectorConfig) -> bool:
        """Primary-only probe with a short timeout. Never raises."""
        return await self._wait_ready(config.primary, self.probe_timeout_ms) is not None
    
    async def _wait_ready(self, expression: str, timeout_ms: int) -> Locator | None:
        try:
            locator = self.page.locator(expression)
            await locator.first.wait_for(state=self.state, timeout=timeout_ms)
        except PlaywrightError as e:
            logger.debug("[SELECTOR] %s not ready: %s", expression, e)
            return None
        return locator


async def get_element(page: Page, config: SelectorConfig) -> Locator:
    """Resolve a selector config on a page."""
    return await SelectorResolver(page).resolve(config)


async def get_first_element(page: Page, config: SelectorConfig) -> Locator:
    """Resolve a selector config and return its first match."""
    return await SelectorResolver(page).resolve_first(config)


async def element_exists(page: Page, config: SelectorConfig) -> bool:
    """Check whether the primary selector is present right now."""
    return await SelectorResolver(page).exists_now(config)
