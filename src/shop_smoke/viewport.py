"""Viewport classification for responsive test handling.

Breakpoints match typical Shopify themes:

- mobile:  width < 750
- tablet:  750 <= width < 990
- desktop: width >= 990
"""

from typing import Awaitable, Callable

from playwright.async_api import Page

from .models import ViewportInfo

MOBILE_MAX_WIDTH = 750
TABLET_MAX_WIDTH = 990

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


def classify_viewport(width: int, height: int) -> ViewportInfo:
    """Map a window size to exactly one responsive category."""
    if width < 0 or height < 0:
        raise ValueError(f"Viewport dimensions must be >= 0, got {width}x{height}")
    
    return ViewportInfo(
        is_mobile=width < MOBILE_MAX_WIDTH,
        is_tablet=MOBILE_MAX_WIDTH <= width < TABLET_MAX_WIDTH,
        is_desktop=width >= TABLET_MAX_WIDTH,
        width=width,
        height=height,
    )


def get_viewport_info(page: Page) -> ViewportInfo:
    """Classify the page's current viewport, defaulting to 1920x1080 desktop."""
    viewport = page.viewport_size
    if not viewport:
        return classify_viewport(DEFAULT_WIDTH, DEFAULT_HEIGHT)
    return classify_viewport(viewport["width"], viewport["height"])


def is_mobile_viewport(page: Page) -> bool:
    return get_viewport_info(page).is_mobile


def is_tablet_viewport(page: Page) -> bool:
    return get_viewport_info(page).is_tablet


def is_desktop_viewport(page: Page) -> bool:
    return get_viewport_info(page).is_desktop


async def if_mobile(
    page: Page,
    mobile_action: Callable[[], Awaitable[None]],
    desktop_action: Callable[[], Awaitable[None]] | None = None,
) -> None:
    """Run mobile_action on mobile viewports, otherwise desktop_action if given."""
    if is_mobile_viewport(page):
        await mobile_action()
    elif desktop_action is not None:
        await desktop_action()
