"""Pytest plugin: browser fixtures, cart mocking, guaranteed cleanup and failure snapshots.

Enable with ``pytest_plugins = ["shop_smoke.plugins.fixtures"]`` in conftest.py
or ``pytest -p shop_smoke.plugins.fixtures``.
"""

from datetime import datetime
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from ..cart.cleanup import cleanup_cart
from ..cart.interception import CartApiMock
from ..cart.mock_state import MockCartState
from ..config import Config, load_config
from ..log import get_logger, setup_logging

logger = get_logger(__name__)

_CALL_FAILED = pytest.StashKey[bool]()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Remember whether the test body failed so page teardown can snapshot it."""
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.stash[_CALL_FAILED] = report.failed


@pytest.fixture(scope="session")
def config() -> Config:
    """Suite configuration from shop_smoke.yaml and SHOP_SMOKE_* env vars."""
    cfg = load_config()
    setup_logging(cfg.log_level)
    return cfg


@pytest_asyncio.fixture
async def browser(config: Config):
    """A launched browser of the configured type."""
    async with async_playwright() as playwright:
        browser_type = getattr(playwright, config.browser.name)
        browser = await browser_type.launch(
            headless=config.browser.headless,
            slow_mo=config.browser.slow_mo_ms or None,
        )
        try:
            yield browser
        finally:
            await browser.close()


@pytest_asyncio.fixture
async def context(browser, config: Config):
    """An isolated browser context per test."""
    context = await browser.new_context(
        base_url=config.store_url,
        viewport={
            "width": config.browser.viewport_width,
            "height": config.browser.viewport_height,
        },
    )
    try:
        yield context
    finally:
        await context.close()


@pytest_asyncio.fixture
async def page(context, config: Config, request):
    """A fresh page. On test failure its HTML and a screenshot are saved."""
    page = await context.new_page()
    yield page
    if request.node.stash.get(_CALL_FAILED, False):
        await _capture_snapshot(page, request.node, config.artifacts_dir)


@pytest_asyncio.fixture
async def cart_mock(page, config: Config):
    """Cart API interception backed by a fresh per-test MockCartState.
    
    Routes are only registered when mocking is enabled in config.
    """
    state = MockCartState(
        currency=config.mock_cart.currency,
        unit_price=config.mock_cart.unit_price,
        grams=config.mock_cart.grams,
    )
    mock = CartApiMock(page, state=state, log_requests=config.mock_cart.log_requests)
    if config.mock_cart.enabled:
        await mock.enable()
    try:
        yield mock
    finally:
        if mock.enabled:
            await mock.disable()


@pytest_asyncio.fixture
async def clean_cart(page, cart_mock, config: Config):
    """Empty the cart after the test, whatever its outcome. Never raises."""
    yield
    await cleanup_cart(page, config, cart_mock)


async def _capture_snapshot(page, item, artifacts_dir: Path) -> None:
    """Save page HTML and a screenshot for a failed test."""
    failure_dir = artifacts_dir / "failures"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    clean_name = item.name.replace("::", "_").replace("/", "_")
    html_path = failure_dir / f"{clean_name}_{timestamp}.html"
    
    try:
        failure_dir.mkdir(parents=True, exist_ok=True)
        html_path.write_text(await page.content(), encoding="utf-8")
        await page.screenshot(path=str(html_path.with_suffix(".png")), full_page=True)
    except Exception as e:
        # The page may already be gone; the test failure is what matters
        logger.warning("Could not capture failure snapshot for %s: %s", item.name, e)
        return
    
    item.user_properties.append(("snapshot_path", str(html_path)))
    logger.info("Saved failure snapshot: %s", html_path)
