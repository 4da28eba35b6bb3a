"""Central selector definitions for every UI concept the suite touches.

Each entry has a primary expression plus ordered fallbacks so a theme
update degrades to a logged fallback instead of a hard failure. Tuned for
the Shopify Dawn theme. This is the one place to edit when the storefront
markup changes.
"""

from types import MappingProxyType

from ..models import SelectorConfig

_SELECTORS = {
    # Homepage
    "brand_title": SelectorConfig(
        primary=".header__heading-link",
        fallback=('h1:has-text("Promethea")', 'img[alt*="Promethea"]', "header h1"),
    ),
    "navigation": SelectorConfig(
        primary="header .header__inline-menu",
        fallback=("nav:visible", ".header__menu", "nav:not(.menu-drawer__navigation)"),
    ),
    "collections_link": SelectorConfig(
        primary='.header__inline-menu a[href*="/collections"]',
        fallback=(
            'header a:has-text("Shop")',
            'header a:has-text("Collections"):visible',
            'a[href*="/collections"]:visible',
        ),
    ),
    "mobile_menu_toggle": SelectorConfig(
        primary="header-drawer summary",
        fallback=('button[aria-label*="menu" i]', ".header__icon--menu"),
    ),
    "mobile_menu_open": SelectorConfig(
        primary="details#Details-menu-drawer-container[open]",
        fallback=(".menu-drawer-container[open]",),
    ),
    
    # Collection page
    "bookmarks_collection_link": SelectorConfig(
        primary='a[href*="/collections/bookmarks"]',
        fallback=('a:has-text("Bookmarks")', '[data-collection="bookmarks"]'),
    ),
    "product_card": SelectorConfig(
        primary=".card-wrapper",
        fallback=(".grid__item", ".product-card", "li.grid__item", "article.product"),
        timeout_ms=10000,
    ),
    "card_title": SelectorConfig(
        primary="h3",
        fallback=(".card__heading", "h2"),
    ),
    "card_price": SelectorConfig(
        primary=".price",
        fallback=(".price-item", 'span:has-text("$")'),
    ),
    
    # Product page
    "product_title": SelectorConfig(
        primary="h1",
        fallback=("h3", ".product__title", "h2", ".card__heading"),
    ),
    "product_price": SelectorConfig(
        primary=".price-item",
        fallback=(".price", 'span:has-text("$")', ".money"),
    ),
    "add_to_cart_button": SelectorConfig(
        primary='button[name="add"]',
        fallback=('button:has-text("Add to cart")', "[data-add-to-cart]", "button.product-form__submit"),
    ),
    
    # Cart
    "cart_icon": SelectorConfig(
        primary="a#cart-icon-bubble",
        fallback=('a[href="/cart"]', ".header__icon--cart", "[data-cart-icon]"),
    ),
    "cart_count": SelectorConfig(
        primary=".cart-count-bubble",
        fallback=("#cart-count", ".cart-count", "[data-cart-count]", "span.count"),
    ),
    "cart_item": SelectorConfig(
        primary=".cart-item:visible",
        fallback=("[data-cart-item]:visible", ".cart__item:visible"),
    ),
    "remove_from_cart": SelectorConfig(
        primary="cart-remove-button",
        fallback=(
            '[href*="change?"][href*="quantity=0"]',
            '[aria-label*="Remove"]',
            'button:has-text("Remove")',
            'a:has-text("Remove")',
            ".cart-item__remove",
            "[data-remove-item]",
        ),
    ),
    "cart_quantity_input": SelectorConfig(
        primary='input[name="updates[]"]',
        fallback=(".quantity__input", 'input[type="number"][data-index]'),
    ),
    "cart_update_button": SelectorConfig(
        primary='button[name="update"]',
        fallback=('[name="update"]',),
    ),
    "empty_cart_message": SelectorConfig(
        primary='[data-test-id="empty-cart-message"]',
        fallback=(".cart--empty", ".cart__empty-text", 'p:has-text("Your cart is empty")'),
    ),
    "error_message": SelectorConfig(
        primary='[role="alert"]:has-text("error")',
        fallback=(".error-message", ".alert-error"),
    ),
}

SELECTORS = MappingProxyType(_SELECTORS)


def get_selector(name: str) -> SelectorConfig:
    """Look up a selector config by UI concept name."""
    try:
        return SELECTORS[name]
    except KeyError:
        known = ", ".join(sorted(SELECTORS))
        raise KeyError(f"Unknown selector '{name}'. Known selectors: {known}") from None


def any_of(config: SelectorConfig) -> str:
    """Join primary and fallbacks into one comma-separated CSS union."""
    return ", ".join(config.candidates)
