"""Core data models for shop-smoke."""

from dataclasses import dataclass, field, replace
from typing import Literal


@dataclass(frozen=True)
class SelectorConfig:
    """A primary query expression with ordered fallbacks for one UI concept."""
    
    primary: str
    fallback: tuple[str, ...] = ()
    timeout_ms: int = 5000
    
    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {self.timeout_ms}")
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "fallback", tuple(self.fallback))
    
    @property
    def candidates(self) -> tuple[str, ...]:
        """Primary first, then fallbacks in priority order."""
        return (self.primary, *self.fallback)


@dataclass(frozen=True)
class ViewportInfo:
    """Viewport size and its responsive category."""
    
    is_mobile: bool
    is_tablet: bool
    is_desktop: bool
    width: int
    height: int
    
    @property
    def category(self) -> Literal["mobile", "tablet", "desktop"]:
        if self.is_mobile:
            return "mobile"
        if self.is_tablet:
            return "tablet"
        return "desktop"


@dataclass
class CartLineItem:
    """One line of a cart: a variant and its quantity.
    
    Prices are integers in minor currency units (cents).
    """
    
    variant_id: str
    quantity: int
    price: int
    grams: int = 0
    title: str = "Mock Product"
    sku: str = "MOCK-SKU"
    vendor: str = "Mock Vendor"
    handle: str = "mock-product"
    image: str = "https://via.placeholder.com/150"
    product_description: str = "A mocked product for testing"
    product_type: str = "Test"
    variant_title: str = "Default"
    requires_shipping: bool = True
    properties: dict = field(default_factory=dict)
    
    @property
    def line_price(self) -> int:
        return self.price * self.quantity
    
    @property
    def line_weight(self) -> int:
        return self.grams * self.quantity
    
    def to_dict(self) -> dict:
        """Serialize to the storefront's line item JSON shape."""
        return {
            "id": self.variant_id,
            "variant_id": self.variant_id,
            "quantity": self.quantity,
            "title": self.title,
            "price": self.price,
            "line_price": self.line_price,
            "sku": self.sku,
            "grams": self.grams,
            "vendor": self.vendor,
            "properties": dict(self.properties),
            "gift_card": False,
            "url": f"/products/{self.handle}",
            "image": self.image,
            "handle": self.handle,
            "requires_shipping": self.requires_shipping,
            "product_title": self.title,
            "product_description": self.product_description,
            "product_type": self.product_type,
            "variant_title": self.variant_title,
            "variant_options": [self.variant_title],
        }


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable view of a cart at one instant. Totals are always derived."""
    
    token: str
    items: tuple[CartLineItem, ...] = ()
    currency: str = "USD"
    
    @classmethod
    def capture(cls, token: str, items: list[CartLineItem], currency: str = "USD") -> "CartSnapshot":
        """Copy the given lines so later mutation cannot leak into the snapshot."""
        return cls(
            token=token,
            items=tuple(replace(item, properties=dict(item.properties)) for item in items),
            currency=currency,
        )
    
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
    
    @property
    def total_price(self) -> int:
        return sum(item.line_price for item in self.items)
    
    @property
    def total_weight(self) -> int:
        return sum(item.line_weight for item in self.items)
    
    @property
    def requires_shipping(self) -> bool:
        return any(item.requires_shipping for item in self.items)
    
    def line_for(self, variant_id: str) -> CartLineItem | None:
        """Return the line holding a variant, if any."""
        for item in self.items:
            if item.variant_id == variant_id:
                return item
        return None
    
    def to_dict(self) -> dict:
        """Serialize to the /cart.js response shape."""
        total_price = self.total_price
        return {
            "token": self.token,
            "note": None,
            "attributes": {},
            "original_total_price": total_price,
            "total_price": total_price,
            "total_discount": 0,
            "total_weight": self.total_weight,
            "item_count": self.item_count,
            "items": [item.to_dict() for item in self.items],
            "requires_shipping": self.requires_shipping,
            "currency": self.currency,
            "items_subtotal_price": total_price,
            "cart_level_discount_applications": [],
        }
