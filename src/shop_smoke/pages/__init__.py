"""Page objects for the storefront."""

from .base import BasePage
from .cart import CartPage
from .collection import CollectionPage
from .home import HomePage
from .product import ProductPage

__all__ = ["BasePage", "CartPage", "CollectionPage", "HomePage", "ProductPage"]
