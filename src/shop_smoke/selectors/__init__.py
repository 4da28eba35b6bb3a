"""Selector registry and fallback resolver."""

from .registry import SELECTORS, any_of, get_selector
from .resolver import (
    Exhausted,
    Resolved,
    SelectorResolver,
    element_exists,
    get_element,
    get_first_element,
)

__all__ = [
    "SELECTORS",
    "Exhausted",
    "Resolved",
    "SelectorResolver",
    "any_of",
    "element_exists",
    "get_element",
    "get_first_element",
    "get_selector",
]
