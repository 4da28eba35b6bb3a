"""Route the storefront cart API to a MockCartState instead of the network."""

import json
from dataclasses import dataclass, field
from email.parser import Parser
from enum import Enum
from typing import Awaitable, Callable
from urllib.parse import parse_qs, urlparse

from playwright.async_api import BrowserContext, Page, Route

from ..log import get_logger
from .mock_state import MockCartState

logger = get_logger(__name__)

DEFAULT_VARIANT_ID = "mock-variant-id"


class CartRoute(Enum):
    """Cart API endpoints that can be intercepted."""
    
    STATE = "state"
    ADD_JSON = "add_json"
    ADD_FORM = "add_form"
    CHANGE = "change"
    CLEAR = "clear"


ROUTE_PATTERNS: dict[CartRoute, str] = {
    CartRoute.STATE: "**/cart.js",
    CartRoute.ADD_JSON: "**/cart/add.js",
    CartRoute.ADD_FORM: "**/cart/add",
    CartRoute.CHANGE: "**/cart/change.js",
    CartRoute.CLEAR: "**/cart/clear.js",
}


@dataclass(frozen=True)
class CartRequest:
    """The parts of an intercepted request the handlers look at."""
    
    route: CartRoute
    method: str = "GET"
    url: str = ""
    body: str | None = None
    content_type: str = ""


@dataclass(frozen=True)
class MockResponse:
    """What to fulfill an intercepted request with."""
    
    status: int
    body: str = ""
    content_type: str | None = "application/json"
    headers: dict[str, str] = field(default_factory=dict)
    
    @classmethod
    def json(cls, payload: dict, status: int = 200) -> "MockResponse":
        return cls(status=status, body=json.dumps(payload))
    
    def json_body(self) -> dict:
        return json.loads(self.body) if self.body else {}


def handle_cart_request(request: CartRequest, state: MockCartState) -> MockResponse:
    """Serve one cart API call from the mock state."""
    handler = _HANDLERS[request.route]
    return handler(request, state)


def _handle_state(request: CartRequest, state: MockCartState) -> MockResponse:
    return MockResponse.json(state.snapshot().to_dict())


def _handle_add_json(request: CartRequest, state: MockCartState) -> MockResponse:
    data = _json_body(request.body)
    variant_id, quantity = _add_params(data)
    snapshot = state.add(variant_id, quantity)
    line = snapshot.line_for(variant_id)
    return MockResponse.json(line.to_dict())


def _handle_add_form(request: CartRequest, state: MockCartState) -> MockResponse:
    content_type = request.content_type.lower()
    if "application/json" in content_type:
        # Ajax clients may post JSON to the non-.js path
        return _handle_add_json(request, state)
    
    if content_type.startswith("multipart/form-data"):
        data = _multipart_body(request.body, request.content_type)
    else:
        data = _form_body(request.body)
    
    variant_id, quantity = _add_params(data)
    state.add(variant_id, quantity)
    
    # Real backend redirects form posts to the cart page
    return MockResponse(status=303, content_type=None, headers={"Location": "/cart"})


def _handle_change(request: CartRequest, state: MockCartState) -> MockResponse:
    data = _json_body(request.body)
    if not data and request.body:
        data = _form_body(request.body)
    
    line = _as_int(data.get("line"), default=1)
    quantity = _as_int(data.get("quantity"), default=0)
    
    try:
        snapshot = state.update(line - 1, quantity)
    except ValueError as e:
        return MockResponse.json(
            {"status": 422, "message": "Cart Error", "description": str(e)},
            status=422,
        )
    return MockResponse.json(snapshot.to_dict())


def _handle_clear(request: CartRequest, state: MockCartState) -> MockResponse:
    return MockResponse.json(state.clear().to_dict())


_HANDLERS: dict[CartRoute, Callable[[CartRequest, MockCartState], MockResponse]] = {
    CartRoute.STATE: _handle_state,
    CartRoute.ADD_JSON: _handle_add_json,
    CartRoute.ADD_FORM: _handle_add_form,
    CartRoute.CHANGE: _handle_change,
    CartRoute.CLEAR: _handle_clear,
}


def _add_params(data: dict) -> tuple[str, int]:
    variant_id = data.get("id") or data.get("variant_id") or DEFAULT_VARIANT_ID
    quantity = _as_int(data.get("quantity"), default=1)
    return str(variant_id), max(quantity, 1)


def _as_int(value, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _json_body(body: str | None) -> dict:
    if not body:
        return {}
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _form_body(body: str | None) -> dict:
    if not body:
        return {}
    return {key: values[0] for key, values in parse_qs(body).items()}


def _multipart_body(body: str | None, content_type: str) -> dict:
    if not body:
        return {}
    message = Parser().parsestr(f"Content-Type: {content_type}\r\n\r\n{body}")
    if not message.is_multipart():
        return {}
    
    fields = {}
    for part in message.get_payload():
        name = part.get_param("name", header="content-disposition")
        if name:
            fields[name] = part.get_payload().strip()
    return fields


class CartApiMock:
    """Registers cart API routes on a page or browser context.
    
    The state is passed in (or created here) and owned by this object for
    the lifetime of the session; nothing is kept at module level.
    """
    
    def __init__(
        self,
        target: Page | BrowserContext,
        state: MockCartState | None = None,
        log_requests: bool = True,
    ):
        self.target = target
        self.state = state if state is not None else MockCartState()
        self.log_requests = log_requests
        self._handlers: dict[CartRoute, Callable[[Route], Awaitable[None]]] = {}
    
    @property
    def enabled(self) -> bool:
        return bool(self._handlers)
    
    async def enable(self) -> MockCartState:
        """Start intercepting every cart API route."""
        if self.enabled:
            return self.state
        
        for cart_route, pattern in ROUTE_PATTERNS.items():
            handler = self._make_handler(cart_route)
            await self.target.route(pattern, handler)
            self._handlers[cart_route] = handler
        
        if self.log_requests:
            logger.info("[MOCK CART] Cart API mocking enabled")
        return self.state
    
    async def disable(self) -> None:
        """Remove our routes so cart traffic reaches the real network again."""
        for cart_route, handler in self._handlers.items():
            await self.target.unroute(ROUTE_PATTERNS[cart_route], handler)
        self._handlers.clear()
        
        if self.log_requests:
            logger.info("[MOCK CART] Cart API mocking disabled")
    
    async def __aenter__(self) -> "CartApiMock":
        await self.enable()
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.disable()
    
    def _make_handler(self, cart_route: CartRoute) -> Callable[[Route], Awaitable[None]]:
        async def handle(route: Route) -> None:
            request = route.request
            cart_request = CartRequest(
                route=cart_route,
                method=request.method,
                url=request.url,
                body=request.post_data,
                content_type=request.headers.get("content-type", ""),
            )
            
            if self.log_requests:
                logger.info(
                    "[MOCK CART] %s %s (%s)",
                    request.method,
                    urlparse(request.url).path,
                    cart_route.value,
                )
            
            response = handle_cart_request(cart_request, self.state)
            await route.fulfill(
                status=response.status,
                body=response.body,
                content_type=response.content_type,
                headers=response.headers or None,
            )
        
        return handle


async def enable_cart_mocking(
    target: Page | BrowserContext,
    state: MockCartState | None = None,
    log_requests: bool = True,
) -> CartApiMock:
    """Create a CartApiMock, enable it, and return it."""
    mock = CartApiMock(target, state=state, log_requests=log_requests)
    await mock.enable()
    return mock


async def disable_cart_mocking(mock: CartApiMock) -> None:
    await mock.disable()
