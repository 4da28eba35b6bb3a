"""Tests for cart API interception."""

import json
import logging

import pytest

from shop_smoke.cart.interception import (
    ROUTE_PATTERNS,
    CartApiMock,
    CartRequest,
    CartRoute,
    enable_cart_mocking,
    handle_cart_request,
)
from shop_smoke.cart.mock_state import MockCartState

from ..fakes import FakeRequest

STORE = "https://shop.example.com"


def post(route: CartRoute, body: dict | str | None, content_type: str = "application/json") -> CartRequest:
    if isinstance(body, dict):
        body = json.dumps(body)
    return CartRequest(route=route, method="POST", url=f"{STORE}/cart", body=body, content_type=content_type)


class TestHandlers:
    """Pure request -> response handlers."""
    
    def test_get_state_is_read_only(self, cart_state):
        cart_state.add("V1", 2)
        response = handle_cart_request(CartRequest(route=CartRoute.STATE), cart_state)
        
        assert response.status == 200
        assert response.json_body()["item_count"] == 2
        assert cart_state.snapshot().item_count == 2
    
    def test_add_json_returns_affected_line(self, cart_state):
        cart_state.add("A")
        cart_state.add("B")
        response = handle_cart_request(post(CartRoute.ADD_JSON, {"id": "A", "quantity": 2}), cart_state)
        
        line = response.json_body()
        assert response.status == 200
        assert line["variant_id"] == "A"
        assert line["quantity"] == 3
    
    def test_add_json_accepts_variant_id_and_defaults(self, cart_state):
        handle_cart_request(post(CartRoute.ADD_JSON, {"variant_id": 123}), cart_state)
        handle_cart_request(post(CartRoute.ADD_JSON, {}), cart_state)
        
        snapshot = cart_state.snapshot()
        assert [(i.variant_id, i.quantity) for i in snapshot.items] == [("123", 1), ("mock-variant-id", 1)]
    
    def test_numeric_and_string_ids_merge(self, cart_state):
        handle_cart_request(post(CartRoute.ADD_JSON, {"id": 42, "quantity": 1}), cart_state)
        handle_cart_request(
            post(CartRoute.ADD_FORM, "id=42&quantity=2", "application/x-www-form-urlencoded"),
            cart_state,
        )
        assert cart_state.snapshot().item_count == 3
        assert len(cart_state) == 1
    
    def test_form_add_redirects_to_cart(self, cart_state):
        response = handle_cart_request(
            post(CartRoute.ADD_FORM, "id=bookmark-123&quantity=2", "application/x-www-form-urlencoded"),
            cart_state,
        )
        
        assert response.status == 303
        assert response.headers == {"Location": "/cart"}
        assert response.body == ""
        assert cart_state.snapshot().line_for("bookmark-123").quantity == 2
    
    def test_multipart_form_add(self, cart_state):
        boundary = "----WebKitFormBoundaryabc"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="id"\r\n\r\n'
            "777\r\n"
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="quantity"\r\n\r\n'
            "3\r\n"
            f"--{boundary}--\r\n"
        )
        response = handle_cart_request(
            post(CartRoute.ADD_FORM, body, f"multipart/form-data; boundary={boundary}"),
            cart_state,
        )
        
        assert response.status == 303
        assert cart_state.snapshot().line_for("777").quantity == 3
    
    def test_json_post_to_form_path_returns_line(self, cart_state):
        response = handle_cart_request(post(CartRoute.ADD_FORM, {"id": "V1"}), cart_state)
        assert response.status == 200
        assert response.json_body()["variant_id"] == "V1"
    
    def test_change_uses_one_based_line(self, cart_state):
        cart_state.add("A")
        cart_state.add("B")
        response = handle_cart_request(post(CartRoute.CHANGE, {"line": 2, "quantity": 5}), cart_state)
        
        data = response.json_body()
        assert [(i["variant_id"], i["quantity"]) for i in data["items"]] == [("A", 1), ("B", 5)]
        assert data["item_count"] == 6
    
    def test_change_quantity_zero_removes(self, cart_state):
        cart_state.add("A")
        response = handle_cart_request(post(CartRoute.CHANGE, {"line": 1, "quantity": 0}), cart_state)
        
        assert response.json_body()["items"] == []
    
    def test_change_negative_quantity_is_rejected(self, cart_state):
        cart_state.add("A")
        response = handle_cart_request(post(CartRoute.CHANGE, {"line": 1, "quantity": -2}), cart_state)
        
        assert response.status == 422
        assert cart_state.snapshot().item_count == 1
    
    def test_clear(self, cart_state):
        cart_state.add("A", 4)
        response = handle_cart_request(post(CartRoute.CLEAR, None), cart_state)
        
        assert response.json_body()["item_count"] == 0
        assert len(cart_state) == 0
    
    def test_malformed_json_is_treated_as_empty(self, cart_state):
        response = handle_cart_request(post(CartRoute.ADD_JSON, "{not json"), cart_state)
        assert response.json_body()["variant_id"] == "mock-variant-id"


class TestCartApiMock:
    """Route registration on a page or context."""
    
    @pytest.mark.asyncio
    async def test_enable_registers_every_pattern(self, route_target, cart_state):
        mock = CartApiMock(route_target, state=cart_state, log_requests=False)
        state = await mock.enable()
        
        assert state is cart_state
        assert mock.enabled
        assert set(route_target.routes) == set(ROUTE_PATTERNS.values())
    
    @pytest.mark.asyncio
    async def test_empty_configured_state_is_kept(self, route_target):
        state = MockCartState(currency="EUR", unit_price=500, grams=20)
        mock = await enable_cart_mocking(route_target, state=state, log_requests=False)
        
        assert mock.state is state
        
        await route_target.send(
            "**/cart/add.js",
            FakeRequest("POST", f"{STORE}/cart/add.js", json.dumps({"id": 7, "quantity": 2}), "application/json"),
        )
        route = await route_target.send("**/cart.js", FakeRequest("GET", f"{STORE}/cart.js"))
        cart = json.loads(route.fulfilled["body"])
        
        assert len(state) == 1
        assert cart["currency"] == "EUR"
        assert cart["total_price"] == 1000
        assert cart["total_weight"] == 40
    
    @pytest.mark.asyncio
    async def test_enable_twice_is_harmless(self, route_target):
        mock = CartApiMock(route_target, log_requests=False)
        await mock.enable()
        await mock.enable()
        assert len(route_target.routes) == len(ROUTE_PATTERNS)
    
    @pytest.mark.asyncio
    async def test_disable_removes_routes(self, route_target):
        mock = await enable_cart_mocking(route_target, log_requests=False)
        await mock.disable()
        
        assert route_target.routes == {}
        assert sorted(route_target.unrouted) == sorted(ROUTE_PATTERNS.values())
        assert not mock.enabled
    
    @pytest.mark.asyncio
    async def test_context_manager(self, route_target):
        async with CartApiMock(route_target, log_requests=False) as mock:
            assert mock.enabled
        assert route_target.routes == {}
    
    @pytest.mark.asyncio
    async def test_intercepted_calls_hit_the_state(self, route_target, caplog):
        mock = CartApiMock(route_target)
        with caplog.at_level(logging.INFO, logger="shop_smoke"):
            await mock.enable()
            add = await route_target.send(
                "**/cart/add.js",
                FakeRequest("POST", f"{STORE}/cart/add.js", json.dumps({"id": "bookmark-123", "quantity": 1}), "application/json"),
            )
            state = await route_target.send("**/cart.js", FakeRequest("GET", f"{STORE}/cart.js"))
        
        assert add.fulfilled["status"] == 200
        assert json.loads(add.fulfilled["body"])["variant_id"] == "bookmark-123"
        assert json.loads(state.fulfilled["body"])["item_count"] == 1
        assert state.fulfilled["content_type"] == "application/json"
        assert "[MOCK CART] POST /cart/add.js (add_json)" in caplog.text
        assert "[MOCK CART] GET /cart.js (state)" in caplog.text
    
    @pytest.mark.asyncio
    async def test_form_route_fulfills_redirect(self, route_target):
        await enable_cart_mocking(route_target, log_requests=False)
        route = await route_target.send(
            "**/cart/add",
            FakeRequest("POST", f"{STORE}/cart/add", "id=9&quantity=1", "application/x-www-form-urlencoded"),
        )
        
        assert route.fulfilled["status"] == 303
        assert route.fulfilled["headers"] == {"Location": "/cart"}
    
    @pytest.mark.asyncio
    async def test_sessions_do_not_share_state(self):
        from ..fakes import FakeRouteTarget
        
        first, second = FakeRouteTarget(), FakeRouteTarget()
        mock_a = await enable_cart_mocking(first, log_requests=False)
        mock_b = await enable_cart_mocking(second, log_requests=False)
        await first.send("**/cart/add.js", FakeRequest("POST", "", json.dumps({"id": "X"}), "application/json"))
        
        assert mock_a.state.snapshot().item_count == 1
        assert mock_b.state.snapshot().item_count == 0
    
    @pytest.mark.asyncio
    async def test_bookmark_scenario_through_routes(self, route_target):
        await enable_cart_mocking(route_target, log_requests=False)
        
        async def add():
            await route_target.send(
                "**/cart/add.js",
                FakeRequest("POST", "", json.dumps({"id": "bookmark-123", "quantity": 1}), "application/json"),
            )
            route = await route_target.send("**/cart.js", FakeRequest())
            return json.loads(route.fulfilled["body"])
        
        assert (await add())["item_count"] == 1
        cart = await add()
        assert cart["item_count"] == 2
        assert len(cart["items"]) == 1
        
        route = await route_target.send(
            "**/cart/change.js",
            FakeRequest("POST", "", json.dumps({"line": 1, "quantity": 0}), "application/json"),
        )
        cart = json.loads(route.fulfilled["body"])
        assert cart["item_count"] == 0
        assert cart["items"] == []
