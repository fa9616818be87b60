from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from canteen.api import BackendClient
from canteen.constant import SEED_MENU
from canteen.errors import MenuLoadError, OrderSubmissionError
from canteen.models import OrderItem, OrderPayload


def _payload() -> OrderPayload:
    return OrderPayload(
        customer_name="Asha",
        phone="9876543210",
        hostel="Vivekanand",
        room="B-214",
        delivery_instructions="",
        items=(OrderItem(item_id="1", name="Tea", qty=2, price=10),),
        total_amount=30.0,
    )


@pytest_asyncio.fixture()
async def backend():
    state: dict[str, Any] = {"menu": [], "orders": [], "menu_gets": 0, "order_status": 201, "order_body": None}

    async def get_menu(request: web.Request) -> web.Response:
        state["menu_gets"] += 1
        return web.json_response(state["menu"])

    async def post_menu(request: web.Request) -> web.Response:
        body = await request.json()
        assert "id" not in body
        item = {"id": str(len(state["menu"]) + 1), **body}
        state["menu"].append(item)
        return web.json_response(item, status=201)

    async def post_order(request: web.Request) -> web.Response:
        body = await request.json()
        state["orders"].append(body)
        if state["order_status"] >= 400:
            return web.json_response({"detail": "boom"}, status=state["order_status"])
        reply = state["order_body"] if state["order_body"] is not None else {"id": "abc123", **body}
        return web.json_response(reply, status=state["order_status"])

    app = web.Application()
    app.router.add_get("/api/menu", get_menu)
    app.router.add_post("/api/menu", post_menu)
    app.router.add_post("/api/orders", post_order)

    server = TestServer(app)
    await server.start_server()
    client = BackendClient(str(server.make_url("/")), timeout=5)
    try:
        yield client, state
    finally:
        await client.close()
        await server.close()


@pytest.mark.asyncio
async def test_load_menu_returns_existing_items(backend) -> None:
    client, state = backend
    state["menu"] = [
        {"id": 7, "name": "Tea", "category": "Beverages", "price": 10, "is_available": True},
        {"id": 8, "name": "Fries", "category": "Fast Food", "price": 65, "is_available": False, "image_url": None},
    ]

    menu = await client.load_menu()

    assert [item.id for item in menu] == ["7", "8"]
    assert menu[1].is_available is False
    assert menu[0].description is None
    assert state["menu_gets"] == 1


@pytest.mark.asyncio
async def test_empty_menu_is_seeded_then_refetched(backend) -> None:
    client, state = backend

    menu = await client.load_menu()

    assert len(menu) == len(SEED_MENU)
    assert [item.name for item in menu] == [entry["name"] for entry in SEED_MENU]
    assert state["menu_gets"] == 2


@pytest.mark.asyncio
async def test_create_order_posts_payload_and_returns_id(backend) -> None:
    client, state = backend

    order_id = await client.create_order(_payload())

    assert order_id == "abc123"
    assert state["orders"][0]["total_amount"] == 30.0
    assert state["orders"][0]["items"] == [{"item_id": "1", "name": "Tea", "qty": 2, "price": 10}]


@pytest.mark.asyncio
async def test_non_success_status_is_a_submission_failure(backend) -> None:
    client, state = backend
    state["order_status"] = 500

    with pytest.raises(OrderSubmissionError):
        await client.create_order(_payload())


@pytest.mark.asyncio
async def test_response_without_id_is_a_submission_failure(backend) -> None:
    client, state = backend
    state["order_body"] = {"status": "ok"}

    with pytest.raises(OrderSubmissionError):
        await client.create_order(_payload())


@pytest.mark.asyncio
async def test_transport_errors_are_wrapped() -> None:
    client = BackendClient("http://127.0.0.1:1", timeout=2)
    try:
        with pytest.raises(OrderSubmissionError):
            await client.create_order(_payload())
        with pytest.raises(MenuLoadError):
            await client.load_menu()
    finally:
        await client.close()
