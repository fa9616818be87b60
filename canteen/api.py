"""HTTP client for the canteen backend."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from canteen.config import BACKEND_URL, REQUEST_TIMEOUT_SECONDS
from canteen.constant import SEED_MENU
from canteen.errors import MenuLoadError, OrderSubmissionError
from canteen.models import MenuItem, OrderPayload


class BackendClient:
    """Thin wrapper over the backend's menu and order endpoints.

    The aiohttp session is created lazily on first use so the client can be
    constructed outside a running event loop.
    """

    def __init__(self, base_url: str = BACKEND_URL, timeout: float = REQUEST_TIMEOUT_SECONDS) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def fetch_menu(self) -> list[MenuItem]:
        session = await self._get_session()
        try:
            async with session.get(self._url("/api/menu")) as resp:
                resp.raise_for_status()
                data = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise MenuLoadError(f"Menu fetch failed: {exc}") from exc

        if not isinstance(data, list):
            raise MenuLoadError("Menu response is not a list")
        try:
            return [MenuItem.from_json(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise MenuLoadError(f"Malformed menu item: {exc}") from exc

    async def create_menu_item(self, body: dict[str, Any]) -> None:
        session = await self._get_session()
        try:
            async with session.post(self._url("/api/menu"), json=body) as resp:
                resp.raise_for_status()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise MenuLoadError(f"Menu seeding failed: {exc}") from exc

    async def load_menu(self) -> list[MenuItem]:
        """Fetch the menu, seeding an empty backend once and fetching again."""
        menu = await self.fetch_menu()
        if menu:
            return menu
        for body in SEED_MENU:
            await self.create_menu_item(body)
        return await self.fetch_menu()

    async def create_order(self, payload: OrderPayload) -> str:
        """Submit an order and return the identifier assigned by the backend."""
        session = await self._get_session()
        try:
            async with session.post(self._url("/api/orders"), json=payload.to_json()) as resp:
                resp.raise_for_status()
                data = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise OrderSubmissionError(f"Order request failed: {exc}") from exc

        order_id = data.get("id") if isinstance(data, dict) else None
        if order_id is None or order_id == "":
            raise OrderSubmissionError("Order response has no id")
        return str(order_id)
