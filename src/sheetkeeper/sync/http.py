"""aiohttp client for the Sheetkeeper authority server."""

from typing import Any

import aiohttp
import structlog

from sheetkeeper.errors import Rejected, Unreachable, UnknownItem
from sheetkeeper.models.item import CharacterItem, InventoryEntry, inventory_from_list
from sheetkeeper.models.sheet import CharacterSheet, sheet_from_dict, sheet_to_payload

from .gateway import SyncGateway

logger = structlog.get_logger(__name__)

CHARACTER_PATH = "/api/character"
INVENTORY_PATH = "/api/character/inventory"
INVENTORY_ITEM_PATH = "/api/character/inventory/item/{item_id}"


class HttpSyncGateway(SyncGateway):
    """
    SyncGateway backed by the authority's JSON HTTP API.

    Transport failures become Unreachable. Declined writes become Rejected,
    or UnknownItem when the server reports an unresolvable item id.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: Authority server root, e.g. "http://localhost:8080"
            timeout: Total request timeout in seconds (None = aiohttp default)
            session: Optional externally owned client session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None
        self._session = session
        self._owns_session = session is None

        logger.info("http_gateway_initialized", base_url=self.base_url)

    async def __aenter__(self) -> "HttpSyncGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if self.timeout is not None:
                self._session = aiohttp.ClientSession(timeout=self.timeout)
            else:
                self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the client session if this gateway created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        write: bool = False,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(method, url, json=json) as resp:
                if resp.status < 300:
                    return await self._success_body(resp, method, path)

                body = await self._error_body(resp)
                logger.warning(
                    "authority_request_failed",
                    method=method,
                    url=url,
                    status=resp.status,
                    error=body.get("error"),
                )
                if not write:
                    raise Unreachable(f"{method} {path} failed with status {resp.status}")
                if body.get("code") == "unknown_item":
                    raise UnknownItem(self._item_id(body))
                raise Rejected(body.get("error") or f"{method} {path} returned {resp.status}")

        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error("authority_unreachable", method=method, url=url, error=str(e))
            raise Unreachable(f"{method} {path}: {e}") from e

    @staticmethod
    async def _error_body(resp: aiohttp.ClientResponse) -> dict[str, Any]:
        try:
            body = await resp.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    async def _success_body(resp: aiohttp.ClientResponse, method: str, path: str) -> Any:
        try:
            return await resp.json()
        except ValueError as e:
            logger.error("authority_body_invalid", method=method, path=path, error=str(e))
            raise Unreachable(f"{method} {path} returned invalid JSON: {e}") from e

    @staticmethod
    def _item_id(body: dict[str, Any]) -> int:
        try:
            return int(body.get("itemId", -1))
        except (TypeError, ValueError):
            return -1

    @staticmethod
    def _parse_sheet(data: Any) -> CharacterSheet:
        try:
            return sheet_from_dict(data)
        except ValueError as e:
            raise Unreachable(f"Malformed sheet from authority: {e}") from e

    @staticmethod
    def _parse_inventory(data: Any) -> list[InventoryEntry]:
        try:
            return inventory_from_list(data)
        except ValueError as e:
            raise Unreachable(f"Malformed inventory from authority: {e}") from e

    async def fetch_sheet(self) -> CharacterSheet:
        return self._parse_sheet(await self._request("GET", CHARACTER_PATH))

    async def persist_sheet(self, sheet: CharacterSheet) -> CharacterSheet:
        data = await self._request("POST", CHARACTER_PATH, json=sheet_to_payload(sheet), write=True)
        return self._parse_sheet(data)

    async def fetch_inventory(self) -> list[InventoryEntry]:
        return self._parse_inventory(await self._request("GET", INVENTORY_PATH))

    async def add_inventory_item(self, request: CharacterItem) -> list[InventoryEntry]:
        data = await self._request("POST", INVENTORY_PATH, json=request.to_dict(), write=True)
        return self._parse_inventory(data)

    async def remove_inventory_item(self, item_id: int) -> list[InventoryEntry]:
        path = INVENTORY_ITEM_PATH.format(item_id=item_id)
        return self._parse_inventory(await self._request("DELETE", path, write=True))
