"""FastAPI authority server exposing a LocalAuthority over JSON HTTP."""

from typing import Any

import structlog
from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sheetkeeper import __version__
from sheetkeeper.config import Settings
from sheetkeeper.errors import Rejected, UnknownItem
from sheetkeeper.models.item import CharacterItem, inventory_to_list
from sheetkeeper.models.sheet import sheet_to_dict
from sheetkeeper.sync.local import LocalAuthority

logger = structlog.get_logger(__name__)


class CharacterItemBody(BaseModel):
    """Request body for adding an item to the inventory."""

    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(alias="itemId")
    quantity: int


def create_app(authority: LocalAuthority, settings: Settings) -> FastAPI:
    """
    Build the authority application.

    Args:
        authority: The in-process owner of the character and inventory
        settings: Application settings (CORS origin, welcome message)

    Returns:
        A configured FastAPI app
    """
    app = FastAPI(
        title="Sheetkeeper",
        description="Authoritative character sheet server",
        version=__version__,
    )
    app.state.authority = authority

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(Rejected)
    async def handle_rejected(request: Request, exc: Rejected) -> JSONResponse:
        logger.warning("request_rejected", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=422, content={"error": str(exc), "code": "rejected"})

    @app.exception_handler(UnknownItem)
    async def handle_unknown_item(request: Request, exc: UnknownItem) -> JSONResponse:
        logger.warning("unknown_item_requested", path=request.url.path, item_id=exc.item_id)
        return JSONResponse(
            status_code=404,
            content={"error": str(exc), "code": "unknown_item", "itemId": exc.item_id},
        )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok", "message": settings.welcome_message}

    @app.get("/api/character")
    async def get_character() -> dict[str, Any]:
        """Return the full derived sheet."""
        return sheet_to_dict(await authority.fetch_sheet())

    @app.post("/api/character")
    async def update_character(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        """Store a full or partial sheet update and return the recomputed sheet."""
        return sheet_to_dict(authority.apply_payload(payload))

    @app.get("/api/character/inventory")
    async def get_inventory() -> list[dict[str, Any]]:
        """Return the full inventory."""
        return inventory_to_list(await authority.fetch_inventory())

    @app.post("/api/character/inventory")
    async def add_inventory_item(body: CharacterItemBody) -> list[dict[str, Any]]:
        """Add a quantity of an item, merging with any existing entry."""
        entries = await authority.add_inventory_item(CharacterItem(body.item_id, body.quantity))
        return inventory_to_list(entries)

    @app.delete("/api/character/inventory/item/{item_id}")
    async def remove_inventory_item(item_id: int) -> list[dict[str, Any]]:
        """Remove an item entirely. Unknown ids leave the inventory unchanged."""
        return inventory_to_list(await authority.remove_inventory_item(item_id))

    logger.info("authority_app_created", cors_origin=settings.cors_origin)
    return app
