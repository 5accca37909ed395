"""Wiring for a client session against a remote authority."""

import structlog

from sheetkeeper.config import Settings, get_settings
from sheetkeeper.rules.abilities import load_skill_map
from sheetkeeper.store import CharacterSheetStore
from sheetkeeper.sync.http import HttpSyncGateway

logger = structlog.get_logger(__name__)


def create_store(settings: Settings | None = None) -> CharacterSheetStore:
    """
    Build a store talking to the configured authority server.

    The skill map is only loaded when local recomputation is enabled, and
    then it is validated before the store exists.

    Args:
        settings: Settings to use (defaults to the cached application settings)

    Returns:
        An unloaded CharacterSheetStore; call ``await store.load()`` next
    """
    settings = settings or get_settings()
    gateway = HttpSyncGateway(settings.server_url, timeout=settings.request_timeout)

    skill_map = load_skill_map(settings.skills_file) if settings.local_recompute else None
    store = CharacterSheetStore(
        gateway, local_recompute=settings.local_recompute, skill_map=skill_map
    )
    logger.info(
        "client_store_created",
        server_url=settings.server_url,
        local_recompute=settings.local_recompute,
    )
    return store
