"""Data models for character sheets and inventories."""

from sheetkeeper.models.item import (
    CatalogItem,
    CharacterItem,
    InventoryEntry,
    inventory_from_list,
    inventory_to_list,
)
from sheetkeeper.models.sheet import (
    CharacterRecord,
    CharacterSheet,
    HitPoints,
    SheetField,
    apply_payload,
    record_from_dict,
    sheet_from_dict,
    sheet_to_dict,
    sheet_to_payload,
)

__all__ = [
    "CatalogItem",
    "CharacterItem",
    "CharacterRecord",
    "CharacterSheet",
    "HitPoints",
    "InventoryEntry",
    "SheetField",
    "apply_payload",
    "inventory_from_list",
    "inventory_to_list",
    "record_from_dict",
    "sheet_from_dict",
    "sheet_to_dict",
    "sheet_to_payload",
]
