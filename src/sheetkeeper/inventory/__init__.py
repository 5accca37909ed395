"""Item catalog and inventory ledger."""

from .catalog import CatalogError, ItemCatalog, load_catalog, parse_catalog
from .ledger import InventoryLedger

__all__ = [
    "CatalogError",
    "InventoryLedger",
    "ItemCatalog",
    "load_catalog",
    "parse_catalog",
]
