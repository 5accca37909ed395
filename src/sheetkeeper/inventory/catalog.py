"""
Item catalog loader for Sheetkeeper.

Loads item definitions from YAML and resolves them by id.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml

from sheetkeeper.errors import UnknownItem
from sheetkeeper.models.item import CatalogItem

logger = structlog.get_logger(__name__)


class CatalogError(Exception):
    """Raised when catalog data cannot be loaded or validated."""

    pass


REQUIRED_FIELDS = ["id", "name", "type"]


class ItemCatalog:
    """Read-only lookup of item definitions by id."""

    def __init__(self, items: list[CatalogItem]) -> None:
        self._items: dict[int, CatalogItem] = {}
        for item in items:
            if item.id in self._items:
                raise CatalogError(f"Duplicate item id: {item.id}")
            self._items[item.id] = item

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def resolve(self, item_id: int) -> CatalogItem:
        """
        Look up an item definition.

        Raises:
            UnknownItem: If the id is not in the catalog
        """
        try:
            return self._items[item_id]
        except KeyError:
            raise UnknownItem(item_id) from None

    def all(self) -> list[CatalogItem]:
        """Every item definition, in load order."""
        return list(self._items.values())


def parse_catalog(data: Any, source: str = "<data>") -> ItemCatalog:
    """
    Validate raw catalog data and build an ItemCatalog.

    Raises:
        CatalogError: If the data is empty or an entry is invalid
    """
    if not data or "items" not in data:
        raise CatalogError(f"Missing 'items' key in {source}")

    entries = data["items"]
    if not isinstance(entries, list):
        raise CatalogError(f"'items' must be a list in {source}")

    items = []
    for entry in entries:
        for field in REQUIRED_FIELDS:
            if not isinstance(entry, dict) or field not in entry:
                item_id = entry.get("id", "unknown") if isinstance(entry, dict) else "unknown"
                raise CatalogError(f"Item '{item_id}' in {source} missing required field: {field}")
        try:
            items.append(CatalogItem.from_dict(entry))
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Item '{entry['id']}' in {source} is invalid: {e}") from e

    return ItemCatalog(items)


def load_catalog(file_path: Path) -> ItemCatalog:
    """
    Load the item catalog from a YAML file.

    Raises:
        CatalogError: If the file cannot be read, parsed or validated
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogError(f"File not found: {file_path}") from None
    except yaml.YAMLError as e:
        raise CatalogError(f"YAML parsing error in {file_path}: {e}") from e

    catalog = parse_catalog(data, str(file_path))
    logger.info("item_catalog_loaded", path=str(file_path), items=len(catalog))
    return catalog
