"""Quantity-tracked inventory ledger keyed by catalog item id."""

import structlog

from sheetkeeper.errors import Rejected
from sheetkeeper.models.item import InventoryEntry

from .catalog import ItemCatalog

logger = structlog.get_logger(__name__)


class InventoryLedger:
    """
    Holds at most one entry per item id.

    Adding an id that is already held increases its quantity. Every mutation
    returns the complete inventory after the change.
    """

    def __init__(self, catalog: ItemCatalog) -> None:
        self.catalog = catalog
        self._quantities: dict[int, int] = {}

    def entries(self) -> list[InventoryEntry]:
        """The full inventory, in first-added order."""
        return [
            InventoryEntry(item=self.catalog.resolve(item_id), quantity=quantity)
            for item_id, quantity in self._quantities.items()
        ]

    def quantity_of(self, item_id: int) -> int:
        """Quantity held for an item id (0 if absent)."""
        return self._quantities.get(item_id, 0)

    def add(self, item_id: int, quantity: int) -> list[InventoryEntry]:
        """
        Add a quantity of an item, merging with any existing entry.

        Raises:
            UnknownItem: If the catalog cannot resolve item_id
            Rejected: If quantity is not positive
        """
        if quantity < 1:
            raise Rejected(f"Quantity must be positive, got {quantity}")
        self.catalog.resolve(item_id)

        self._quantities[item_id] = self._quantities.get(item_id, 0) + quantity
        logger.info(
            "inventory_item_added",
            item_id=item_id,
            added=quantity,
            quantity=self._quantities[item_id],
        )
        return self.entries()

    def remove(self, item_id: int) -> list[InventoryEntry]:
        """Delete the whole entry for an item id. Missing ids are ignored."""
        if self._quantities.pop(item_id, None) is not None:
            logger.info("inventory_item_removed", item_id=item_id)
        return self.entries()
