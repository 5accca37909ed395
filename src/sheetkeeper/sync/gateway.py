"""Contract between the sheet store and the authority that owns the data."""

from abc import ABC, abstractmethod

from sheetkeeper.models.item import CharacterItem, InventoryEntry
from sheetkeeper.models.sheet import CharacterSheet


class SyncGateway(ABC):
    """
    Abstract collaborator for fetching and persisting sheet state.

    Implementations raise Unreachable when the authority cannot be contacted,
    Rejected when a write is declined and UnknownItem for unresolvable
    inventory ids. Transport details never leak past this interface.
    """

    @abstractmethod
    async def fetch_sheet(self) -> CharacterSheet:
        """Fetch the current authoritative sheet."""
        pass

    @abstractmethod
    async def persist_sheet(self, sheet: CharacterSheet) -> CharacterSheet:
        """Persist a sheet's inputs and return the recomputed sheet."""
        pass

    @abstractmethod
    async def fetch_inventory(self) -> list[InventoryEntry]:
        """Fetch the full inventory."""
        pass

    @abstractmethod
    async def add_inventory_item(self, request: CharacterItem) -> list[InventoryEntry]:
        """Add a quantity of an item and return the full inventory."""
        pass

    @abstractmethod
    async def remove_inventory_item(self, item_id: int) -> list[InventoryEntry]:
        """Remove an item entirely and return the full inventory."""
        pass
