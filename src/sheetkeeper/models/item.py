"""Item catalog and inventory data models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CatalogItem:
    """An item definition owned by the catalog."""

    id: int
    name: str
    type: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire representation."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogItem":
        """Parse from wire representation."""
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            type=str(data["type"]),
            description=str(data.get("description", "")),
        )


@dataclass(frozen=True)
class InventoryEntry:
    """A catalog item held by the character, with its quantity."""

    item: CatalogItem
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire representation."""
        return {"item": self.item.to_dict(), "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryEntry":
        """Parse from wire representation."""
        return cls(item=CatalogItem.from_dict(data["item"]), quantity=int(data["quantity"]))


@dataclass(frozen=True)
class CharacterItem:
    """Request to add a quantity of a catalog item to the inventory."""

    item_id: int
    quantity: int

    def to_dict(self) -> dict[str, int]:
        """Convert to wire representation."""
        return {"itemId": self.item_id, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CharacterItem":
        """
        Parse from wire representation.

        Raises:
            ValueError: If itemId or quantity is missing or not an integer
        """
        try:
            return cls(item_id=int(data["itemId"]), quantity=int(data["quantity"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed inventory request: {e}") from e


def inventory_to_list(entries: list[InventoryEntry]) -> list[dict[str, Any]]:
    """Serialize an inventory list."""
    return [entry.to_dict() for entry in entries]


def inventory_from_list(data: Any) -> list[InventoryEntry]:
    """
    Parse an inventory list.

    Raises:
        ValueError: If the data is not a list of well-formed entries
    """
    if not isinstance(data, list):
        raise ValueError("Inventory must be a JSON list")
    try:
        return [InventoryEntry.from_dict(entry) for entry in data]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed inventory entry: {e}") from e
