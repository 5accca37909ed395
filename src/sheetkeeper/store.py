"""Client-side mirror of the authoritative character sheet.

Edits are applied to the local copy immediately. ``save()`` sends the whole
sheet to the authority and replaces the local copy with the recomputed sheet
it returns. Every request is tagged; a response is only applied if no newer
response has been applied already, so a slow earlier save cannot overwrite
a later one.
"""

from dataclasses import replace
from enum import Enum

import structlog

from sheetkeeper.errors import StaleResponse
from sheetkeeper.models.item import CharacterItem, InventoryEntry
from sheetkeeper.models.sheet import CharacterSheet, HitPoints, SheetField
from sheetkeeper.rules.abilities import Ability, SkillMap
from sheetkeeper.rules.derive import clamp_level
from sheetkeeper.rules.proficiency import toggle
from sheetkeeper.rules.sheet import recompute_sheet
from sheetkeeper.sync.gateway import SyncGateway

logger = structlog.get_logger(__name__)


class StoreState(str, Enum):
    """Store state enumeration."""

    UNLOADED = "unloaded"  # No sheet fetched yet
    LOADED = "loaded"  # Sheet available for editing


class _RequestTags:
    """Monotonic request tags for one kind of response."""

    def __init__(self) -> None:
        self.issued = 0
        self.applied = 0

    def next(self) -> int:
        self.issued += 1
        return self.issued

    def accept(self, tag: int) -> None:
        """Mark a response as applied, or raise StaleResponse if superseded."""
        if tag <= self.applied:
            raise StaleResponse(tag, self.applied)
        self.applied = tag


class CharacterSheetStore:
    """
    Holds the session's single character sheet and inventory.

    Mutations are no-ops until the first successful load(). Network failures
    propagate to the caller and leave local state untouched.
    """

    def __init__(
        self,
        gateway: SyncGateway,
        *,
        local_recompute: bool = False,
        skill_map: SkillMap | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            gateway: Collaborator that fetches and persists sheet state
            local_recompute: Rerun derived-value rules after every local edit
            skill_map: Skill map used for local recomputation (required with local_recompute)
        """
        if local_recompute and skill_map is None:
            raise ValueError("local_recompute requires a skill_map")

        self.gateway = gateway
        self.local_recompute = local_recompute
        self.skill_map = skill_map
        self._sheet: CharacterSheet | None = None
        self._inventory: list[InventoryEntry] = []
        self._sheet_tags = _RequestTags()
        self._inventory_tags = _RequestTags()
        self._closed = False

    @property
    def state(self) -> StoreState:
        """Current store state."""
        return StoreState.LOADED if self._sheet is not None else StoreState.UNLOADED

    @property
    def sheet(self) -> CharacterSheet | None:
        """The current local sheet, or None before the first load."""
        return self._sheet

    @property
    def inventory(self) -> list[InventoryEntry]:
        """The last inventory received from the authority."""
        return list(self._inventory)

    @property
    def closed(self) -> bool:
        """Whether the store has been torn down."""
        return self._closed

    def close(self) -> None:
        """Tear down the store. Responses still in flight will be discarded."""
        self._closed = True
        logger.info("sheet_store_closed")

    def _accept(self, tags: _RequestTags, tag: int, kind: str) -> bool:
        if self._closed:
            logger.debug("response_after_close_discarded", kind=kind, tag=tag)
            return False
        try:
            tags.accept(tag)
        except StaleResponse as e:
            logger.debug("stale_response_discarded", kind=kind, tag=e.tag, applied=e.applied_tag)
            return False
        return True

    # Sheet

    async def load(self) -> CharacterSheet | None:
        """
        Fetch the sheet from the authority and replace local state with it.

        Returns:
            The fetched sheet, or None if the response was superseded or the
            store was closed meanwhile

        Raises:
            Unreachable: If the authority cannot be contacted
        """
        tag = self._sheet_tags.next()
        try:
            sheet = await self.gateway.fetch_sheet()
        except Exception as e:
            logger.warning("sheet_load_failed", tag=tag, error=str(e))
            raise
        if not self._accept(self._sheet_tags, tag, "fetch_sheet"):
            return None

        first_load = self._sheet is None
        self._sheet = sheet
        logger.info("sheet_loaded", name=sheet.name, first_load=first_load)
        return sheet

    def _edit(self, sheet: CharacterSheet) -> None:
        if self.local_recompute and self.skill_map is not None:
            sheet = recompute_sheet(sheet, self.skill_map)
        self._sheet = sheet

    def apply_field_edit(self, field: SheetField | str, value: str) -> None:
        """Replace one identity field (name, class, race, alignment) locally."""
        if self._sheet is None:
            return
        self._edit(self._sheet.with_field(field, value))

    def apply_ability_edit(self, ability: Ability | str, score: int) -> None:
        """Replace one ability score locally. Derived values stay as last received."""
        if self._sheet is None:
            return
        scores = self._sheet.ability_scores.replace(ability, score)
        self._edit(replace(self._sheet, ability_scores=scores))

    def apply_level_edit(self, level: int) -> None:
        """Set the level locally, clamped to [1, 20]."""
        if self._sheet is None:
            return
        self._edit(replace(self._sheet, level=clamp_level(level)))

    def apply_hp_edit(self, current: int) -> None:
        """Set current hit points locally. Not clamped."""
        if self._sheet is None:
            return
        hit_points = HitPoints(current=current, max=self._sheet.hit_points.max)
        self._edit(replace(self._sheet, hit_points=hit_points))

    def toggle_skill_proficiency(self, name: str, is_proficient: bool) -> None:
        """Mark a skill as proficient or not."""
        if self._sheet is None:
            return
        profs = toggle(self._sheet.skill_proficiencies, name, is_proficient)
        self._edit(replace(self._sheet, skill_proficiencies=profs))

    def toggle_save_proficiency(self, ability: Ability | str, is_proficient: bool) -> None:
        """Mark a saving throw as proficient or not."""
        if self._sheet is None:
            return
        profs = toggle(self._sheet.saving_throw_proficiencies, str(ability), is_proficient)
        self._edit(replace(self._sheet, saving_throw_proficiencies=profs))

    async def save(self) -> CharacterSheet | None:
        """
        Persist the current local sheet and adopt the authority's result.

        The whole local sheet is replaced by the response, including derived
        fields and any edits made while the request was in flight.

        Returns:
            The recomputed sheet, or None if unloaded, superseded or closed

        Raises:
            Unreachable: If the authority cannot be contacted
            Rejected: If the authority declines the update
        """
        if self._sheet is None:
            return None

        tag = self._sheet_tags.next()
        snapshot = self._sheet
        logger.info("sheet_save_started", tag=tag)
        try:
            sheet = await self.gateway.persist_sheet(snapshot)
        except Exception as e:
            logger.warning("sheet_save_failed", tag=tag, error=str(e))
            raise

        if not self._accept(self._sheet_tags, tag, "persist_sheet"):
            return None

        self._sheet = sheet
        logger.info("sheet_saved", tag=tag, level=sheet.level)
        return sheet

    # Inventory

    def _apply_inventory(self, tag: int, kind: str, entries: list[InventoryEntry]) -> bool:
        if not self._accept(self._inventory_tags, tag, kind):
            return False
        self._inventory = list(entries)
        logger.info("inventory_replaced", kind=kind, entries=len(entries))
        return True

    async def load_inventory(self) -> list[InventoryEntry] | None:
        """
        Fetch the full inventory and replace the local copy.

        Raises:
            Unreachable: If the authority cannot be contacted
        """
        tag = self._inventory_tags.next()
        entries = await self.gateway.fetch_inventory()
        if not self._apply_inventory(tag, "fetch_inventory", entries):
            return None
        return self.inventory

    async def add_item(self, item_id: int, quantity: int = 1) -> list[InventoryEntry] | None:
        """
        Ask the authority to add an item and adopt the returned inventory.

        Raises:
            Unreachable: If the authority cannot be contacted
            UnknownItem: If the item id is not in the catalog
            Rejected: If the authority declines the quantity
        """
        tag = self._inventory_tags.next()
        try:
            entries = await self.gateway.add_inventory_item(CharacterItem(item_id, quantity))
        except Exception as e:
            logger.warning("inventory_add_failed", item_id=item_id, error=str(e))
            raise
        if not self._apply_inventory(tag, "add_inventory_item", entries):
            return None
        return self.inventory

    async def remove_item(self, item_id: int) -> list[InventoryEntry] | None:
        """
        Ask the authority to remove an item and adopt the returned inventory.

        Raises:
            Unreachable: If the authority cannot be contacted
        """
        tag = self._inventory_tags.next()
        try:
            entries = await self.gateway.remove_inventory_item(item_id)
        except Exception as e:
            logger.warning("inventory_remove_failed", item_id=item_id, error=str(e))
            raise
        if not self._apply_inventory(tag, "remove_inventory_item", entries):
            return None
        return self.inventory
