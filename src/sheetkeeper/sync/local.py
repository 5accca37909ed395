"""In-process authority that stores character inputs and recomputes sheets."""

from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog
import yaml

from sheetkeeper.errors import Rejected, SheetkeeperError
from sheetkeeper.inventory import InventoryLedger, ItemCatalog, load_catalog
from sheetkeeper.models.item import CharacterItem, InventoryEntry
from sheetkeeper.models.sheet import (
    CharacterRecord,
    CharacterSheet,
    apply_payload,
    record_from_dict,
    sheet_to_payload,
)
from sheetkeeper.rules.abilities import ABILITY_NAMES, SkillMap, load_skill_map
from sheetkeeper.rules.derive import clamp_level
from sheetkeeper.rules.sheet import derive_sheet

from .gateway import SyncGateway

logger = structlog.get_logger(__name__)


class CharacterSeedError(Exception):
    """Raised when the seed character file cannot be loaded."""

    pass


class LocalAuthority(SyncGateway):
    """
    Authoritative owner of one character and its inventory.

    Holds the stored inputs in memory and derives the full sheet on every
    read and write.
    """

    def __init__(
        self,
        record: CharacterRecord,
        skill_map: SkillMap,
        catalog: ItemCatalog,
        ledger: InventoryLedger | None = None,
    ) -> None:
        self._record = record
        self.skill_map = skill_map
        self.catalog = catalog
        self.ledger = ledger if ledger is not None else InventoryLedger(catalog)

    @property
    def record(self) -> CharacterRecord:
        """The stored inputs."""
        return self._record

    @classmethod
    def from_files(
        cls, character_file: Path, skills_file: Path, catalog_file: Path
    ) -> "LocalAuthority":
        """
        Build an authority from YAML seed data.

        Raises:
            CharacterSeedError: If the character file is missing or invalid
            SkillMapError: If the skill map is invalid
            CatalogError: If the item catalog is invalid
        """
        skill_map = load_skill_map(skills_file)
        catalog = load_catalog(catalog_file)

        try:
            with open(character_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise CharacterSeedError(f"File not found: {character_file}") from None
        except yaml.YAMLError as e:
            raise CharacterSeedError(f"YAML parsing error in {character_file}: {e}") from e

        if "character" not in data:
            raise CharacterSeedError(f"Missing 'character' key in {character_file}")
        try:
            record = record_from_dict(data["character"])
        except ValueError as e:
            raise CharacterSeedError(f"Invalid character in {character_file}: {e}") from e

        authority = cls(record, skill_map, catalog)
        try:
            authority._validate_proficiencies(record)
        except Rejected as e:
            raise CharacterSeedError(f"Invalid character in {character_file}: {e}") from e

        for entry in data.get("inventory") or []:
            try:
                authority.ledger.add(int(entry["item_id"]), int(entry.get("quantity", 1)))
            except (KeyError, TypeError, ValueError, SheetkeeperError) as e:
                raise CharacterSeedError(
                    f"Invalid inventory entry {entry!r} in {character_file}: {e}"
                ) from e

        logger.info(
            "character_seed_loaded",
            path=str(character_file),
            name=record.name,
            inventory_entries=len(authority.ledger.entries()),
        )
        return authority

    def _validate_proficiencies(self, record: CharacterRecord) -> None:
        unknown_skills = sorted(n for n in record.skill_proficiencies if n not in self.skill_map)
        if unknown_skills:
            raise Rejected(f"Unknown skills: {', '.join(unknown_skills)}")

        unknown_saves = sorted(
            n for n in record.saving_throw_proficiencies if n not in ABILITY_NAMES
        )
        if unknown_saves:
            raise Rejected(f"Unknown saving throws: {', '.join(unknown_saves)}")

    def current_sheet(self) -> CharacterSheet:
        """Derive the sheet for the stored inputs."""
        return derive_sheet(self._record, self.skill_map)

    def apply_payload(self, data: dict[str, Any]) -> CharacterSheet:
        """
        Store a full or partial persist payload and return the recomputed sheet.

        Raises:
            Rejected: If the payload is malformed or names unknown proficiencies
        """
        try:
            record = apply_payload(self._record, data)
        except ValueError as e:
            logger.warning("character_update_rejected", error=str(e))
            raise Rejected(str(e)) from e

        try:
            self._validate_proficiencies(record)
        except Rejected as e:
            logger.warning("character_update_rejected", error=str(e))
            raise

        self._record = replace(record, level=clamp_level(record.level))
        logger.info("character_updated", name=self._record.name, level=self._record.level)
        return self.current_sheet()

    async def fetch_sheet(self) -> CharacterSheet:
        return self.current_sheet()

    async def persist_sheet(self, sheet: CharacterSheet) -> CharacterSheet:
        return self.apply_payload(sheet_to_payload(sheet))

    async def fetch_inventory(self) -> list[InventoryEntry]:
        return self.ledger.entries()

    async def add_inventory_item(self, request: CharacterItem) -> list[InventoryEntry]:
        return self.ledger.add(request.item_id, request.quantity)

    async def remove_inventory_item(self, item_id: int) -> list[InventoryEntry]:
        return self.ledger.remove(item_id)
