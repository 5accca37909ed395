"""Tests for the in-process authority."""

from dataclasses import replace

import pytest

from sheetkeeper.config import DATA_DIR
from sheetkeeper.errors import Rejected, UnknownItem
from sheetkeeper.models import CharacterItem
from sheetkeeper.sync.local import CharacterSeedError, LocalAuthority


class TestLocalAuthoritySheet:
    """Tests for fetching and persisting sheets."""

    @pytest.mark.asyncio
    async def test_fetch_sheet_is_derived(self, authority) -> None:
        """Fetched sheets carry freshly derived values."""
        sheet = await authority.fetch_sheet()
        assert sheet.skills["Stealth"] == 5
        assert sheet.proficiency_bonus == 3

    @pytest.mark.asyncio
    async def test_persist_recomputes_derived_fields(self, authority) -> None:
        """Persisting edited inputs returns recomputed derived values."""
        sheet = await authority.fetch_sheet()
        edited = replace(
            sheet,
            level=9,
            ability_scores=sheet.ability_scores.replace("dexterity", 18),
        )
        result = await authority.persist_sheet(edited)
        assert result.level == 9
        assert result.proficiency_bonus == 4
        assert result.ability_modifiers.dexterity == 4
        assert result.skills["Stealth"] == 8
        assert authority.record.ability_scores.dexterity == 18

    @pytest.mark.asyncio
    async def test_persist_ignores_client_derived_fields(self, authority) -> None:
        """Derived values sent by the client are never trusted."""
        sheet = await authority.fetch_sheet()
        result = await authority.persist_sheet(replace(sheet, proficiency_bonus=99, armor_class=1))
        assert result.proficiency_bonus == 3
        assert result.armor_class == 12

    @pytest.mark.asyncio
    async def test_persist_clamps_level(self, authority) -> None:
        """Out-of-range levels are stored clamped."""
        sheet = await authority.fetch_sheet()
        result = await authority.persist_sheet(replace(sheet, level=0))
        assert result.level == 1
        assert authority.record.level == 1

    @pytest.mark.asyncio
    async def test_unknown_skill_proficiency_rejected(self, authority) -> None:
        """Proficiency in an unknown skill is rejected and nothing is stored."""
        sheet = await authority.fetch_sheet()
        bad = replace(sheet, skill_proficiencies=frozenset({"Stealth", "Juggling"}))
        with pytest.raises(Rejected, match="Juggling"):
            await authority.persist_sheet(bad)
        assert authority.record.skill_proficiencies == {"Stealth"}

    @pytest.mark.asyncio
    async def test_unknown_save_proficiency_rejected(self, authority) -> None:
        """Saving throw proficiencies must name abilities."""
        with pytest.raises(Rejected, match="luck"):
            authority.apply_payload({"savingThrowProficiencies": ["luck"]})

    @pytest.mark.asyncio
    async def test_malformed_payload_rejected(self, authority) -> None:
        """Malformed payloads are rejected."""
        with pytest.raises(Rejected):
            authority.apply_payload({"level": "high"})


class TestLocalAuthorityInventory:
    """Tests for inventory operations."""

    @pytest.mark.asyncio
    async def test_add_merges_by_id(self, authority) -> None:
        """Adding the same item twice merges quantities."""
        await authority.add_inventory_item(CharacterItem(1, 2))
        entries = await authority.add_inventory_item(CharacterItem(1, 3))
        assert [(e.item.id, e.quantity) for e in entries] == [(1, 5)]

    @pytest.mark.asyncio
    async def test_add_unknown_item(self, authority) -> None:
        """Unknown catalog ids raise UnknownItem."""
        with pytest.raises(UnknownItem):
            await authority.add_inventory_item(CharacterItem(77, 1))

    @pytest.mark.asyncio
    async def test_remove_and_fetch(self, authority) -> None:
        """Removal returns and stores the full updated list."""
        await authority.add_inventory_item(CharacterItem(2, 1))
        await authority.add_inventory_item(CharacterItem(3, 1))
        await authority.remove_inventory_item(2)
        entries = await authority.fetch_inventory()
        assert [e.item.id for e in entries] == [3]


class TestSeedLoading:
    """Tests for building an authority from YAML seed data."""

    @pytest.mark.asyncio
    async def test_packaged_seed(self) -> None:
        """The packaged seed character and inventory load."""
        authority = LocalAuthority.from_files(
            DATA_DIR / "character.yaml", DATA_DIR / "skills.yaml", DATA_DIR / "items.yaml"
        )
        sheet = await authority.fetch_sheet()
        assert sheet.character_class == "Rogue"
        assert sheet.skills["Stealth"] == 3 + 2
        assert len(await authority.fetch_inventory()) == 3

    def test_seed_with_unknown_skill(self, tmp_path) -> None:
        """Seed characters with unknown proficiencies fail to load."""
        path = tmp_path / "character.yaml"
        path.write_text(
            "character:\n"
            "  name: X\n  class: Y\n  race: Z\n  alignment: N\n  level: 1\n"
            "  ability_scores: {strength: 10, dexterity: 10, constitution: 10,"
            " intelligence: 10, wisdom: 10, charisma: 10}\n"
            "  skill_proficiencies: [Juggling]\n",
            encoding="utf-8",
        )
        with pytest.raises(CharacterSeedError, match="Juggling"):
            LocalAuthority.from_files(path, DATA_DIR / "skills.yaml", DATA_DIR / "items.yaml")

    def test_seed_missing_character(self, tmp_path) -> None:
        """Seed files need a 'character' section."""
        path = tmp_path / "character.yaml"
        path.write_text("inventory: []\n", encoding="utf-8")
        with pytest.raises(CharacterSeedError, match="character"):
            LocalAuthority.from_files(path, DATA_DIR / "skills.yaml", DATA_DIR / "items.yaml")
