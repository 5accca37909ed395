"""Shared fixtures for all tests."""

import pytest

from sheetkeeper.config import DATA_DIR
from sheetkeeper.inventory import ItemCatalog, load_catalog
from sheetkeeper.models import CatalogItem, CharacterRecord
from sheetkeeper.rules import AbilityScores, SkillMap, load_skill_map
from sheetkeeper.sync.local import LocalAuthority


@pytest.fixture
def skill_map() -> SkillMap:
    """The packaged 18-skill map."""
    return load_skill_map(DATA_DIR / "skills.yaml")


@pytest.fixture
def catalog() -> ItemCatalog:
    """A small three-item catalog."""
    return ItemCatalog(
        [
            CatalogItem(id=1, name="Longsword", type="weapon", description="1d8 slashing"),
            CatalogItem(id=2, name="Torch", type="gear", description="Bright light, 20 ft"),
            CatalogItem(id=3, name="Potion of Healing", type="consumable", description="2d4+2"),
        ]
    )


@pytest.fixture
def packaged_catalog() -> ItemCatalog:
    """The packaged item catalog."""
    return load_catalog(DATA_DIR / "items.yaml")


@pytest.fixture
def record() -> CharacterRecord:
    """A level 5 rogue with DEX 14 and Stealth proficiency.

    Modifiers: STR 0, DEX +2, CON +1, INT +1, WIS 0, CHA -1. Proficiency +3.
    """
    return CharacterRecord(
        name="Tessa",
        character_class="Rogue",
        race="Halfling",
        alignment="Neutral Good",
        level=5,
        current_hit_points=20,
        ability_scores=AbilityScores(
            strength=10,
            dexterity=14,
            constitution=12,
            intelligence=13,
            wisdom=11,
            charisma=8,
        ),
        skill_proficiencies=frozenset({"Stealth"}),
        saving_throw_proficiencies=frozenset({"dexterity"}),
    )


@pytest.fixture
def authority(record, skill_map, catalog) -> LocalAuthority:
    """An in-process authority holding the sample character."""
    return LocalAuthority(record, skill_map, catalog)
