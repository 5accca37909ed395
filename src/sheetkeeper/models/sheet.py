"""Character sheet data model and its JSON wire format.

The wire format uses camelCase keys. Proficiency sets travel as sorted lists.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from sheetkeeper.rules.abilities import AbilityModifiers, AbilityScores
from sheetkeeper.rules.proficiency import ProficiencySet, make_set


class SheetField(StrEnum):
    """Free-text identity fields a player may edit directly."""

    NAME = "name"
    CLASS = "class"
    RACE = "race"
    ALIGNMENT = "alignment"

    @property
    def attribute(self) -> str:
        """Dataclass attribute backing this field."""
        return "character_class" if self is SheetField.CLASS else self.value


@dataclass(frozen=True)
class HitPoints:
    """Current and maximum hit points."""

    current: int
    max: int


@dataclass(frozen=True)
class CharacterRecord:
    """The authoritative inputs a sheet is derived from."""

    name: str
    character_class: str
    race: str
    alignment: str
    level: int
    current_hit_points: int
    ability_scores: AbilityScores
    skill_proficiencies: ProficiencySet = field(default_factory=frozenset)
    saving_throw_proficiencies: ProficiencySet = field(default_factory=frozenset)


@dataclass(frozen=True)
class CharacterSheet:
    """
    The full displayed sheet: inputs plus every derived value.

    Instances are immutable; edits produce a new sheet so holders can detect
    changes by identity.
    """

    name: str
    character_class: str
    race: str
    alignment: str
    level: int
    proficiency_bonus: int
    hit_points: HitPoints
    armor_class: int
    initiative: int
    ability_scores: AbilityScores
    ability_modifiers: AbilityModifiers
    saving_throws: dict[str, int]
    skills: dict[str, int]
    skill_map: dict[str, str]
    skill_proficiencies: ProficiencySet
    saving_throw_proficiencies: ProficiencySet

    def with_field(self, sheet_field: SheetField | str, value: str) -> "CharacterSheet":
        """Return a copy with one identity field replaced."""
        return replace(self, **{SheetField(sheet_field).attribute: value})


def _require(data: dict[str, Any], *keys: str) -> None:
    missing = [key for key in keys if key not in data]
    if missing:
        raise ValueError(f"Missing sheet fields: {', '.join(missing)}")


def _int_map(data: Any, label: str) -> dict[str, int]:
    if not isinstance(data, dict):
        raise ValueError(f"'{label}' must be an object")
    return {str(key): int(value) for key, value in data.items()}


def _name_map(data: Any, label: str) -> dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{label}' must be an object")
    return {str(key): str(value) for key, value in data.items()}


def _name_set(data: Any, label: str) -> ProficiencySet:
    if data is None:
        return make_set()
    if not isinstance(data, list):
        raise ValueError(f"'{label}' must be a list of names")
    return make_set(str(name) for name in data)


def sheet_to_dict(sheet: CharacterSheet) -> dict[str, Any]:
    """Serialize a full sheet to its wire representation."""
    return {
        "name": sheet.name,
        "class": sheet.character_class,
        "race": sheet.race,
        "alignment": sheet.alignment,
        "level": sheet.level,
        "proficiencyBonus": sheet.proficiency_bonus,
        "hitPoints": {"current": sheet.hit_points.current, "max": sheet.hit_points.max},
        "armorClass": sheet.armor_class,
        "initiative": sheet.initiative,
        "abilityScores": sheet.ability_scores.to_dict(),
        "abilityModifiers": sheet.ability_modifiers.to_dict(),
        "savingThrows": dict(sheet.saving_throws),
        "skills": dict(sheet.skills),
        "skillMap": dict(sheet.skill_map),
        "skillProficiencies": sorted(sheet.skill_proficiencies),
        "savingThrowProficiencies": sorted(sheet.saving_throw_proficiencies),
    }


def sheet_from_dict(data: dict[str, Any]) -> CharacterSheet:
    """
    Parse a full sheet from its wire representation.

    Raises:
        ValueError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Sheet must be a JSON object")
    _require(
        data,
        "name",
        "class",
        "race",
        "alignment",
        "level",
        "proficiencyBonus",
        "hitPoints",
        "armorClass",
        "initiative",
        "abilityScores",
        "abilityModifiers",
        "savingThrows",
        "skills",
    )
    hit_points = data["hitPoints"]
    try:
        return CharacterSheet(
            name=str(data["name"]),
            character_class=str(data["class"]),
            race=str(data["race"]),
            alignment=str(data["alignment"]),
            level=int(data["level"]),
            proficiency_bonus=int(data["proficiencyBonus"]),
            hit_points=HitPoints(current=int(hit_points["current"]), max=int(hit_points["max"])),
            armor_class=int(data["armorClass"]),
            initiative=int(data["initiative"]),
            ability_scores=AbilityScores.from_dict(data["abilityScores"]),
            ability_modifiers=AbilityModifiers.from_dict(data["abilityModifiers"]),
            saving_throws=_int_map(data["savingThrows"], "savingThrows"),
            skills=_int_map(data["skills"], "skills"),
            skill_map=_name_map(data.get("skillMap"), "skillMap"),
            skill_proficiencies=_name_set(data.get("skillProficiencies"), "skillProficiencies"),
            saving_throw_proficiencies=_name_set(
                data.get("savingThrowProficiencies"), "savingThrowProficiencies"
            ),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed sheet: {e}") from e


def sheet_to_payload(sheet: CharacterSheet) -> dict[str, Any]:
    """The persist request body: only the fields the authority stores."""
    return {
        "name": sheet.name,
        "class": sheet.character_class,
        "race": sheet.race,
        "alignment": sheet.alignment,
        "level": sheet.level,
        "hitPoints": {"current": sheet.hit_points.current, "max": sheet.hit_points.max},
        "abilityScores": sheet.ability_scores.to_dict(),
        "skillProficiencies": sorted(sheet.skill_proficiencies),
        "savingThrowProficiencies": sorted(sheet.saving_throw_proficiencies),
    }


def apply_payload(record: CharacterRecord, data: dict[str, Any]) -> CharacterRecord:
    """
    Merge a full or partial persist payload onto a stored record.

    Keys absent from the payload keep their stored value.

    Raises:
        ValueError: If a present field is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Payload must be a JSON object")

    changes: dict[str, Any] = {}
    for key in ("name", "race", "alignment"):
        if key in data:
            changes[key] = str(data[key])
    if "class" in data:
        changes["character_class"] = str(data["class"])

    try:
        if "level" in data:
            changes["level"] = int(data["level"])
        if "hitPoints" in data:
            changes["current_hit_points"] = int(data["hitPoints"]["current"])
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed payload: {e}") from e

    if "abilityScores" in data:
        if not isinstance(data["abilityScores"], dict):
            raise ValueError("'abilityScores' must be an object")
        changes["ability_scores"] = AbilityScores.from_dict(data["abilityScores"])
    if "skillProficiencies" in data:
        changes["skill_proficiencies"] = _name_set(
            data["skillProficiencies"], "skillProficiencies"
        )
    if "savingThrowProficiencies" in data:
        changes["saving_throw_proficiencies"] = _name_set(
            data["savingThrowProficiencies"], "savingThrowProficiencies"
        )

    return replace(record, **changes)


def record_from_dict(data: dict[str, Any]) -> CharacterRecord:
    """
    Build a stored record from seed data (snake_case keys).

    Raises:
        ValueError: If required fields are missing or malformed
    """
    _require(data, "name", "class", "race", "alignment", "level", "ability_scores")
    return CharacterRecord(
        name=str(data["name"]),
        character_class=str(data["class"]),
        race=str(data["race"]),
        alignment=str(data["alignment"]),
        level=int(data["level"]),
        current_hit_points=int(data.get("current_hit_points", 0)),
        ability_scores=AbilityScores.from_dict(data["ability_scores"]),
        skill_proficiencies=_name_set(data.get("skill_proficiencies"), "skill_proficiencies"),
        saving_throw_proficiencies=_name_set(
            data.get("saving_throw_proficiencies"), "saving_throw_proficiencies"
        ),
    )
