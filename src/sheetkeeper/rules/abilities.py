"""Abilities, ability score sets and the static skill map.

The six abilities are a fixed enumeration whose declaration order is the
display order. Skills are loaded from YAML once at startup; every entry must
name one of the six abilities, so a bad skill file fails fast instead of
producing wrong bonuses at request time.
"""

from dataclasses import dataclass, fields, replace
from enum import StrEnum
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)


class Ability(StrEnum):
    """Core character abilities."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


# Constant ability names in display order
ABILITY_NAMES = [ability.value for ability in Ability]


class SkillMapError(Exception):
    """Raised when the skill map data is missing or invalid."""

    pass


class UnknownSkill(Exception):
    """Raised when a skill name is not present in the skill map."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown skill: {name}")
        self.name = name


@dataclass(frozen=True)
class AbilityScores:
    """A fully populated set of six ability values.

    Used both for raw scores and for their modifiers, which share the shape.
    """

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

    def get(self, ability: Ability | str) -> int:
        """Return the value for one ability."""
        return getattr(self, Ability(ability).value)

    def replace(self, ability: Ability | str, value: int) -> "AbilityScores":
        """Return a copy with one ability set to a new value."""
        return replace(self, **{Ability(ability).value: value})

    def to_dict(self) -> dict[str, int]:
        """Convert to a plain ability-name -> value mapping."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AbilityScores":
        """
        Build a score set from a mapping that names all six abilities.

        Raises:
            ValueError: If any ability is missing or not an integer
        """
        missing = [name for name in ABILITY_NAMES if name not in data]
        if missing:
            raise ValueError(f"Missing ability scores: {', '.join(missing)}")

        values: dict[str, int] = {}
        for name in ABILITY_NAMES:
            value = data[name]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Ability score '{name}' must be an integer, got {value!r}")
            values[name] = value
        return cls(**values)


# Alias for readability where the set holds derived modifiers
AbilityModifiers = AbilityScores


@dataclass(frozen=True)
class SkillDefinition:
    """A known skill and the ability that governs it."""

    name: str
    ability: Ability


class SkillMap:
    """
    Ordered, validated collection of skill definitions.

    Lookups by name raise UnknownSkill; construction raises SkillMapError for
    duplicate names.
    """

    def __init__(self, skills: list[SkillDefinition]) -> None:
        self._skills: dict[str, SkillDefinition] = {}
        for skill in skills:
            if skill.name in self._skills:
                raise SkillMapError(f"Duplicate skill definition: {skill.name}")
            self._skills[skill.name] = skill

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __iter__(self):
        return iter(self._skills.values())

    def __len__(self) -> int:
        return len(self._skills)

    @property
    def names(self) -> list[str]:
        """Skill names in definition order."""
        return list(self._skills)

    def get(self, name: str) -> SkillDefinition:
        """Look up a skill by name."""
        try:
            return self._skills[name]
        except KeyError:
            raise UnknownSkill(name) from None

    def ability_for(self, name: str) -> Ability:
        """Return the governing ability for a skill."""
        return self.get(name).ability

    def to_dict(self) -> dict[str, str]:
        """Skill name -> ability name, as shipped on the wire."""
        return {skill.name: skill.ability.value for skill in self._skills.values()}


def parse_skill_map(data: Any, source: str = "<data>") -> SkillMap:
    """
    Validate raw skill data and build a SkillMap.

    Args:
        data: Parsed YAML content, expected to be {"skills": [{name, ability}, ...]}
        source: Where the data came from (for error messages)

    Raises:
        SkillMapError: If the data is empty or any entry is invalid
    """
    if not data or "skills" not in data:
        raise SkillMapError(f"Missing 'skills' key in {source}")

    entries = data["skills"]
    if not isinstance(entries, list) or not entries:
        raise SkillMapError(f"'skills' must be a non-empty list in {source}")

    skills = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "ability" not in entry:
            raise SkillMapError(f"Skill entry {entry!r} in {source} needs 'name' and 'ability'")
        try:
            ability = Ability(str(entry["ability"]).lower())
        except ValueError:
            raise SkillMapError(
                f"Skill '{entry['name']}' in {source} has invalid ability '{entry['ability']}' "
                f"(must be one of: {', '.join(ABILITY_NAMES)})"
            ) from None
        skills.append(SkillDefinition(name=str(entry["name"]), ability=ability))

    return SkillMap(skills)


def load_skill_map(file_path: Path) -> SkillMap:
    """
    Load and validate the skill map from a YAML file.

    Raises:
        SkillMapError: If the file cannot be read, parsed or validated
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SkillMapError(f"File not found: {file_path}") from None
    except yaml.YAMLError as e:
        raise SkillMapError(f"YAML parsing error in {file_path}: {e}") from e

    skill_map = parse_skill_map(data, str(file_path))
    logger.info("skill_map_loaded", path=str(file_path), skills=len(skill_map))
    return skill_map
