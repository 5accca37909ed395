"""Character sheet rules: abilities, skills, proficiencies and derived values."""

from .abilities import (
    ABILITY_NAMES,
    Ability,
    AbilityModifiers,
    AbilityScores,
    SkillDefinition,
    SkillMap,
    SkillMapError,
    UnknownSkill,
    load_skill_map,
    parse_skill_map,
)
from .derive import (
    ability_modifiers,
    clamp_level,
    modifier,
    proficiency_bonus,
    save_bonus,
    saving_throws,
    skill_bonus,
    skill_bonuses,
)
from .proficiency import ProficiencySet, toggle

__all__ = [
    "ABILITY_NAMES",
    "Ability",
    "AbilityModifiers",
    "AbilityScores",
    "ProficiencySet",
    "SkillDefinition",
    "SkillMap",
    "SkillMapError",
    "UnknownSkill",
    "ability_modifiers",
    "clamp_level",
    "load_skill_map",
    "modifier",
    "parse_skill_map",
    "proficiency_bonus",
    "save_bonus",
    "saving_throws",
    "skill_bonus",
    "skill_bonuses",
    "toggle",
]
