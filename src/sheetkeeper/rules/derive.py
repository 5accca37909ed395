"""Derived attribute rules.

Pure functions turning authoritative inputs (ability scores, level and the two
proficiency sets) into modifiers, proficiency bonus, skill bonuses and saving
throws.
"""

from collections.abc import Collection

from .abilities import ABILITY_NAMES, Ability, AbilityModifiers, AbilityScores, SkillMap

MIN_LEVEL = 1
MAX_LEVEL = 20


def modifier(score: int) -> int:
    """Calculate the ability modifier for a score.

    Examples:
        >>> modifier(10)
        0
        >>> modifier(8)
        -1
        >>> modifier(7)
        -2
    """
    return (score - 10) // 2


def clamp_level(level: int) -> int:
    """Clamp a level into the playable range [1, 20]."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def proficiency_bonus(level: int) -> int:
    """Proficiency bonus for a level: +2 at 1-4, +3 at 5-8, up to +6 at 17-20."""
    return 2 + (clamp_level(level) - 1) // 4


def ability_modifiers(scores: AbilityScores) -> AbilityModifiers:
    """Project every ability score onto its modifier."""
    return AbilityModifiers(**{name: modifier(scores.get(name)) for name in ABILITY_NAMES})


def skill_bonus(
    skill_name: str,
    scores: AbilityScores,
    level: int,
    proficiencies: Collection[str],
    skill_map: SkillMap,
) -> int:
    """
    Bonus for one skill check.

    Args:
        skill_name: Name of a skill in the skill map
        scores: Current ability scores
        level: Character level (clamped)
        proficiencies: Names of skills the character is proficient in
        skill_map: Static skill -> ability mapping

    Returns:
        Governing ability modifier, plus the proficiency bonus if proficient
    """
    bonus = modifier(scores.get(skill_map.ability_for(skill_name)))
    if skill_name in proficiencies:
        bonus += proficiency_bonus(level)
    return bonus


def save_bonus(
    ability: Ability | str,
    scores: AbilityScores,
    level: int,
    proficiencies: Collection[str],
) -> int:
    """Bonus for a saving throw with one ability."""
    ability = Ability(ability)
    bonus = modifier(scores.get(ability))
    if ability.value in proficiencies:
        bonus += proficiency_bonus(level)
    return bonus


def skill_bonuses(
    scores: AbilityScores,
    level: int,
    proficiencies: Collection[str],
    skill_map: SkillMap,
) -> dict[str, int]:
    """Bonus for every skill in the map, keyed by skill name."""
    return {
        name: skill_bonus(name, scores, level, proficiencies, skill_map)
        for name in skill_map.names
    }


def saving_throws(
    scores: AbilityScores,
    level: int,
    proficiencies: Collection[str],
) -> dict[str, int]:
    """Saving throw bonus for every ability, keyed by ability name."""
    return {name: save_bonus(name, scores, level, proficiencies) for name in ABILITY_NAMES}


def armor_class(scores: AbilityScores) -> int:
    """Unarmored armor class: 10 + DEX modifier."""
    return 10 + modifier(scores.dexterity)


def initiative(scores: AbilityScores) -> int:
    """Initiative bonus: DEX modifier."""
    return modifier(scores.dexterity)


def max_hit_points(scores: AbilityScores, level: int) -> int:
    """Maximum hit points: 8 + CON modifier per level."""
    return 8 + modifier(scores.constitution) * clamp_level(level)
