"""Building a full character sheet from its authoritative inputs."""

from dataclasses import replace

from sheetkeeper.models.sheet import CharacterRecord, CharacterSheet, HitPoints

from .abilities import SkillMap
from .derive import (
    ability_modifiers,
    armor_class,
    clamp_level,
    initiative,
    max_hit_points,
    proficiency_bonus,
    saving_throws,
    skill_bonuses,
)


def derive_sheet(record: CharacterRecord, skill_map: SkillMap) -> CharacterSheet:
    """
    Compute every derived value for a stored character.

    Level is reported clamped to [1, 20] and current hit points are capped at
    the derived maximum.
    """
    level = clamp_level(record.level)
    scores = record.ability_scores
    max_hp = max_hit_points(scores, level)

    return CharacterSheet(
        name=record.name,
        character_class=record.character_class,
        race=record.race,
        alignment=record.alignment,
        level=level,
        proficiency_bonus=proficiency_bonus(level),
        hit_points=HitPoints(current=min(record.current_hit_points, max_hp), max=max_hp),
        armor_class=armor_class(scores),
        initiative=initiative(scores),
        ability_scores=scores,
        ability_modifiers=ability_modifiers(scores),
        saving_throws=saving_throws(scores, level, record.saving_throw_proficiencies),
        skills=skill_bonuses(scores, level, record.skill_proficiencies, skill_map),
        skill_map=skill_map.to_dict(),
        skill_proficiencies=record.skill_proficiencies,
        saving_throw_proficiencies=record.saving_throw_proficiencies,
    )


def recompute_sheet(sheet: CharacterSheet, skill_map: SkillMap) -> CharacterSheet:
    """
    Refresh the derived fields of a locally edited sheet.

    Unlike derive_sheet, current hit points are left as edited and the
    maximum is recomputed.
    """
    level = clamp_level(sheet.level)
    scores = sheet.ability_scores
    return replace(
        sheet,
        level=level,
        proficiency_bonus=proficiency_bonus(level),
        hit_points=HitPoints(current=sheet.hit_points.current, max=max_hit_points(scores, level)),
        armor_class=armor_class(scores),
        initiative=initiative(scores),
        ability_modifiers=ability_modifiers(scores),
        saving_throws=saving_throws(scores, level, sheet.saving_throw_proficiencies),
        skills=skill_bonuses(scores, level, sheet.skill_proficiencies, skill_map),
        skill_map=skill_map.to_dict(),
    )
