"""Tests for abilities, score sets and skill map loading."""

import pytest

from sheetkeeper.rules import (
    ABILITY_NAMES,
    Ability,
    AbilityScores,
    SkillMapError,
    UnknownSkill,
    load_skill_map,
    parse_skill_map,
)


class TestAbilityScores:
    """Tests for the six-score record."""

    def test_ability_order(self) -> None:
        """Abilities are declared in display order."""
        assert ABILITY_NAMES == [
            "strength",
            "dexterity",
            "constitution",
            "intelligence",
            "wisdom",
            "charisma",
        ]

    def test_get_and_replace(self) -> None:
        """replace returns a new set and leaves the original untouched."""
        original = AbilityScores(10, 12, 14, 8, 13, 15)
        updated = original.replace(Ability.DEXTERITY, 18)
        assert updated.get("dexterity") == 18
        assert original.dexterity == 12
        assert updated.charisma == 15

    def test_from_dict_requires_all_six(self) -> None:
        """Partial ability sets are rejected."""
        with pytest.raises(ValueError, match="wisdom"):
            AbilityScores.from_dict(
                {
                    "strength": 10,
                    "dexterity": 10,
                    "constitution": 10,
                    "intelligence": 10,
                    "charisma": 10,
                }
            )

    def test_from_dict_rejects_non_integers(self) -> None:
        """Scores must be integers."""
        data = dict.fromkeys(ABILITY_NAMES, 10)
        data["strength"] = "ten"
        with pytest.raises(ValueError, match="strength"):
            AbilityScores.from_dict(data)

    def test_dict_round_trip(self) -> None:
        """to_dict and from_dict agree."""
        original = AbilityScores(3, 4, 5, 6, 7, 8)
        assert AbilityScores.from_dict(original.to_dict()) == original


class TestSkillMap:
    """Tests for skill map validation and lookup."""

    def test_packaged_map_has_eighteen_skills(self, skill_map) -> None:
        """The packaged data defines the 18 standard skills."""
        assert len(skill_map) == 18
        assert skill_map.ability_for("Stealth") is Ability.DEXTERITY
        assert skill_map.ability_for("Athletics") is Ability.STRENGTH

    def test_unknown_skill_lookup(self, skill_map) -> None:
        """Lookups of unknown names raise UnknownSkill."""
        with pytest.raises(UnknownSkill):
            skill_map.ability_for("Basket Weaving")

    def test_invalid_ability_fails_fast(self) -> None:
        """A skill naming an unknown ability fails at load time."""
        data = {"skills": [{"name": "Stealth", "ability": "agility"}]}
        with pytest.raises(SkillMapError, match="agility"):
            parse_skill_map(data)

    def test_duplicate_skill_fails(self) -> None:
        """Duplicate skill names are a configuration error."""
        data = {
            "skills": [
                {"name": "Stealth", "ability": "dexterity"},
                {"name": "Stealth", "ability": "wisdom"},
            ]
        }
        with pytest.raises(SkillMapError, match="Duplicate"):
            parse_skill_map(data)

    def test_missing_fields_fail(self) -> None:
        """Entries need both name and ability."""
        with pytest.raises(SkillMapError):
            parse_skill_map({"skills": [{"name": "Stealth"}]})

    def test_empty_data_fails(self) -> None:
        """Empty files are rejected."""
        with pytest.raises(SkillMapError):
            parse_skill_map(None)
        with pytest.raises(SkillMapError):
            parse_skill_map({"skills": []})

    def test_ability_names_case_insensitive(self) -> None:
        """Ability names in YAML may be capitalized."""
        skill_map = parse_skill_map({"skills": [{"name": "Arcana", "ability": "Intelligence"}]})
        assert skill_map.ability_for("Arcana") is Ability.INTELLIGENCE

    def test_load_missing_file(self, tmp_path) -> None:
        """A missing file is reported as SkillMapError."""
        with pytest.raises(SkillMapError, match="not found"):
            load_skill_map(tmp_path / "nope.yaml")

    def test_load_bad_yaml(self, tmp_path) -> None:
        """Unparseable YAML is reported as SkillMapError."""
        path = tmp_path / "skills.yaml"
        path.write_text("skills: [unclosed", encoding="utf-8")
        with pytest.raises(SkillMapError, match="YAML"):
            load_skill_map(path)

    def test_to_dict(self, skill_map) -> None:
        """The wire form maps skill name to ability name."""
        as_dict = skill_map.to_dict()
        assert as_dict["Sleight of Hand"] == "dexterity"
        assert as_dict["Persuasion"] == "charisma"
