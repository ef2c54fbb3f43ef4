"""Tests for the flattened notes renderer."""

from __future__ import annotations

from monsterparser.extractors.notes import compile_notes
from monsterparser.items import AbilityScores, MonsterRecord


class TestCompileNotes:
    def test_dire_wolf(self, dire_wolf):
        lines = dire_wolf.notes.split("\n")
        assert lines[0] == "Large Beast, Unaligned"
        assert lines[1] == "AC 14 (natural armor) • HP 37 (5d10 + 10)"
        assert lines[2] == "Speed 50 ft."
        assert "Skills: Perception +3, Stealth +4" in lines
        assert "Challenge 1 (200 XP)" in lines
        assert "Proficiency Bonus +2" in lines
        assert "Traits:" in lines
        assert lines[-2] == "Source: Basic Rules (2014), pg. 123"
        assert lines[-1] == "D&D Beyond: https://www.dndbeyond.com/monsters/16841-dire-wolf"

    def test_notes_match_method(self, dire_wolf):
        assert dire_wolf.compile_notes() == dire_wolf.notes

    def test_section_blocks(self):
        record = MonsterRecord(
            name="Goblin",
            actions=("Scimitar. Melee.", "Shortbow. Ranged."),
            reactions=("Parry.",),
        )
        assert compile_notes(record) == (
            "Actions:\nScimitar. Melee.\nShortbow. Ranged.\nReactions:\nParry."
        )

    def test_order_of_stat_lines(self):
        record = MonsterRecord(
            name="Guard",
            type_line="Medium Humanoid",
            armor_class=16,
            hit_points=11,
            saving_throws="Str +3",
            damage_resistances="Cold",
            condition_immunities="Charmed",
            languages="Common",
            challenge_rating="1/8",
            source="Basic Rules",
        )
        assert compile_notes(record).split("\n") == [
            "Medium Humanoid",
            "AC 16 • HP 11",
            "Saving Throws: Str +3",
            "Resistances: Cold",
            "Condition Immunities: Charmed",
            "Languages: Common",
            "Challenge 1/8",
            "Source: Basic Rules",
        ]

    def test_habitat_and_scores_not_rendered(self):
        record = MonsterRecord(
            name="Wolf",
            habitat="Forest",
            ability_scores=AbilityScores(str=12),
        )
        assert compile_notes(record) == ""

    def test_hit_points_alone(self):
        assert compile_notes(MonsterRecord(name="Rat", hit_points=1, hit_dice="1d4 - 1")) == (
            "HP 1 (1d4 - 1)"
        )
