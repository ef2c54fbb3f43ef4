"""Tests for display tag synthesis, deduplication and ordering."""

from __future__ import annotations

import random

import pytest

from monsterparser.extractors.tags import (
    PRIORITY_PREFIXES,
    dedupe_tags,
    display_tags,
    normalize_tag,
    prepare_tags,
    prioritize_tags,
    synthesize_tags,
    tag_parts,
)
from monsterparser.items import MonsterRecord


def _bucket(tag: str) -> int:
    for position, prefix in enumerate(PRIORITY_PREFIXES):
        if tag.upper().startswith(prefix):
            return position
    return len(PRIORITY_PREFIXES)


class TestDedupe:
    def test_case_insensitive_first_wins(self):
        assert dedupe_tags(["Resist fire", "RESIST FIRE", "resist  fire"]) == ["Resist fire"]

    def test_drops_empty_and_non_strings(self):
        assert dedupe_tags(["", "  ", None, 3, "CR 1"]) == ["CR 1"]

    def test_idempotent(self):
        tags = ["HP 7", "hp 7", "Speed 30 ft.", " Speed   30 ft. ", "CR 1/4"]
        once = dedupe_tags(tags)
        assert dedupe_tags(once) == once

    def test_normalize_tag(self):
        assert normalize_tag("  Condition   Immune\tprone ") == "Condition Immune prone"
        assert normalize_tag(None) == ""


class TestPrioritize:
    def test_bucket_order(self):
        tags = ["Speed 30 ft.", "PB +2", "CR 1", "AC 12", "Senses darkvision", "HP 7 (2d6)"]
        assert prioritize_tags(tags) == [
            "HP 7 (2d6)",
            "AC 12",
            "CR 1",
            "PB +2",
            "Speed 30 ft.",
            "Senses darkvision",
        ]

    def test_prefix_is_case_insensitive(self):
        assert prioritize_tags(["Speed 30 ft.", "hp 7"]) == ["hp 7", "Speed 30 ft."]

    def test_prefix_needs_space(self):
        assert prioritize_tags(["Speed 30 ft.", "HPX"]) == ["Speed 30 ft.", "HPX"]

    def test_stable_within_bucket(self):
        assert prioritize_tags(["Zeta", "AC 1", "Alpha", "AC 2"]) == ["AC 1", "AC 2", "Zeta", "Alpha"]

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_shuffled_synthesis_regroups(self, dire_wolf, seed):
        canonical = synthesize_tags(dire_wolf) + ["HP 40 (temporary)", "AC 16 (shield)"]
        shuffled = canonical[:]
        random.Random(seed).shuffle(shuffled)
        result = prioritize_tags(shuffled)

        buckets = [_bucket(tag) for tag in result]
        assert buckets == sorted(buckets)
        assert sorted(result) == sorted(canonical)
        for group in range(len(PRIORITY_PREFIXES) + 1):
            assert [t for t in result if _bucket(t) == group] == [
                t for t in shuffled if _bucket(t) == group
            ]

    def test_synthesized_order_is_fixed_point(self, dire_wolf):
        canonical = synthesize_tags(dire_wolf)
        assert prioritize_tags(canonical) == canonical
        assert canonical[4:] == [
            "Large Beast, Unaligned",
            "Speed 50 ft.",
            "Skills Perception +3, Stealth +4",
            "Senses Passive Perception 13",
            "Languages --",
        ]


class TestSynthesize:
    def test_dire_wolf(self, dire_wolf):
        assert dire_wolf.tags[:4] == (
            "HP 37 (5d10 + 10)",
            "AC 14 (natural armor)",
            "CR 1",
            "PB +2",
        )
        assert "Large Beast, Unaligned" in dire_wolf.tags
        assert "Skills Perception +3, Stealth +4" in dire_wolf.tags
        assert "Senses Passive Perception 13" in dire_wolf.tags

    def test_defense_prefixes(self):
        record = MonsterRecord(
            name="Mummy",
            damage_vulnerabilities="Fire",
            damage_resistances="Bludgeoning",
            damage_immunities="Necrotic, Poison",
            condition_immunities="Charmed",
        )
        assert synthesize_tags(record) == [
            "Vulnerable Fire",
            "Resist Bludgeoning",
            "Immune Necrotic, Poison",
            "Condition Immune Charmed",
        ]

    def test_empty_record_has_no_tags(self):
        assert synthesize_tags(MonsterRecord(name="Blank")) == []

    def test_zero_values_still_tagged(self):
        record = MonsterRecord(name="Shade", armor_class=0, hit_points=0)
        assert synthesize_tags(record) == ["HP 0", "AC 0"]


class TestDisplayTags:
    def test_no_op_on_synthesized_record(self, dire_wolf):
        assert display_tags(dire_wolf) == list(dire_wolf.tags)

    def test_record_method_delegates(self, dire_wolf):
        assert dire_wolf.display_tags() == list(dire_wolf.tags)

    def test_manual_tags_merged_and_sorted(self, dire_wolf):
        tags = display_tags(dire_wolf, ["Pack hunter", "cr 1"])
        assert tags[:4] == ["HP 37 (5d10 + 10)", "AC 14 (natural armor)", "cr 1", "PB +2"]
        assert "Pack hunter" in tags
        assert "CR 1" not in tags

    def test_prepare_tags(self):
        assert prepare_tags(["Speed 30 ft.", "AC 12", "ac 12"]) == ["AC 12", "Speed 30 ft."]


class TestTagParts:
    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("Large Beast, Unaligned", ("Type", "Large Beast, Unaligned")),
            ("Swarm of Tiny Beasts", ("Type", "Swarm of Tiny Beasts")),
            ("Habitat: Forest", ("Habitat", "Forest")),
            ("HP 37 (5d10 + 10)", ("HP", "37 (5d10 + 10)")),
            ("Solo", ("Solo", "Solo")),
        ],
    )
    def test_split(self, tag, expected):
        assert tag_parts(tag) == expected

    def test_blank(self):
        assert tag_parts("   ") is None
        assert tag_parts(None) is None
