"""Pydantic schemas for normalized sources, parsed monsters and defense options."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

# Alias keeps the ``int`` field below from shadowing the builtin in annotations.
Score = Optional[int]

# ---------------------------------------------------------------------------
# URL normalization result
# ---------------------------------------------------------------------------

class NormalizedSource(BaseModel):
    """Canonical form of a monster page URL plus its derived identifiers."""

    model_config = {"frozen": True}

    normalized_url: str
    slug: str
    reference_id: str | None = None


# ---------------------------------------------------------------------------
# Monster record
# ---------------------------------------------------------------------------

class AbilityScores(BaseModel):
    model_config = {"frozen": True}

    str: Score = Field(default=None, ge=0)
    dex: Score = Field(default=None, ge=0)
    con: Score = Field(default=None, ge=0)
    int: Score = Field(default=None, ge=0)
    wis: Score = Field(default=None, ge=0)
    cha: Score = Field(default=None, ge=0)


class MonsterRecord(BaseModel):
    """Canonical output schema for a parsed monster stat block.

    Unknown string fields are ``""`` and unknown numbers are ``None``; no
    field is ever absent.
    """

    model_config = {"frozen": True}

    # Identity
    name: str
    slug: str = ""
    reference_id: str | None = None
    source_url: str = ""

    # Combat stats
    type_line: str = ""
    armor_class: int | None = Field(default=None, ge=0)
    armor_notes: str = ""
    hit_points: int | None = Field(default=None, ge=0)
    hit_dice: str = ""
    speed: str = ""
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)

    # Defensive / utility
    saving_throws: str = ""
    skills: str = ""
    damage_vulnerabilities: str = ""
    damage_resistances: str = ""
    damage_immunities: str = ""
    condition_immunities: str = ""
    senses: str = ""
    languages: str = ""

    # Challenge
    challenge_rating: str = ""
    challenge_xp: str = ""
    proficiency_bonus: str = ""

    # Narrative sections
    traits: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()
    bonus_actions: tuple[str, ...] = ()
    reactions: tuple[str, ...] = ()
    legendary_actions: tuple[str, ...] = ()
    mythic_actions: tuple[str, ...] = ()
    lair_actions: tuple[str, ...] = ()
    regional_effects: tuple[str, ...] = ()
    description: tuple[str, ...] = ()

    # Provenance
    habitat: str = ""
    source: str = ""

    # Derived
    tags: tuple[str, ...] = ()
    notes: str = ""

    @field_validator(
        "name",
        "type_line",
        "armor_notes",
        "hit_dice",
        "speed",
        "saving_throws",
        "skills",
        "damage_vulnerabilities",
        "damage_resistances",
        "damage_immunities",
        "condition_immunities",
        "senses",
        "languages",
        "challenge_rating",
        "challenge_xp",
        "proficiency_bonus",
        "habitat",
        "source",
        mode="before",
    )
    @classmethod
    def blank_if_missing(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    # ------------------------------------------------------------------
    # Derived views (delegate to the extractors to keep this module light)
    # ------------------------------------------------------------------

    def compile_notes(self) -> str:
        """Flatten this record into a multi-paragraph notes string.

        See :func:`monsterparser.extractors.notes.compile_notes`.
        """
        from monsterparser.extractors.notes import compile_notes
        return compile_notes(self)

    def display_tags(self, manual_tags: list[str] | None = None) -> list[str]:
        """Merge *manual_tags* with the tags synthesized from this record.

        See :func:`monsterparser.extractors.tags.display_tags`.
        """
        from monsterparser.extractors.tags import display_tags
        return display_tags(self, manual_tags)


# ---------------------------------------------------------------------------
# Defense catalog entry
# ---------------------------------------------------------------------------

class DefenseOption(BaseModel):
    """One damage type or condition a monster can be immune/resistant/vulnerable to."""

    model_config = {"frozen": True}

    value: str
    label: str
    icon: str
    color: str
    category: Literal["damage", "condition"]
