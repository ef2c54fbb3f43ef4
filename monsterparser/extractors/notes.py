"""Render a monster record as a flat, human-readable notes string."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monsterparser.items import MonsterRecord

# (record field, printed label) for the labelled narrative blocks
NOTE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("traits", "Traits"),
    ("actions", "Actions"),
    ("bonus_actions", "Bonus Actions"),
    ("reactions", "Reactions"),
    ("legendary_actions", "Legendary Actions"),
    ("mythic_actions", "Mythic Actions"),
    ("lair_actions", "Lair Actions"),
    ("regional_effects", "Regional Effects"),
    ("description", "Description"),
)

SOURCE_URL_LABEL = "D&D Beyond"


def _defense_line(record: MonsterRecord) -> str:
    parts: list[str] = []
    if record.armor_class is not None:
        note = f" ({record.armor_notes})" if record.armor_notes else ""
        parts.append(f"AC {record.armor_class}{note}")
    if record.hit_points is not None:
        note = f" ({record.hit_dice})" if record.hit_dice else ""
        parts.append(f"HP {record.hit_points}{note}")
    return " • ".join(parts)


def compile_notes(record: MonsterRecord) -> str:
    """Flatten *record* into newline-separated blocks.

    Order: type line, AC/HP, speed, defenses, senses, languages, challenge,
    proficiency bonus, narrative sections, source, source URL.  Empty fields
    contribute nothing.
    """
    challenge = ""
    if record.challenge_rating:
        challenge = f"Challenge {record.challenge_rating}"
        if record.challenge_xp:
            challenge += f" ({record.challenge_xp})"

    parts = [
        record.type_line,
        _defense_line(record),
        f"Speed {record.speed}" if record.speed else "",
        f"Saving Throws: {record.saving_throws}" if record.saving_throws else "",
        f"Skills: {record.skills}" if record.skills else "",
        f"Vulnerabilities: {record.damage_vulnerabilities}" if record.damage_vulnerabilities else "",
        f"Resistances: {record.damage_resistances}" if record.damage_resistances else "",
        f"Immunities: {record.damage_immunities}" if record.damage_immunities else "",
        f"Condition Immunities: {record.condition_immunities}" if record.condition_immunities else "",
        f"Senses: {record.senses}" if record.senses else "",
        f"Languages: {record.languages}" if record.languages else "",
        challenge,
        f"Proficiency Bonus {record.proficiency_bonus}" if record.proficiency_bonus else "",
    ]

    for field, label in NOTE_SECTIONS:
        paragraphs = getattr(record, field)
        if paragraphs:
            parts.append(f"{label}:\n" + "\n".join(paragraphs))

    if record.source:
        parts.append(f"Source: {record.source}")
    if record.source_url:
        parts.append(f"{SOURCE_URL_LABEL}: {record.source_url}")

    return "\n".join(part for part in parts if part)
