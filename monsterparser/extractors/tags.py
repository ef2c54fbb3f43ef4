"""Display tags derived from a monster record.

Tags are short strings such as ``"HP 37 (5d10 + 10)"`` or ``"Resist fire"``.
They are deduplicated case-insensitively and ordered so the vital stats
always lead:

    HP → AC → CR → PB → everything else
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from monsterparser.items import MonsterRecord

_WHITESPACE_RE = re.compile(r"\s+")

PRIORITY_PREFIXES: tuple[str, ...] = ("HP ", "AC ", "CR ", "PB ")

_SIZE_TYPE_RE = re.compile(r"^(Tiny|Small|Medium|Large|Huge|Gargantuan|Swarm of)", re.IGNORECASE)


def normalize_tag(value: Any) -> str:
    """Collapse whitespace in *value*; non-strings normalize to ``""``."""
    if not isinstance(value, str):
        return ""
    return _WHITESPACE_RE.sub(" ", value).strip()


def dedupe_tags(tags: Iterable[Any]) -> list[str]:
    """Drop empty and case-insensitively repeated tags, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        normalized = normalize_tag(tag)
        key = normalized.lower()
        if not normalized or key in seen:
            continue
        seen.add(key)
        result.append(normalized)
    return result


def prioritize_tags(tags: Iterable[str]) -> list[str]:
    """Stable-sort *tags* into the HP, AC, CR, PB, other buckets."""
    buckets: list[list[str]] = [[] for _ in range(len(PRIORITY_PREFIXES) + 1)]
    for tag in tags:
        upper = str(tag).upper()
        for position, prefix in enumerate(PRIORITY_PREFIXES):
            if upper.startswith(prefix):
                buckets[position].append(str(tag))
                break
        else:
            buckets[-1].append(str(tag))
    return [tag for bucket in buckets for tag in bucket]


def prepare_tags(tags: Iterable[Any]) -> list[str]:
    """Dedupe then prioritize *tags* for display."""
    return prioritize_tags(dedupe_tags(tags))


def _with_note(value: Any, note: str) -> str:
    return f"{value} ({note})" if note else str(value)


def synthesize_tags(record: MonsterRecord) -> list[str]:
    """Build the display tags for every populated field of *record*."""
    candidates: list[str] = []

    if record.hit_points is not None:
        candidates.append(f"HP {_with_note(record.hit_points, record.hit_dice)}")
    if record.armor_class is not None:
        candidates.append(f"AC {_with_note(record.armor_class, record.armor_notes)}")
    if record.challenge_rating:
        candidates.append(f"CR {record.challenge_rating}")
    if record.proficiency_bonus:
        candidates.append(f"PB {record.proficiency_bonus}")

    candidates.append(record.type_line)

    prefixed = (
        ("Speed", record.speed),
        ("Saves", record.saving_throws),
        ("Skills", record.skills),
        ("Vulnerable", record.damage_vulnerabilities),
        ("Resist", record.damage_resistances),
        ("Immune", record.damage_immunities),
        ("Condition Immune", record.condition_immunities),
        ("Senses", record.senses),
        ("Languages", record.languages),
    )
    candidates.extend(f"{prefix} {value}" for prefix, value in prefixed if value)

    return prepare_tags(candidates)


def display_tags(record: MonsterRecord, manual_tags: Iterable[Any] | None = None) -> list[str]:
    """Merge user-entered *manual_tags* (or the record's own tags) with synthesized ones.

    Running this on a record whose ``tags`` were produced by
    :func:`synthesize_tags` returns those tags unchanged.
    """
    manual = list(record.tags if manual_tags is None else manual_tags)
    return prepare_tags([*manual, *synthesize_tags(record)])


def tag_parts(tag: Any) -> tuple[str, str] | None:
    """Split a display tag into ``(title, value)`` for compact chips.

    Example:
        "Large Beast, Unaligned" → ("Type", "Large Beast, Unaligned")
        "Habitat: Forest"        → ("Habitat", "Forest")
        "HP 37"                  → ("HP", "37")
    """
    if not isinstance(tag, str) or not tag.strip():
        return None
    normalized = tag.strip()

    if _SIZE_TYPE_RE.match(normalized):
        return "Type", normalized

    for separator in (":", " "):
        title, found, value = normalized.partition(separator)
        if found and title.strip() and value.strip():
            return title.strip(), value.strip()

    return normalized, normalized
