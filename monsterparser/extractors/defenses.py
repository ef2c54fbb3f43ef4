"""Catalog of damage types and conditions, and free-text defense list parsing."""

from __future__ import annotations

import re
from collections.abc import Iterable
from types import MappingProxyType

from monsterparser.items import DefenseOption

_DAMAGE_OPTIONS: tuple[DefenseOption, ...] = (
    DefenseOption(value="acid", label="Acid", icon="🧪", color="#7cd8a5", category="damage"),
    DefenseOption(value="bludgeoning", label="Bludgeoning", icon="🔨", color="#b3a28f", category="damage"),
    DefenseOption(value="cold", label="Cold", icon="❄️", color="#9ad0f5", category="damage"),
    DefenseOption(value="fire", label="Fire", icon="🔥", color="#ff9b6a", category="damage"),
    DefenseOption(value="force", label="Force", icon="🌀", color="#9f87ff", category="damage"),
    DefenseOption(value="lightning", label="Lightning", icon="⚡️", color="#ffd166", category="damage"),
    DefenseOption(
        value="magical-bludgeoning",
        label="Magical Bludgeoning",
        icon="🪄",
        color="#cdb4db",
        category="damage",
    ),
    DefenseOption(
        value="magical-piercing",
        label="Magical Piercing",
        icon="🪄",
        color="#c5e1a5",
        category="damage",
    ),
    DefenseOption(
        value="magical-slashing",
        label="Magical Slashing",
        icon="🪄",
        color="#bde0fe",
        category="damage",
    ),
    DefenseOption(value="necrotic", label="Necrotic", icon="💀", color="#9e7b9b", category="damage"),
    DefenseOption(value="piercing", label="Piercing", icon="🗡️", color="#d6a85f", category="damage"),
    DefenseOption(value="poison", label="Poison", icon="☠️", color="#7fc97f", category="damage"),
    DefenseOption(value="psychic", label="Psychic", icon="🧠", color="#85a6ff", category="damage"),
    DefenseOption(value="radiant", label="Radiant", icon="🌟", color="#ffd87a", category="damage"),
    DefenseOption(value="slashing", label="Slashing", icon="🗡️", color="#e0aaff", category="damage"),
    DefenseOption(value="thunder", label="Thunder", icon="🌩️", color="#7cc8ff", category="damage"),
)

_CONDITION_OPTIONS: tuple[DefenseOption, ...] = (
    DefenseOption(value="blinded", label="Blinded", icon="🙈", color="#c6b0f5", category="condition"),
    DefenseOption(value="charmed", label="Charmed", icon="💘", color="#ffafcc", category="condition"),
    DefenseOption(value="deafened", label="Deafened", icon="🔇", color="#b7c9e2", category="condition"),
    DefenseOption(value="exhaustion", label="Exhaustion", icon="😮‍💨", color="#cbb8a9", category="condition"),
    DefenseOption(value="frightened", label="Frightened", icon="😱", color="#ffb4a2", category="condition"),
    DefenseOption(value="grappled", label="Grappled", icon="🤼", color="#f2c57c", category="condition"),
    DefenseOption(
        value="incapacitated",
        label="Incapacitated",
        icon="🛌",
        color="#b8c6db",
        category="condition",
    ),
    DefenseOption(value="invisible", label="Invisible", icon="👻", color="#cad2c5", category="condition"),
    DefenseOption(value="paralyzed", label="Paralyzed", icon="🧊", color="#a3c4f3", category="condition"),
    DefenseOption(value="petrified", label="Petrified", icon="🪨", color="#c2b8a3", category="condition"),
    DefenseOption(value="poisoned", label="Poisoned", icon="☠️", color="#9be0a8", category="condition"),
    DefenseOption(value="prone", label="Prone", icon="🧎", color="#ffd6a5", category="condition"),
    DefenseOption(value="restrained", label="Restrained", icon="⛓️", color="#c5c3c6", category="condition"),
    DefenseOption(value="stunned", label="Stunned", icon="💫", color="#ffcad4", category="condition"),
    DefenseOption(value="unconscious", label="Unconscious", icon="😴", color="#cddafd", category="condition"),
)

DEFENSE_OPTIONS: tuple[DefenseOption, ...] = _DAMAGE_OPTIONS + _CONDITION_OPTIONS

DEFENSE_OPTION_LOOKUP = MappingProxyType({option.value: option for option in DEFENSE_OPTIONS})

_ENTRY_SPLIT_RE = re.compile(r"[,;/]")
_AND_SPLIT_RE = re.compile(r"\band\b", re.IGNORECASE)
_NON_LETTER_RE = re.compile(r"[^a-z]")

_DEFENSE_TAG_PREFIXES: tuple[str, ...] = ("vulnerable ", "resist ", "immune ", "condition immune ")


def _letters_only(value: str) -> str:
    return _NON_LETTER_RE.sub("", value.lower())


_OPTION_BY_KEY: dict[str, DefenseOption] = {}
for _option in DEFENSE_OPTIONS:
    _OPTION_BY_KEY.setdefault(_letters_only(_option.value), _option)
    _OPTION_BY_KEY.setdefault(_letters_only(_option.label), _option)


def parse_defense_list(raw_value: str) -> list[str]:
    """Map free text such as ``"fire, cold; poison and acid"`` to catalog values.

    Entries that match no catalog option by value or label are ignored.
    Returns unique option values in first-seen order.
    """
    if not raw_value or not isinstance(raw_value, str):
        return []

    values: list[str] = []
    for chunk in _ENTRY_SPLIT_RE.split(raw_value):
        for entry in _AND_SPLIT_RE.split(chunk):
            key = _letters_only(entry.strip())
            option = _OPTION_BY_KEY.get(key) if key else None
            if option and option.value not in values:
                values.append(option.value)
    return values


def format_defense_list(values: Iterable[str]) -> str:
    """Join the catalog labels for *values*; unknown values pass through as-is."""
    labels = [
        DEFENSE_OPTION_LOOKUP[value].label if value in DEFENSE_OPTION_LOOKUP else value
        for value in values
        if value
    ]
    return ", ".join(labels)


def is_defense_tag(tag: str) -> bool:
    return tag.lower().startswith(_DEFENSE_TAG_PREFIXES)
