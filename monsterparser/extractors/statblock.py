"""Label-driven extraction of stat-block fields from reader-rendered markdown.

The stat block is every line between the monster's name link and the first
narrative heading.  Fields are located by their printed label rather than by
position, trying each field's accepted labels in priority order:

    Armor Class → AC,  Hit Points → HP,  Challenge → CR, …

Missing or unparsable fields degrade to ``""`` / ``None``; only a missing
name aborts extraction.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from monsterparser import settings
from monsterparser.errors import NameNotFoundError
from monsterparser.extractors.markdown import is_image_line, strip_formatting
from monsterparser.extractors.sections import first_heading_index, segment
from monsterparser.items import AbilityScores

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

# (field, accepted labels in priority order)
FIELD_LABELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("armor_class", ("Armor Class", "AC")),
    ("hit_points", ("Hit Points", "HP")),
    ("speed", ("Speed",)),
    ("saving_throws", ("Saving Throws", "Saves")),
    ("skills", ("Skills",)),
    ("damage_vulnerabilities", ("Damage Vulnerabilities", "Vulnerabilities")),
    ("damage_resistances", ("Damage Resistances", "Resistances")),
    ("damage_immunities", ("Damage Immunities",)),
    ("condition_immunities", ("Condition Immunities",)),
    ("immunities", ("Immunities",)),
    ("senses", ("Senses",)),
    ("languages", ("Languages",)),
    ("challenge", ("Challenge", "CR")),
    ("proficiency_bonus", ("Proficiency Bonus", "PB")),
)

_LABELS_BY_FIELD: dict[str, tuple[str, ...]] = {
    field: tuple(label.lower() for label in labels) for field, labels in FIELD_LABELS
}
_ALL_LABELS: frozenset[str] = frozenset(
    label for labels in _LABELS_BY_FIELD.values() for label in labels
)

ABILITY_CODES: tuple[str, ...] = ("STR", "DEX", "CON", "INT", "WIS", "CHA")

# Table header cells that are never a score
_ABILITY_CELL_LABELS: frozenset[str] = frozenset(ABILITY_CODES) | {"MOD", "SAVE", "SCORE"}

DAMAGE_TYPES: frozenset[str] = frozenset(
    {
        "acid",
        "bludgeoning",
        "cold",
        "fire",
        "force",
        "lightning",
        "necrotic",
        "piercing",
        "poison",
        "psychic",
        "radiant",
        "slashing",
        "thunder",
    },
)

# Link labels pointing at monster pages that are not the monster's name
NAV_ARTIFACTS: frozenset[str] = frozenset({"skip to content", "monsters", "back to monsters"})

_DAMAGE_TYPE_RE = re.compile(r"\b(?:" + "|".join(sorted(DAMAGE_TYPES)) + r")\b", re.IGNORECASE)
_MONSTER_LINK_RE = re.compile(
    r"\[([^\[\]]+)\]\("
    r"(?:(?:https?:)?//(?:[\w-]+\.)*" + re.escape(settings.VENDOR_DOMAIN) + r")?"
    r"/" + re.escape(settings.MONSTER_PATH_SEGMENT) + r"/[^()]*\)",
    re.IGNORECASE,
)
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")
_NUMBER_WITH_NOTE_RE = re.compile(r"^(\d+)(?:\s*\(([^)]*)\))?$")
# Rating ends at the first "("
_CHALLENGE_RE = re.compile(r"^([^(]*?)\s*\((.*)\)$")
_CHALLENGE_PART_SPLIT_RE = re.compile(r"[;•]")
_XP_RE = re.compile(r"^(?:xp\s*(\d[\d,]*)|(\d[\d,]*)\s*xp)\b", re.IGNORECASE)
_PB_RE = re.compile(r"^pb\s*([+\-−]?\s*\d+)", re.IGNORECASE)
_SIGNED_RE = re.compile(r"^([+-])?\s*(\d+)$")
_PAGE_RE = re.compile(r"\b(?:pg\.?|page)\s*\d+", re.IGNORECASE)
_YEAR_RE = re.compile(r"\(\d{4}\)")
_TABLE_SEPARATOR_RE = re.compile(r"^:?-+:?$")

_HABITAT_PREFIX = "habitat:"
_SOURCE_PREFIX = "source:"

# Attribution lines are short; longer lines are narrative prose
_MAX_SOURCE_LINE_LENGTH = 120


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def parse_int(value: Any) -> int | None:
    """Parse a leading base-10 integer from *value*; None when there is none."""
    match = _LEADING_INT_RE.match(str(value or ""))
    return int(match.group(1), 10) if match else None


def parse_number_with_note(value: str) -> tuple[int | None, str]:
    """Split ``"14 (natural armor)"`` into ``(14, "natural armor")``.

    Values that are not ``digits(parenthetical)`` keep the whole text as the
    note and fall back to a leading-integer parse.
    """
    value = value.strip()
    match = _NUMBER_WITH_NOTE_RE.match(value)
    if match:
        return parse_int(match.group(1)), (match.group(2) or "").strip()
    return parse_int(value), value


def signed_bonus(value: str) -> str:
    """Return *value* with an explicit sign (``"2"`` → ``"+2"``)."""
    cleaned = value.strip().replace("−", "-")
    match = _SIGNED_RE.match(cleaned)
    if not match:
        return value.strip()
    return f"{match.group(1) or '+'}{match.group(2)}"


def parse_challenge(value: str) -> tuple[str, str, str]:
    """Split a challenge value into ``(rating, xp, proficiency_bonus)``.

    Handles both ``"1 (200 XP)"`` and ``"1 (XP 200; PB +2)"``; XP is always
    reported as ``"<number> XP"``.
    """
    value = value.strip()
    match = _CHALLENGE_RE.match(value)
    if not match:
        return value, "", ""

    rating, extra = match.group(1).strip(), match.group(2)
    xp = bonus = ""
    for part in _CHALLENGE_PART_SPLIT_RE.split(extra):
        part = part.strip()
        xp_match = _XP_RE.match(part)
        if xp_match and not xp:
            xp = f"{xp_match.group(1) or xp_match.group(2)} XP"
            continue
        pb_match = _PB_RE.match(part)
        if pb_match and not bonus:
            bonus = signed_bonus(pb_match.group(1))
    return rating, xp, bonus


def classify_immunities(general: str, damage: str, condition: str) -> tuple[str, str]:
    """Route an unqualified ``Immunities`` value to damage or condition immunities.

    Text naming any damage type goes to damage immunities, anything else to
    condition immunities.  Either target keeps its value when already filled
    from its own labelled line.

    Returns:
        ``(damage_immunities, condition_immunities)``
    """
    if not general:
        return damage, condition
    if _DAMAGE_TYPE_RE.search(general):
        if not damage:
            logger.debug("Immunities %r routed to damage immunities", general)
            return general, condition
    elif not condition:
        logger.debug("Immunities %r routed to condition immunities", general)
        return damage, general
    return damage, condition


# ---------------------------------------------------------------------------
# Label index
# ---------------------------------------------------------------------------

def _match_label(line: str) -> tuple[str, str] | None:
    """Return ``(label, remainder)`` when *line* starts with a known label."""
    lowered = line.lower()
    for label in _ALL_LABELS:
        if lowered == label:
            return label, ""
        if lowered.startswith(label + " "):
            return label, line[len(label):].strip()
    return None


def _is_label_line(line: str) -> bool:
    return _match_label(line) is not None


class LineIndex:
    """Label → raw value lookup over cleaned stat-block lines.

    Built once per parse.  The first line carrying a label wins.  A line that
    holds only its label takes its value from the next non-empty line, unless
    that line is itself labelled.
    """

    def __init__(self, lines: list[str]) -> None:
        self._values: dict[str, str] = {}
        for position, line in enumerate(lines):
            lowered = line.lower()
            for label in _ALL_LABELS:
                if label in self._values:
                    continue
                if lowered == label:
                    self._values[label] = self._continuation(lines, position)
                elif lowered.startswith(label + " "):
                    self._values[label] = line[len(label):].strip()

    @staticmethod
    def _continuation(lines: list[str], position: int) -> str:
        for line in lines[position + 1:]:
            if not line:
                continue
            return "" if _is_label_line(line) else line
        return ""

    def get(self, field: str) -> str:
        """Return the value for *field*, trying its labels in priority order."""
        for label in _LABELS_BY_FIELD[field]:
            value = self._values.get(label)
            if value:
                logger.debug("Field %s matched label %r", field, label)
                return value
        return ""


# ---------------------------------------------------------------------------
# Ability scores
# ---------------------------------------------------------------------------

def _split_cells(line: str) -> list[str] | None:
    if "|" not in line:
        return None
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def _is_separator_row(cells: list[str]) -> bool:
    return all(not cell or _TABLE_SEPARATOR_RE.match(cell) for cell in cells)


def _table_score(lines: list[str], index: int, cells: list[str], column: int) -> int | None:
    for cell in cells[column + 1:]:
        if not cell:
            continue
        if cell.upper() in _ABILITY_CELL_LABELS:
            break
        return parse_int(cell)

    # Header row: the score sits in the same column of the next data row
    for line in lines[index + 1:]:
        row = _split_cells(line)
        if row is None:
            return None
        if _is_separator_row(row):
            continue
        return parse_int(row[column]) if column < len(row) else None
    return None


def _stacked_score(lines: list[str], index: int, remainder: str) -> int | None:
    if remainder:
        return parse_int(remainder)
    for line in lines[index + 1:]:
        if not line:
            continue
        if line.upper() in _ABILITY_CELL_LABELS:
            return None
        return parse_int(line)
    return None


def _ability_score(lines: list[str], code: str) -> int | None:
    for index, line in enumerate(lines):
        cells = _split_cells(line)
        if cells is not None:
            upper_cells = [cell.upper() for cell in cells]
            if code in upper_cells:
                score = _table_score(lines, index, cells, upper_cells.index(code))
                if score is not None:
                    return score
            continue

        upper = line.upper()
        if upper == code or upper.startswith(code + " "):
            score = _stacked_score(lines, index, line[len(code):].strip())
            if score is not None:
                return score
    return None


def extract_ability_scores(lines: list[str]) -> AbilityScores:
    """Read the six ability scores from table, stacked or inline layouts."""
    return AbilityScores(**{code.lower(): _ability_score(lines, code) for code in ABILITY_CODES})


# ---------------------------------------------------------------------------
# Name, type line, provenance
# ---------------------------------------------------------------------------

def find_name(lines: list[str], limit: int) -> tuple[str, int]:
    """Return ``(name, line_index)`` from the first monster link before *limit*.

    Raises:
        NameNotFoundError: no usable monster link precedes *limit*.
    """
    for index, line in enumerate(lines[:limit]):
        if is_image_line(line):
            continue
        for match in _MONSTER_LINK_RE.finditer(line):
            candidate = strip_formatting(match.group(1))
            if not candidate:
                continue
            if candidate.lower() in NAV_ARTIFACTS:
                logger.debug("Skipping navigation link %r on line %d", candidate, index)
                continue
            return candidate, index
    raise NameNotFoundError()


def find_type_line(cleaned: list[str]) -> str:
    """First non-empty line after the name, unless it is already a stat line."""
    for line in cleaned:
        if not line:
            continue
        if _is_label_line(line) or line.upper() in _ABILITY_CELL_LABELS:
            return ""
        return line
    return ""


def find_provenance(cleaned: list[str]) -> tuple[str, str]:
    """Return ``(habitat, source)`` from the lines following the name.

    ``Habitat:`` / ``Source:`` prefixes are matched case-insensitively.  A
    source may also be any short non-habitat line citing a page number or a
    parenthesised year; the first such line in document order wins.
    """
    habitat = source = ""
    for line in cleaned:
        lowered = line.lower()
        if lowered.startswith(_HABITAT_PREFIX):
            habitat = habitat or line[len(_HABITAT_PREFIX):].strip()
        elif not source:
            if lowered.startswith(_SOURCE_PREFIX):
                source = line[len(_SOURCE_PREFIX):].strip()
            elif len(line) <= _MAX_SOURCE_LINE_LENGTH and (
                _PAGE_RE.search(line) or _YEAR_RE.search(line)
            ):
                source = line
        if habitat and source:
            break
    return habitat, source


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def extract_statblock(lines: list[str]) -> dict[str, Any]:
    """Extract every stat-block field and narrative section from *lines*.

    *lines* are preprocessed page lines (see
    :func:`monsterparser.extractors.markdown.preprocess_lines`).

    Returns:
        A dict keyed by :class:`~monsterparser.items.MonsterRecord` field
        names, covering everything except identity, ``tags`` and ``notes``.

    Raises:
        NameNotFoundError: no monster link line precedes the first heading.
    """
    block_end = first_heading_index(lines)
    name, name_index = find_name(lines, block_end)

    def _clean(raw: list[str]) -> list[str]:
        return ["" if is_image_line(line) else strip_formatting(line) for line in raw]

    block = _clean(lines[name_index + 1:block_end])
    index = LineIndex(block)

    armor_class, armor_notes = parse_number_with_note(index.get("armor_class"))
    hit_points, hit_dice = parse_number_with_note(index.get("hit_points"))
    challenge_rating, challenge_xp, challenge_bonus = parse_challenge(index.get("challenge"))

    labelled_bonus = index.get("proficiency_bonus")
    proficiency_bonus = signed_bonus(labelled_bonus) if labelled_bonus else challenge_bonus

    damage_immunities, condition_immunities = classify_immunities(
        index.get("immunities"),
        index.get("damage_immunities"),
        index.get("condition_immunities"),
    )

    habitat, source = find_provenance(_clean(lines[name_index + 1:]))

    fields: dict[str, Any] = {
        "name": name,
        "type_line": find_type_line(block),
        "armor_class": armor_class,
        "armor_notes": armor_notes,
        "hit_points": hit_points,
        "hit_dice": hit_dice,
        "speed": index.get("speed"),
        "ability_scores": extract_ability_scores(block),
        "saving_throws": index.get("saving_throws"),
        "skills": index.get("skills"),
        "damage_vulnerabilities": index.get("damage_vulnerabilities"),
        "damage_resistances": index.get("damage_resistances"),
        "damage_immunities": damage_immunities,
        "condition_immunities": condition_immunities,
        "senses": index.get("senses"),
        "languages": index.get("languages"),
        "challenge_rating": challenge_rating,
        "challenge_xp": challenge_xp,
        "proficiency_bonus": proficiency_bonus,
        "habitat": habitat,
        "source": source,
    }
    fields.update(segment(lines))

    logger.debug(
        "Extracted %r: AC=%s HP=%s CR=%s",
        name,
        armor_class,
        hit_points,
        challenge_rating or "?",
    )
    return fields
