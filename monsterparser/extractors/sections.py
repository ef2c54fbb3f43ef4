"""Split a monster page into its narrative sections (Traits, Actions, …)."""

from __future__ import annotations

import logging
from itertools import groupby
from types import MappingProxyType
from typing import Mapping

from monsterparser.extractors.markdown import (
    is_image_line,
    normalize_heading,
    strip_formatting,
)

logger = logging.getLogger(__name__)

# (record field, heading label) in page order
SECTION_DEFINITIONS: tuple[tuple[str, str], ...] = (
    ("traits", "traits"),
    ("actions", "actions"),
    ("bonus_actions", "bonus actions"),
    ("reactions", "reactions"),
    ("legendary_actions", "legendary actions"),
    ("mythic_actions", "mythic actions"),
    ("lair_actions", "lair actions"),
    ("regional_effects", "regional effects"),
    ("description", "description"),
)

SECTION_KEYS: tuple[str, ...] = tuple(key for key, _ in SECTION_DEFINITIONS)

SECTION_LABELS: dict[str, str] = {label: key for key, label in SECTION_DEFINITIONS}


def heading_key(line: str) -> str | None:
    """Return the section key if *line* is a recognised heading, else None."""
    return SECTION_LABELS.get(normalize_heading(line))


def find_headings(lines: list[str]) -> list[tuple[int, str]]:
    """Return ``(line_index, section_key)`` for every heading, in line order."""
    found: list[tuple[int, str]] = []
    for index, line in enumerate(lines):
        key = heading_key(line)
        if key is not None:
            found.append((index, key))
    return sorted(found)


def first_heading_index(lines: list[str]) -> int:
    """Index of the first section heading, or ``len(lines)`` if there is none."""
    headings = find_headings(lines)
    return headings[0][0] if headings else len(lines)


def _paragraphs(run: list[str]) -> tuple[str, ...]:
    """Group a heading's content lines into paragraphs split on blank lines."""
    paragraphs = []
    for is_blank, group in groupby(run, key=lambda line: not line.strip()):
        if is_blank:
            continue
        parts = [strip_formatting(line) for line in group if not is_image_line(line)]
        paragraph = strip_formatting(" ".join(p for p in parts if p))
        if paragraph:
            paragraphs.append(paragraph)
    return tuple(paragraphs)


def segment(lines: list[str]) -> Mapping[str, tuple[str, ...]]:
    """Split *lines* into a read-only ``{section_key: paragraphs}`` mapping.

    Every key in :data:`SECTION_KEYS` is present; sections whose heading is
    absent map to an empty tuple.  A heading's run extends to the next
    heading or the end of input.  A heading that repeats appends its
    paragraphs to the earlier occurrence.
    """
    headings = find_headings(lines)
    bounds = [index for index, _ in headings[1:]] + [len(lines)]

    sections: dict[str, tuple[str, ...]] = {key: () for key in SECTION_KEYS}
    for (start, key), end in zip(headings, bounds):
        sections[key] = sections[key] + _paragraphs(lines[start + 1:end])

    logger.debug(
        "Segmented %d headings: %s",
        len(headings),
        ", ".join(f"{key}={len(paras)}" for key, paras in sections.items() if paras),
    )
    return MappingProxyType(sections)
