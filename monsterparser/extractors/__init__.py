"""Extraction sub-package: deterministic, label-driven stat-block extraction."""

from .defenses import DEFENSE_OPTIONS, format_defense_list, parse_defense_list
from .markdown import html_to_markdown, preprocess_lines, strip_formatting
from .notes import compile_notes
from .sections import segment
from .statblock import extract_statblock
from .tags import dedupe_tags, display_tags, prioritize_tags, synthesize_tags
from .urlnorm import normalize_source

__all__ = [
    "DEFENSE_OPTIONS",
    "compile_notes",
    "dedupe_tags",
    "display_tags",
    "extract_statblock",
    "format_defense_list",
    "html_to_markdown",
    "normalize_source",
    "parse_defense_list",
    "preprocess_lines",
    "prioritize_tags",
    "segment",
    "strip_formatting",
    "synthesize_tags",
]
