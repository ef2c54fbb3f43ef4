"""Line-level cleanup of reader-rendered markdown, plus HTML → markdown conversion."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Labels exclude brackets and targets exclude parentheses
_MARKDOWN_LINK_RE = re.compile(r"\[([^\[\]]+)\]\([^()]*\)")
_EMPHASIS_RE = re.compile(r"[*_`]")
_WHITESPACE_RE = re.compile(r"\s+")
_HEADING_MARKS_RE = re.compile(r"^#+\s*")
_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)

# Cookie/consent banners rendered above and inside the page body
_NOISE_PREFIXES: tuple[str, ...] = ("Dismiss",)

# Everything from this heading onward is user discussion
TRAILER_HEADING = "comments"


def strip_markdown_links(text: str) -> str:
    """Replace ``[label](target)`` with ``label``.

    A space is inserted before the label when the character preceding the
    link is not whitespace, so ``Skills[Perception](…)`` becomes
    ``Skills Perception``.
    """
    if not isinstance(text, str):
        return ""

    def _label(match: re.Match[str]) -> str:
        start = match.start()
        needs_space = start > 0 and not text[start - 1].isspace()
        return (" " if needs_space else "") + match.group(1)

    return _MARKDOWN_LINK_RE.sub(_label, text)


def strip_formatting(text: str) -> str:
    """Remove links, emphasis markers and redundant whitespace from *text*."""
    if not isinstance(text, str):
        return ""
    cleaned = _EMPHASIS_RE.sub("", strip_markdown_links(text))
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def is_image_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(("![", "[!["))


def is_noise_line(line: str) -> bool:
    return line.strip().startswith(_NOISE_PREFIXES)


def normalize_heading(line: str) -> str:
    """Drop leading ``#`` marks and lowercase *line* for heading comparison."""
    return _HEADING_MARKS_RE.sub("", line.strip()).strip().lower()


def preprocess_lines(text: str) -> list[str]:
    """Split *text* into lines with noise removed and the comments trailer cut.

    Lines are returned raw (links and emphasis intact); formatting is
    stripped later by whichever stage consumes them.
    """
    lines = [
        line.replace("\r", "")
        for line in text.split("\n")
        if not is_noise_line(line)
    ]
    for index, line in enumerate(lines):
        if normalize_heading(line) == TRAILER_HEADING:
            logger.debug("Dropping %d trailer lines from line %d", len(lines) - index, index)
            return lines[:index]
    return lines


def html_to_markdown(html: str) -> str:
    """Convert *html* to markdown shaped like the reader-proxy output.

    Uses markdownify with ATX heading style.  Post-processes to:
    - Remove excessive blank lines (>2 consecutive)
    - Strip trailing whitespace from lines
    """
    if not html or not html.strip():
        return ""

    try:
        from markdownify import markdownify  # type: ignore[import-untyped]

        md = markdownify(
            html,
            heading_style="ATX",
            bullets="-",
            strip=["script", "style", "nav", "header", "footer"],
        )
    except Exception as exc:
        # Graceful fallback: strip tags and return plain text
        logger.debug("markdownify failed, falling back to plain text: %s", exc)
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(html, "lxml")
        md = soup.get_text(separator="\n")

    md = _TRAILING_WHITESPACE_RE.sub("", md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()
