"""monsterparser.query - turn fetched page text into a :class:`MonsterRecord`.

Nothing in this module performs I/O; pair it with
:func:`monsterparser.fetch.fetch_markdown` (or any other retrieval) to go
from URL to record.

Basic usage::

    from monsterparser.query import parse_monster

    record = parse_monster(markdown_text, "https://www.dndbeyond.com/monsters/16841-dire-wolf")
    print(record.name, record.armor_class, record.hit_points)
    print(record.tags)
    print(record.notes)

    # As a plain dict
    data = record.model_dump()

Pre-rendered HTML::

    record = parse_monster_html(html, url)
"""

from __future__ import annotations

import logging

from monsterparser.errors import EmptyContentError
from monsterparser.extractors.markdown import html_to_markdown, preprocess_lines
from monsterparser.extractors.notes import compile_notes
from monsterparser.extractors.statblock import extract_statblock
from monsterparser.extractors.tags import synthesize_tags
from monsterparser.extractors.urlnorm import normalize_source
from monsterparser.items import MonsterRecord

logger = logging.getLogger(__name__)


def parse_monster(markdown: str, source_url: str) -> MonsterRecord:
    """Parse reader-rendered *markdown* of a monster page.

    Args:
        markdown:   Page text as returned by the reader proxy.
        source_url: URL the text was fetched from; any form accepted by
                    :func:`~monsterparser.extractors.urlnorm.normalize_source`.

    Returns:
        A frozen :class:`~monsterparser.items.MonsterRecord` with ``tags``
        and ``notes`` populated.

    Raises:
        EmptyContentError:      *markdown* is blank.
        InvalidUrlError:        *source_url* cannot be parsed.
        UnsupportedSourceError: *source_url* is not a monster page.
        NameNotFoundError:      no monster name link precedes the stat block.
    """
    if not isinstance(markdown, str) or not markdown.strip():
        raise EmptyContentError(url=source_url if isinstance(source_url, str) else "")

    source = normalize_source(source_url)
    lines = preprocess_lines(markdown)
    fields = extract_statblock(lines)

    record = MonsterRecord(
        slug=source.slug,
        reference_id=source.reference_id,
        source_url=source.normalized_url,
        **fields,
    )
    record = record.model_copy(update={"tags": tuple(synthesize_tags(record))})
    record = record.model_copy(update={"notes": compile_notes(record)})

    logger.debug("Parsed %s from %s (%d tags)", record.name, record.source_url, len(record.tags))
    return record


def parse_monster_html(html: str, source_url: str) -> MonsterRecord:
    """Convert *html* to markdown and parse it with :func:`parse_monster`."""
    return parse_monster(html_to_markdown(html or ""), source_url)
