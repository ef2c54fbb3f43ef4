"""monsterparser - turn D&D Beyond monster pages into structured records.

Quick single-URL usage::

    from monsterparser import MonsterParser

    record = MonsterParser().fetch("https://www.dndbeyond.com/monsters/16841-dire-wolf")
    print(record.name, record.armor_class, record.hit_points)
    print(record.tags)

Pre-fetched text (no network)::

    from monsterparser import parse_monster

    record = parse_monster(markdown_text, "https://www.dndbeyond.com/monsters/16841-dire-wolf")
    print(record.notes)

Defense lists::

    from monsterparser import parse_defense_list, format_defense_list

    values = parse_defense_list(record.damage_resistances)
    print(format_defense_list(values))
"""

from monsterparser.errors import (
    EmptyContentError,
    FetchError,
    InvalidUrlError,
    MonsterParseError,
    NameNotFoundError,
    UnsupportedSourceError,
)
from monsterparser.extractors.defenses import (
    DEFENSE_OPTIONS,
    format_defense_list,
    is_defense_tag,
    parse_defense_list,
)
from monsterparser.extractors.notes import compile_notes
from monsterparser.extractors.tags import display_tags, prepare_tags, synthesize_tags
from monsterparser.extractors.urlnorm import normalize_source
from monsterparser.fetch import fetch_markdown
from monsterparser.items import AbilityScores, DefenseOption, MonsterRecord, NormalizedSource
from monsterparser.parser import MonsterParser
from monsterparser.query import parse_monster, parse_monster_html

__version__ = "0.1.0"
__all__ = [
    "DEFENSE_OPTIONS",
    "AbilityScores",
    "DefenseOption",
    "EmptyContentError",
    "FetchError",
    "InvalidUrlError",
    "MonsterParseError",
    "MonsterParser",
    "MonsterRecord",
    "NameNotFoundError",
    "NormalizedSource",
    "UnsupportedSourceError",
    "compile_notes",
    "display_tags",
    "fetch_markdown",
    "format_defense_list",
    "is_defense_tag",
    "normalize_source",
    "parse_defense_list",
    "parse_monster",
    "parse_monster_html",
    "prepare_tags",
    "synthesize_tags",
]
