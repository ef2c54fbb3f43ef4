"""CLI entry point: python -m monsterparser --url URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from monsterparser import settings
from monsterparser.errors import FetchError, MonsterParseError
from monsterparser.items import MonsterRecord
from monsterparser.parser import MonsterParser

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_FETCH_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monsterparser",
        description=(
            "Parse a D&D Beyond monster page into a structured stat block.\n"
            "Fetches through a readability proxy unless --file is given."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", required=True, metavar="URL",
                        help="D&D Beyond monster URL (also used as the record's source)")
    parser.add_argument("--file", default=None, metavar="PATH",
                        help="Read pre-fetched page text from PATH instead of fetching")
    parser.add_argument("--html", action="store_true", default=False,
                        help="Treat --file contents as HTML and convert to markdown first")
    parser.add_argument("--profile", default=None, metavar="YAML",
                        help="YAML fetch profile (reader_proxy, timeout, max_retries, user_agent)")
    parser.add_argument("--format", choices=["summary", "json", "notes", "tags"],
                        default="summary", metavar="{summary,json,notes,tags}",
                        help="Output format (default: summary)")
    parser.add_argument("--out", default=None, metavar="PATH",
                        help="Write output to PATH instead of stdout")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    return parser


def _with_note(value: object, note: str) -> str:
    if value is None:
        return ""
    return f"{value} ({note})" if note else str(value)


def _summary_table(record: MonsterRecord) -> Table:
    tbl = Table(box=box.SIMPLE_HEAVY, show_header=False, show_lines=False)
    tbl.add_column("Field", style="bold cyan", no_wrap=True)
    tbl.add_column("Value", style="white")

    scores = record.ability_scores.model_dump()
    rows = [
        ("Type", record.type_line),
        ("Armor Class", _with_note(record.armor_class, record.armor_notes)),
        ("Hit Points", _with_note(record.hit_points, record.hit_dice)),
        ("Speed", record.speed),
        ("Abilities", "  ".join(
            f"{code.upper()} {'—' if score is None else score}" for code, score in scores.items()
        )),
        ("Saving Throws", record.saving_throws),
        ("Skills", record.skills),
        ("Vulnerabilities", record.damage_vulnerabilities),
        ("Resistances", record.damage_resistances),
        ("Immunities", record.damage_immunities),
        ("Condition Immunities", record.condition_immunities),
        ("Senses", record.senses),
        ("Languages", record.languages),
        ("Challenge", _with_note(record.challenge_rating or None, record.challenge_xp)),
        ("Proficiency Bonus", record.proficiency_bonus),
        ("Habitat", record.habitat),
        ("Source", record.source),
        ("Tags", ", ".join(record.tags)),
    ]
    for label, value in rows:
        if value:
            tbl.add_row(label, value)
    return tbl


def _render(record: MonsterRecord, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False)
    if fmt == "notes":
        return record.notes
    return "\n".join(record.tags)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    if args.html and not args.file:
        print("ERROR: --html requires --file", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if args.profile:
        monster_parser = MonsterParser.from_profile(args.profile, args.url)
    else:
        monster_parser = MonsterParser()

    try:
        if args.file:
            text = Path(args.file).read_text(encoding="utf-8")
        else:
            text = monster_parser.fetch_text(args.url)
        record = monster_parser.parse(text, args.url, html=args.html)
    except FetchError as exc:
        logger.error("Fetch failed: %s", exc)
        return EXIT_FETCH_ERROR
    except MonsterParseError as exc:
        logger.error("%s", exc)
        return EXIT_PARSE_ERROR

    if args.format == "summary" and not args.out:
        console = Console()
        console.print(
            Panel.fit(
                _summary_table(record),
                title=f"[bold]{record.name}[/bold]",
                subtitle=f"[green]{record.source_url}[/green]",
                border_style="cyan",
            ),
        )
        return EXIT_OK

    output = _render(record, "json" if args.format == "summary" else args.format)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %s to %s", record.name, out_path)
    else:
        print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
