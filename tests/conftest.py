"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

DIRE_WOLF_URL = "https://www.dndbeyond.com/monsters/16841-dire-wolf"
ADULT_RED_DRAGON_URL = "https://www.dndbeyond.com/monsters/5194870-adult-red-dragon"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def dire_wolf_md() -> str:
    return _read_fixture("dire_wolf.md")


@pytest.fixture
def adult_red_dragon_md() -> str:
    return _read_fixture("adult_red_dragon.md")


@pytest.fixture
def dire_wolf(dire_wolf_md):
    from monsterparser.query import parse_monster

    return parse_monster(dire_wolf_md, DIRE_WOLF_URL)


@pytest.fixture
def adult_red_dragon(adult_red_dragon_md):
    from monsterparser.query import parse_monster

    return parse_monster(adult_red_dragon_md, ADULT_RED_DRAGON_URL)
