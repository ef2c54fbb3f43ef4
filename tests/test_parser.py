"""Tests for the MonsterParser class."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from monsterparser import MonsterParser
from monsterparser.errors import FetchError, NameNotFoundError
from monsterparser.items import MonsterRecord

URL = "https://www.dndbeyond.com/monsters/16841-dire-wolf"


class TestConstruction:
    def test_defaults(self):
        parser = MonsterParser()
        assert parser._reader_proxy is None
        assert parser._timeout is None
        assert parser._max_retries is None
        assert parser._user_agent is None

    def test_custom_options(self):
        parser = MonsterParser(reader_proxy="https://reader.test/", timeout=5, max_retries=1)
        assert parser._reader_proxy == "https://reader.test/"
        assert parser._timeout == 5
        assert parser._max_retries == 1

    def test_from_profile(self, tmp_path):
        profile = tmp_path / "profile.yaml"
        profile.write_text(
            "default:\n"
            "  timeout: 20\n"
            "domains:\n"
            "  dndbeyond.com:\n"
            "    reader_proxy: https://reader.test/\n"
            "    max_retries: 5\n",
            encoding="utf-8",
        )
        parser = MonsterParser.from_profile(profile, URL)
        assert parser._timeout == 20
        assert parser._reader_proxy == "https://reader.test/"
        assert parser._max_retries == 5


class TestFetch:
    def test_fetch_passes_options(self, dire_wolf_md):
        parser = MonsterParser(reader_proxy="https://reader.test/", timeout=7, user_agent="bot/2")
        with patch("monsterparser.parser._fetch_markdown", return_value=dire_wolf_md) as mock_fetch:
            record = parser.fetch(URL)
        mock_fetch.assert_called_once_with(
            URL,
            reader_proxy="https://reader.test/",
            timeout=7,
            max_retries=None,
            user_agent="bot/2",
        )
        assert isinstance(record, MonsterRecord)
        assert record.name == "Dire Wolf"

    def test_fetch_error_propagates(self):
        with patch("monsterparser.parser._fetch_markdown", side_effect=FetchError("boom", url=URL)), \
             pytest.raises(FetchError):
            MonsterParser().fetch(URL)

    def test_parse_error_propagates(self):
        with patch("monsterparser.parser._fetch_markdown", return_value="Armor Class 12"), \
             pytest.raises(NameNotFoundError):
            MonsterParser().fetch(URL)


class TestParse:
    def test_markdown_no_network(self, dire_wolf_md):
        with patch("monsterparser.parser._fetch_markdown") as mock_fetch:
            record = MonsterParser().parse(dire_wolf_md, url=URL)
        mock_fetch.assert_not_called()
        assert record.armor_class == 14

    def test_html_mode(self):
        html = (
            '<p><a href="/monsters/16841-dire-wolf">Dire Wolf</a></p>'
            "<p>Armor Class 14 (natural armor)</p>"
        )
        record = MonsterParser().parse(html, url=URL, html=True)
        assert record.name == "Dire Wolf"
        assert record.armor_notes == "natural armor"
