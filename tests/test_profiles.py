"""Tests for YAML fetch profiles."""

from __future__ import annotations

import logging

from monsterparser.profiles import load_profile

URL = "https://www.dndbeyond.com/monsters/16841-dire-wolf"


def _write(tmp_path, text: str):
    path = tmp_path / "profile.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadProfile:
    def test_default_only(self, tmp_path):
        path = _write(tmp_path, "default:\n  timeout: 12\n")
        assert load_profile(path, URL) == {"timeout": 12}

    def test_domain_overrides_default(self, tmp_path):
        path = _write(
            tmp_path,
            "default:\n  timeout: 12\n  max_retries: 1\n"
            "domains:\n  dndbeyond.com:\n    max_retries: 4\n",
        )
        assert load_profile(path, URL) == {"timeout": 12, "max_retries": 4}

    def test_longest_domain_wins(self, tmp_path):
        path = _write(
            tmp_path,
            "domains:\n"
            "  dndbeyond.com:\n    timeout: 1\n"
            "  www.dndbeyond.com:\n    timeout: 2\n",
        )
        assert load_profile(path, URL) == {"timeout": 2}

    def test_other_domain_ignored(self, tmp_path):
        path = _write(tmp_path, "domains:\n  example.com:\n    timeout: 9\n")
        assert load_profile(path, URL) == {}

    def test_empty_file(self, tmp_path):
        assert load_profile(_write(tmp_path, ""), URL) == {}

    def test_unknown_keys_dropped_with_warning(self, tmp_path, caplog):
        path = _write(tmp_path, "default:\n  timeout: 3\n  playwright: true\n")
        with caplog.at_level(logging.WARNING, logger="monsterparser.profiles"):
            assert load_profile(path, URL) == {"timeout": 3}
        assert "playwright" in caplog.text
