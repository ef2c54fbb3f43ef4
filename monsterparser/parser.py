"""monsterparser.parser - High-level MonsterParser class.

Bundles fetch configuration with the parse pipeline in a single reusable
object.

Usage::

    from monsterparser import MonsterParser

    # Fetch through the default reader proxy and parse
    parser = MonsterParser()
    record = parser.fetch("https://www.dndbeyond.com/monsters/16841-dire-wolf")

    # Custom proxy / retry policy
    parser = MonsterParser(reader_proxy="https://reader.example.net/", max_retries=5)

    # Parse pre-fetched text (no network)
    record = parser.parse(markdown_text, url="https://www.dndbeyond.com/monsters/16841-dire-wolf")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from monsterparser.fetch import fetch_markdown as _fetch_markdown
from monsterparser.profiles import load_profile
from monsterparser.query import parse_monster as _parse_monster
from monsterparser.query import parse_monster_html as _parse_monster_html

if TYPE_CHECKING:
    from monsterparser.items import MonsterRecord


class MonsterParser:
    """High-level parser with configurable fetch policy.

    All parameters are optional; ``MonsterParser()`` uses the defaults from
    :mod:`monsterparser.settings`.

    Args:
        reader_proxy: Prefix prepended to the normalized page URL to obtain
                      a markdown rendering.
        timeout:      Per-request network timeout in seconds.
        max_retries:  Retry attempts for transient fetch failures.
        user_agent:   Override the default User-Agent string.
    """

    def __init__(
        self,
        reader_proxy: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._reader_proxy = reader_proxy
        self._timeout = timeout
        self._max_retries = max_retries
        self._user_agent = user_agent

    @classmethod
    def from_profile(cls, path: str | Path, url: str) -> MonsterParser:
        """Build a parser from the YAML profile entry matching *url*'s host."""
        return cls(**load_profile(path, url))

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def fetch_text(self, url: str) -> str:
        """Fetch the markdown rendering of *url* with the configured policy."""
        return _fetch_markdown(
            url,
            reader_proxy=self._reader_proxy,
            timeout=self._timeout,
            max_retries=self._max_retries,
            user_agent=self._user_agent,
        )

    def fetch(self, url: str) -> MonsterRecord:
        """Fetch *url* and parse it into a :class:`~monsterparser.items.MonsterRecord`.

        Raises:
            :class:`~monsterparser.errors.FetchError`: when the page cannot
                be retrieved after all retries.
            :class:`~monsterparser.errors.MonsterParseError`: for any of the
                URL or content failures raised by :func:`parse_monster`.
        """
        return self.parse(self.fetch_text(url), url=url)

    def parse(self, text: str, url: str, *, html: bool = False) -> MonsterRecord:
        """Parse pre-fetched text without any network calls.

        Args:
            text: Page content; markdown unless *html* is True.
            url:  Source URL of the page.
            html: Treat *text* as HTML and convert it to markdown first.
        """
        if html:
            return _parse_monster_html(text, url)
        return _parse_monster(text, url)
