"""Retrieve monster pages as markdown through a readability proxy.

This is the network collaborator for :mod:`monsterparser.query`; the
parsing pipeline itself never calls it.  Uses only the stdlib (``urllib``)
for HTTP.

Usage::

    from monsterparser.fetch import fetch_markdown
    from monsterparser.query import parse_monster

    text = fetch_markdown("https://www.dndbeyond.com/monsters/16841-dire-wolf")
    record = parse_monster(text, "https://www.dndbeyond.com/monsters/16841-dire-wolf")
"""

from __future__ import annotations

import gzip
import logging
import random
import time
import urllib.error
import urllib.request
import zlib

from monsterparser import settings
from monsterparser.errors import FetchError
from monsterparser.extractors.urlnorm import normalize_source

logger = logging.getLogger(__name__)


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _backoff(attempt: int, retry_after: int = 0) -> float:
    return max(retry_after, 2 ** attempt) + random.uniform(0, 1)


def fetch_markdown(
    url: str,
    *,
    reader_proxy: str | None = None,
    timeout: int | None = None,
    user_agent: str | None = None,
    max_retries: int | None = None,
) -> str:
    """Fetch the monster page at *url* rendered as markdown.

    The URL is normalized first, then requested through *reader_proxy*
    (default :data:`settings.READER_PROXY_URL`).  Retries up to
    *max_retries* times with jittered exponential backoff on 429/5xx
    responses and network-level failures.

    Raises:
        InvalidUrlError / UnsupportedSourceError: *url* is not a monster page.
        FetchError: on HTTP errors or connection failures after all retries.
    """
    source = normalize_source(url)
    proxy = settings.READER_PROXY_URL if reader_proxy is None else reader_proxy
    target = f"{proxy}{source.normalized_url}"
    timeout = settings.FETCH_TIMEOUT if timeout is None else timeout
    max_retries = settings.FETCH_MAX_RETRIES if max_retries is None else max_retries

    req = urllib.request.Request(
        target,
        headers={
            "User-Agent": user_agent or settings.USER_AGENT,
            "Accept": "text/plain, text/markdown;q=0.9, */*;q=0.8",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    last_exc: FetchError | None = None
    for attempt in range(max_retries + 1):
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return _decode_response_body(resp.read(), resp.headers, target)

        except urllib.error.HTTPError as exc:
            error = FetchError(
                f"HTTP {exc.code} fetching {target}: {exc.reason}",
                url=target,
                status=exc.code,
            )
            if exc.code not in settings.FETCH_RETRY_CODES or attempt >= max_retries:
                raise error from exc
            retry_after = 0
            ra_header = exc.headers.get("Retry-After", "") if exc.headers else ""
            if ra_header and ra_header.strip().isdigit():
                retry_after = int(ra_header)
            delay = _backoff(attempt, retry_after)
            logger.debug(
                "HTTP %d for %s, retrying in %.1fs (attempt %d/%d)",
                exc.code, target, delay, attempt + 1, max_retries,
            )
            time.sleep(delay)
            last_exc = error

        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            error = FetchError(f"Network error fetching {target}: {reason}", url=target)
            if attempt >= max_retries:
                raise error from exc
            delay = _backoff(attempt)
            logger.debug(
                "Network error for %s, retrying in %.1fs (attempt %d/%d): %s",
                target, delay, attempt + 1, max_retries, reason,
            )
            time.sleep(delay)
            last_exc = error

    # Only reachable when max_retries is negative
    raise last_exc or FetchError(f"All retries exhausted for {target}", url=target)
