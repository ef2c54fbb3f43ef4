"""URL normalization and slug generation for monster pages."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlsplit, urlunsplit

from monsterparser import settings
from monsterparser.errors import InvalidUrlError, UnsupportedSourceError
from monsterparser.items import NormalizedSource

logger = logging.getLogger(__name__)

# Characters allowed in slugs
_SLUG_UNSAFE_RE = re.compile(r"[^a-z0-9-]+")
_MULTI_DASH_RE = re.compile(r"-{2,}")
_LEADING_TRAILING_DASH_RE = re.compile(r"^-+|-+$")

# "16841-dire-wolf" → reference id + slug remainder
_REFERENCE_SEGMENT_RE = re.compile(r"^(\d+)-(.*)$")


def sanitize_slug(value: str) -> str:
    """Lowercase *value* and collapse anything outside ``[a-z0-9-]`` to one dash."""
    slug = _SLUG_UNSAFE_RE.sub("-", value.strip().lower())
    slug = _MULTI_DASH_RE.sub("-", slug)
    return _LEADING_TRAILING_DASH_RE.sub("", slug)


def parse_slug_segment(segment: str) -> tuple[str, str | None]:
    """Split a final path segment into ``(slug, reference_id)``.

    Example:
        16841-dire-wolf → ("dire-wolf", "16841")
        goblin          → ("goblin", None)
    """
    lowered = segment.strip().lower()
    if not lowered:
        return "", None
    match = _REFERENCE_SEGMENT_RE.match(lowered)
    if match:
        return sanitize_slug(match.group(2)), match.group(1)
    return sanitize_slug(lowered), None


def is_vendor_host(host: str) -> bool:
    """Return True if *host* is the vendor domain or one of its subdomains."""
    host = host.lower().rstrip(".")
    return host == settings.VENDOR_DOMAIN or host.endswith("." + settings.VENDOR_DOMAIN)


def _with_authority(value: str) -> str:
    """Prefix ``//`` to a scheme-less URL that starts with a vendor host.

    Example:
        dndbeyond.com/monsters/16841-dire-wolf → //dndbeyond.com/monsters/16841-dire-wolf
    """
    if "://" in value or value.startswith("/"):
        return value
    host = value.split("/", 1)[0].split(":", 1)[0]
    if not is_vendor_host(host):
        return value
    logger.debug("Treating %r as a bare vendor host", value)
    return "//" + value


def normalize_source(raw_url: str) -> NormalizedSource:
    """Validate *raw_url* as a monster page and return its canonical form.

    Transformations applied:
    - Resolve against the vendor origin (relative, protocol-relative and
      bare-host inputs are accepted)
    - Force the canonical ``https`` scheme and vendor host
    - Strip query and fragment

    Raises:
        InvalidUrlError: *raw_url* is not a string or cannot be parsed.
        UnsupportedSourceError: the host is not the vendor domain or the path
            has no monster segment.
    """
    if not isinstance(raw_url, str) or not raw_url.strip():
        raise InvalidUrlError(url=str(raw_url or ""))

    try:
        candidate = _with_authority(raw_url.strip())
        parsed = urlsplit(urljoin(settings.VENDOR_BASE_URL + "/", candidate))
        host = parsed.hostname or ""
        # .port raises ValueError for a malformed authority
        if parsed.port is not None:
            logger.debug("Dropping explicit port %d from %r", parsed.port, raw_url)
    except ValueError as exc:
        raise InvalidUrlError(url=raw_url) from exc

    if not is_vendor_host(host):
        logger.debug("Rejected %r: host %r is not %s", raw_url, host, settings.VENDOR_DOMAIN)
        raise UnsupportedSourceError(url=raw_url)

    segments = [s for s in parsed.path.split("/") if s]
    if settings.MONSTER_PATH_SEGMENT not in segments[:-1]:
        logger.debug("Rejected %r: no /%s/ path segment", raw_url, settings.MONSTER_PATH_SEGMENT)
        raise UnsupportedSourceError(url=raw_url)

    canonical = urlsplit(settings.VENDOR_BASE_URL)
    normalized_url = urlunsplit((canonical.scheme, canonical.netloc, parsed.path, "", ""))
    slug, reference_id = parse_slug_segment(segments[-1])

    return NormalizedSource(
        normalized_url=normalized_url,
        slug=slug,
        reference_id=reference_id,
    )
