"""Project settings for monsterparser.

Values here are defaults; ``monsterparser.profiles.load_profile`` can
override the fetch-related ones per host from a YAML file.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Vendor identity
# ---------------------------------------------------------------------------
VENDOR_DOMAIN = "dndbeyond.com"
VENDOR_BASE_URL = "https://www.dndbeyond.com"

# Path segment every monster detail page lives under
MONSTER_PATH_SEGMENT = "monsters"

# ---------------------------------------------------------------------------
# Fetch policy (used only by monsterparser.fetch)
# ---------------------------------------------------------------------------
# Readability proxy that renders a page as markdown-like text.
READER_PROXY_URL = "https://r.jina.ai/"

FETCH_TIMEOUT = 30
FETCH_MAX_RETRIES = 3
FETCH_RETRY_CODES = frozenset({429, 500, 502, 503, 504})

USER_AGENT = "monsterparser/0.1 (+https://github.com/user/monsterparser)"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
