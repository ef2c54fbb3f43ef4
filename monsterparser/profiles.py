"""YAML-based fetch profiles.

A profile file looks like::

    default:
      timeout: 20
    domains:
      dndbeyond.com:
        reader_proxy: https://reader.example.net/
        max_retries: 5
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)

PROFILE_KEYS: frozenset[str] = frozenset({"reader_proxy", "timeout", "max_retries", "user_agent"})


def load_profile(path: str | Path, url: str) -> dict[str, Any]:
    """Load YAML profile and return merged fetch settings for the given URL."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    default = data.get("default", {}) if isinstance(data, dict) else {}
    domains = data.get("domains", {}) if isinstance(data, dict) else {}

    netloc = (urlparse(url).hostname or "").lower()
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if isinstance(domains, dict):
        for key, cfg in domains.items():
            if not isinstance(key, str) or not isinstance(cfg, dict):
                continue
            key_lower = key.lower()
            if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
                len(key_lower) > len(best_key)
            ):
                best_key = key_lower
                best_cfg = cfg

    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)
    merged.update(best_cfg)

    unknown = set(merged) - PROFILE_KEYS
    if unknown:
        logger.warning("Ignoring unknown profile keys in %s: %s", path, ", ".join(sorted(unknown)))
    return {key: value for key, value in merged.items() if key in PROFILE_KEYS}
