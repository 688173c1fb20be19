from __future__ import annotations

"""Link trust policy.

A URL is trusted when its origin (``scheme://host``, port and path excluded)
belongs to the whitelist. The policy is applied twice with different
severities: untrusted anchors are defused (children kept), while a text node
consisting of an untrusted bare URL is hidden entirely.
"""

import logging
from typing import AbstractSet, Optional

from ganymede_toolkit.core.utils import is_http_url, url_origin

logger = logging.getLogger(__name__)

__all__ = ["is_trusted", "is_untrusted_http", "looks_like_url"]


def is_trusted(url: str, whitelist: AbstractSet[str]) -> bool:
    """Return True if *url*'s origin is whitelisted."""
    origin = url_origin(url)
    if origin is None:
        return False
    return origin in whitelist


def looks_like_url(text: Optional[str]) -> bool:
    """Return True when the *entire* value is an http(s) URL."""
    if not text or not text.startswith("http"):
        return False
    candidate = text.strip()
    return is_http_url(candidate) and not any(ch.isspace() for ch in candidate)


def is_untrusted_http(url: Optional[str], whitelist: AbstractSet[str]) -> bool:
    """Return True for an http(s) URL outside the whitelist."""
    if not is_http_url(url):
        return False
    trusted = is_trusted(url, whitelist)  # type: ignore[arg-type]
    if not trusted:
        logger.debug("Links: untrusted origin %s", url_origin(url))  # type: ignore[arg-type]
    return not trusted
