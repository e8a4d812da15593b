from __future__ import annotations

import dataclasses
import logging
import re
from starlette.datastructures import Headers
from starlette.types import Scope
from urllib.parse import unquote_plus

__all__ = ["CookieCache", "parse_cookie_header", "read_cookie_header", "extract_cookies", "CACHE_SCOPE_KEY"]

logger = logging.getLogger(__name__)

CACHE_SCOPE_KEY = "cookiejar.cache"

_SEPARATORS = re.compile(r"[;,] *")


@dataclasses.dataclass
class CookieCache:
    """
    Last parsed Cookie header of a request together with the header it was parsed from.

    The cache is owned by the request scope. Every jar created for the same request shares it.
    """

    raw: str | None = None
    cookies: dict[str, str] = dataclasses.field(default_factory=dict)


def _unescape(token: str) -> str:
    try:
        return unquote_plus(token, errors="strict")
    except UnicodeDecodeError:
        logger.debug("Cannot percent-decode cookie token %r, using raw value.", token)
        return token


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """
    Parse a Cookie header into a name to value mapping.

    Pairs are separated by ";" or ",". When a name is repeated, the first value wins, as user agents send cookies
    with more specific paths first (RFC 2109).
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies

    for chunk in _SEPARATORS.split(header.strip()):
        key, _, value = chunk.partition("=")
        key = _unescape(key.strip())
        if not key or key in cookies:
            continue
        cookies[key] = _unescape(value)
    return cookies


def read_cookie_header(scope: Scope) -> str | None:
    values = Headers(raw=list(scope.get("headers") or [])).getlist("cookie")
    return "; ".join(values) if values else None


def extract_cookies(scope: Scope) -> dict[str, str]:
    """
    Return parsed request cookies, reusing the scope cache while the raw Cookie header stays unchanged.

    The returned dict is the cache's own object. Callers must copy it before mutating.
    """
    cache: CookieCache = scope.setdefault(CACHE_SCOPE_KEY, CookieCache())
    raw = read_cookie_header(scope)
    if raw == cache.raw:
        logger.debug("Reusing cached cookies for %r.", raw)
        return cache.cookies

    cache.cookies.clear()
    cache.cookies.update(parse_cookie_header(raw))
    cache.raw = raw
    logger.debug("Parsed %d cookie(s) from Cookie header.", len(cache.cookies))
    return cache.cookies
