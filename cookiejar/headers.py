from __future__ import annotations

import http.cookies
import logging
from starlette.datastructures import MutableHeaders
from urllib.parse import quote_plus, unquote_plus

from cookiejar.config import CookieOptions

__all__ = ["set_cookie_header", "delete_cookie_header", "cookie_names"]

logger = logging.getLogger(__name__)

EXPIRED = "Thu, 01 Jan 1970 00:00:00 GMT"

_PLACEHOLDER = "_"

_EMPTY_VALUE = '""'


def _cookie_name(header_value: str) -> str:
    return header_value.split("=", 1)[0].strip()


def _remove_cookie(headers: MutableHeaders, encoded_key: str) -> None:
    headers.raw[:] = [
        (name, value)
        for name, value in headers.raw
        if not (name == b"set-cookie" and _cookie_name(value.decode("latin-1")) == encoded_key)
    ]


def _format_attributes(options: CookieOptions, max_age: int | None, expires: str | None) -> str:
    # attributes only, the name=value pair is written by the caller
    cookie: http.cookies.BaseCookie[str] = http.cookies.SimpleCookie()
    cookie[_PLACEHOLDER] = ""
    morsel = cookie[_PLACEHOLDER]
    if max_age is not None:
        morsel["max-age"] = max_age
    if expires is not None:
        morsel["expires"] = expires
    if options.path is not None:
        morsel["path"] = options.path
    if options.domain is not None:
        morsel["domain"] = options.domain
    if options.secure:
        morsel["secure"] = True
    if options.httponly:
        morsel["httponly"] = True
    if options.samesite is not None:
        morsel["samesite"] = options.samesite
    return morsel.OutputString().partition(";")[2].strip()


def _append_cookie(
    headers: MutableHeaders,
    encoded_key: str,
    encoded_value: str,
    options: CookieOptions,
    max_age: int | None,
    expires: str | None = None,
) -> None:
    cookie_value = f"{encoded_key}={encoded_value or _EMPTY_VALUE}"
    attributes = _format_attributes(options, max_age, expires)
    if attributes:
        cookie_value = f"{cookie_value}; {attributes}"

    _remove_cookie(headers, encoded_key)
    headers.append("set-cookie", cookie_value)


def set_cookie_header(
    headers: MutableHeaders,
    key: str,
    value: str,
    options: CookieOptions | None = None,
) -> None:
    """Replace any Set-Cookie header for `key` with one storing `value` on the client."""
    options = options or CookieOptions()
    _append_cookie(headers, quote_plus(key), quote_plus(value), options, max_age=options.max_age)
    logger.debug("Set cookie %r.", key)


def delete_cookie_header(headers: MutableHeaders, key: str, options: CookieOptions | None = None) -> None:
    """Replace any Set-Cookie header for `key` with one expiring the cookie on the client."""
    options = options or CookieOptions()
    _append_cookie(headers, quote_plus(key), "", options, max_age=0, expires=EXPIRED)
    logger.debug("Deleted cookie %r.", key)


def cookie_names(headers: MutableHeaders) -> list[str]:
    return [unquote_plus(_cookie_name(value)) for value in headers.getlist("set-cookie")]
