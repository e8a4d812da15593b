from __future__ import annotations

import enum
import logging
import types
import typing
from starlette.datastructures import MutableHeaders
from starlette.types import Scope

from cookiejar.config import CookieOptions
from cookiejar.headers import delete_cookie_header, set_cookie_header
from cookiejar.parsers import extract_cookies

__all__ = ["CookieJar", "DELETED", "Deleted"]

logger = logging.getLogger(__name__)


class Deleted:
    """Marks a cookie that has to be removed from the client."""

    _instance: Deleted | None = None

    def __new__(cls) -> Deleted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETED"

    def __bool__(self) -> bool:
        return False


DELETED = Deleted()

CookieValue = typing.Union[str, Deleted]


def _normalize_key(key: typing.Any) -> str:
    if isinstance(key, bytes):
        return key.decode("utf-8")
    if isinstance(key, enum.Enum):
        return str(key.value)
    if key is None:
        raise TypeError("Cookie name cannot be None.")
    return str(key)


class CookieJar(typing.MutableMapping[str, str]):
    """
    Request cookies as a mutable mapping.

    Reads come from the request Cookie header. Writes and deletions are staged and turned into Set-Cookie headers
    by :meth:`finish`. Cookies that were only read are never written back.
    Setting a cookie to None raises TypeError, use `DELETED` or `del jar[name]` to remove it.

    Usage:

        jar = CookieJar(request.scope, response.headers)
        jar["theme"] = "dark"
        del jar["tracking"]
        jar.finish()
    """

    def __init__(self, scope: Scope, headers: MutableHeaders, options: CookieOptions | None = None) -> None:
        self.headers = headers
        self.options = options or CookieOptions()
        self._cookies: dict[str, str] = {_normalize_key(k): v for k, v in extract_cookies(scope).items()}
        self._changes: dict[str, CookieValue] = {}

    @property
    def changes(self) -> typing.Mapping[str, CookieValue]:
        return types.MappingProxyType(self._changes)

    def set(self, key: typing.Any, value: typing.Any) -> None:
        """Store `value` under `key`. Passing `DELETED` marks the cookie for removal."""
        key = _normalize_key(key)
        if value is None:
            raise TypeError(f'Cookie "{key}" cannot be set to None, use DELETED or jar.delete() to remove it.')

        if isinstance(value, Deleted):
            self._cookies.pop(key, None)
            self._changes[key] = DELETED
            return

        value = value if isinstance(value, str) else str(value)
        self._cookies[key] = value
        self._changes[key] = value

    def delete(self, key: typing.Any) -> None:
        self.set(key, DELETED)

    def finish(self) -> None:
        """Write pending changes into the response headers. Repeated calls replace earlier headers."""
        for key, value in self._changes.items():
            if isinstance(value, Deleted):
                delete_cookie_header(self.headers, key, self.options)
            else:
                set_cookie_header(self.headers, key, value, self.options)
        if self._changes:
            logger.debug("Wrote %d cookie change(s) to response headers.", len(self._changes))

    def __getitem__(self, key: typing.Any) -> str:
        return self._cookies[_normalize_key(key)]

    def __setitem__(self, key: typing.Any, value: typing.Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: typing.Any) -> None:
        key = _normalize_key(key)
        if key not in self._cookies:
            raise KeyError(key)
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        return key is not None and _normalize_key(key) in self._cookies

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self._cookies!r}>"
