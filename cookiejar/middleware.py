from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cookiejar.config import CookieOptions
from cookiejar.exceptions import ImproperlyConfigured
from cookiejar.jar import CookieJar

__all__ = ["CookieJarMiddleware", "get_cookie_jar", "SCOPE_KEY"]

SCOPE_KEY = "cookies"


class CookieJarMiddleware:
    def __init__(self, app: ASGIApp, options: CookieOptions | None = None) -> None:
        self.app = app
        self.options = options or CookieOptions()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":  # pragma: no cover
            return await self.app(scope, receive, send)

        response_headers: list[tuple[bytes, bytes]] = []
        jar = CookieJar(scope, MutableHeaders(raw=response_headers), self.options)
        scope[SCOPE_KEY] = jar

        async def sender(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers[:] = message.get("headers", [])
                jar.finish()
                message["headers"] = response_headers
            await send(message)

        await self.app(scope, receive, sender)


def get_cookie_jar(connection: HTTPConnection) -> CookieJar:
    if SCOPE_KEY not in connection.scope:
        raise ImproperlyConfigured("CookieJarMiddleware must be installed to access the cookie jar.")
    return connection.scope[SCOPE_KEY]
