class CookieJarError(Exception):
    """Base class for all cookiejar errors."""


class ImproperlyConfigured(CookieJarError):
    """Raised when the cookie jar is used without the middleware or with invalid options."""
