from cookiejar.config import Config, CookieOptions
from cookiejar.exceptions import CookieJarError, ImproperlyConfigured
from cookiejar.headers import cookie_names, delete_cookie_header, set_cookie_header
from cookiejar.jar import DELETED, CookieJar, Deleted
from cookiejar.middleware import CookieJarMiddleware, get_cookie_jar
from cookiejar.parsers import CookieCache, extract_cookies, parse_cookie_header

__all__ = [
    "Config",
    "CookieOptions",
    "CookieJarError",
    "ImproperlyConfigured",
    "cookie_names",
    "delete_cookie_header",
    "set_cookie_header",
    "DELETED",
    "CookieJar",
    "Deleted",
    "CookieJarMiddleware",
    "get_cookie_jar",
    "CookieCache",
    "extract_cookies",
    "parse_cookie_header",
]
