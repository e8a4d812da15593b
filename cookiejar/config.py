from __future__ import annotations

import dataclasses
import os
import pathlib
import typing

from starlette.config import Config as BaseConfig
from starlette.config import Environ

from cookiejar.exceptions import ImproperlyConfigured

__all__ = ["Config", "CookieOptions"]

SameSite = typing.Literal["lax", "strict", "none"]

_SAMESITE_CHOICES = ("lax", "strict", "none")


class Config(BaseConfig):
    def __init__(
        self,
        env_files: list[str | pathlib.Path] | None = None,
        env_prefix: str = "",
        environ: typing.Mapping[str, str] | None = None,
    ) -> None:
        env_files = env_files or []
        super().__init__(None, environ if environ is not None else Environ(), env_prefix)
        for env_file in env_files:
            if os.path.exists(env_file) and os.path.isfile(env_file):
                self.file_values.update(BaseConfig(env_file).file_values)


@dataclasses.dataclass(frozen=True)
class CookieOptions:
    """Attributes attached to every Set-Cookie header the jar emits."""

    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: SameSite | None = "lax"
    max_age: int | None = None

    def __post_init__(self) -> None:
        if self.samesite is not None and self.samesite.lower() not in _SAMESITE_CHOICES:
            raise ImproperlyConfigured(
                f"samesite must be one of {', '.join(_SAMESITE_CHOICES)}, got {self.samesite!r}."
            )

    @classmethod
    def from_config(cls, config: BaseConfig) -> CookieOptions:
        samesite = config("COOKIE_SAMESITE", default="lax")
        return cls(
            path=config("COOKIE_PATH", default="/"),
            domain=config("COOKIE_DOMAIN", default=None),
            secure=config("COOKIE_SECURE", cast=bool, default=False),
            httponly=config("COOKIE_HTTPONLY", cast=bool, default=False),
            samesite=samesite.lower() if samesite else None,
            max_age=config("COOKIE_MAX_AGE", cast=int, default=None),
        )
