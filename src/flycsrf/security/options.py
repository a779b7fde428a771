# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""CSRF options — resolved once, immutable afterwards.

:class:`CsrfProperties` is the raw, bindable view of the ``flycsrf.csrf``
configuration section.  :class:`CsrfOptions` is what the protection code
reads: cookie attributes merged over their defaults, ignored methods
uppercased into a frozenset, lengths validated.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from flycsrf.core.config import Config, config_properties
from flycsrf.kernel.exceptions import ConfigurationException
from flycsrf.security.tokens import DEFAULT_SALT_LENGTH, DEFAULT_SECRET_LENGTH

if TYPE_CHECKING:
    from flycsrf.security.protection import CsrfRequest

SameSite = Literal["lax", "strict", "none"]

TokenExtractor = Callable[["CsrfRequest"], Any]
"""Returns the candidate token for a request, or a falsy value when absent."""

DEFAULT_COOKIE_KEY: str = "_csrf"
DEFAULT_IGNORE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")

_SAME_SITE_VALUES = ("lax", "strict", "none")
_TRUTHY = ("true", "1", "yes", "on")


@dataclass(frozen=True)
class CookieOptions:
    """Attributes applied when the secret cookie is written."""

    key: str = DEFAULT_COOKIE_KEY
    path: str = "/"
    domain: str | None = None
    http_only: bool = True
    same_site: SameSite | None = "lax"
    secure: bool | None = None
    max_age: int | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> CookieOptions:
        """Merge *values* over the defaults.

        Accepts both snake_case and the camelCase spelling of cookie
        attributes (``httpOnly``, ``sameSite``, ``maxAge``).
        """
        aliases = {"httpOnly": "http_only", "sameSite": "same_site", "maxAge": "max_age", "name": "key"}
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, value in values.items():
            name = aliases.get(raw_key, raw_key)
            if name not in known:
                raise ConfigurationException(
                    f"Unknown CSRF cookie option '{raw_key}'",
                    code="CSRF_CONFIG",
                    context={"option": raw_key},
                )
            kwargs[name] = value

        same_site = kwargs.get("same_site", cls.same_site)
        if same_site is True:
            kwargs["same_site"] = "strict"
        elif same_site is False:
            kwargs["same_site"] = None
        elif isinstance(same_site, str):
            kwargs["same_site"] = same_site.lower()
            if kwargs["same_site"] not in _SAME_SITE_VALUES:
                raise ConfigurationException(
                    f"Invalid CSRF cookie same_site '{same_site}', expected one of {_SAME_SITE_VALUES}",
                    code="CSRF_CONFIG",
                )

        if kwargs.get("max_age") is not None:
            try:
                kwargs["max_age"] = int(kwargs["max_age"])
            except (TypeError, ValueError) as exc:
                raise ConfigurationException(
                    f"Invalid CSRF cookie max_age '{kwargs['max_age']}', expected an integer",
                    code="CSRF_CONFIG",
                    context={"option": "max_age"},
                ) from exc
        if not kwargs.get("key", DEFAULT_COOKIE_KEY):
            raise ConfigurationException("CSRF cookie key must not be empty", code="CSRF_CONFIG")
        return cls(**kwargs)


@config_properties(prefix="flycsrf.csrf")
@dataclass
class CsrfProperties:
    """Raw CSRF settings as they appear under ``flycsrf.csrf``."""

    cookie: Any = True
    ignore_methods: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_METHODS))
    salt_length: int = DEFAULT_SALT_LENGTH
    secret_length: int = DEFAULT_SECRET_LENGTH


@dataclass(frozen=True)
class CsrfOptions:
    """Resolved, read-only CSRF configuration.

    Attributes:
        cookie: Cookie attributes, or ``None`` when cookie storage is disabled.
        ignore_methods: Uppercased HTTP methods exempt from validation.
        salt_length: Characters of salt per token.
        secret_length: Random bytes per client secret.
        value: Custom token extractor replacing the default lookup order.
    """

    cookie: CookieOptions | None = field(default_factory=CookieOptions)
    ignore_methods: frozenset[str] = frozenset(DEFAULT_IGNORE_METHODS)
    salt_length: int = DEFAULT_SALT_LENGTH
    secret_length: int = DEFAULT_SECRET_LENGTH
    value: TokenExtractor | None = None

    @classmethod
    def create(
        cls,
        *,
        cookie: bool | Mapping[str, Any] | CookieOptions | None = True,
        ignore_methods: Iterable[str] = DEFAULT_IGNORE_METHODS,
        value: TokenExtractor | None = None,
        salt_length: int = DEFAULT_SALT_LENGTH,
        secret_length: int = DEFAULT_SECRET_LENGTH,
    ) -> CsrfOptions:
        """Resolve user-facing options into a :class:`CsrfOptions`.

        Cookie storage of the secret is enabled by default (``cookie=True``,
        attributes from :class:`CookieOptions`).  Pass ``cookie=False`` to turn
        it off; token generation then raises
        :class:`~flycsrf.kernel.exceptions.CookieStorageDisabledException` and
        every checked request is rejected.

        Raises:
            ConfigurationException: A length is below 1, *value* is not
                callable, or a cookie attribute is unknown or malformed.
        """
        if isinstance(ignore_methods, str):
            ignore_methods = [ignore_methods]
        salt_length = int(salt_length)
        secret_length = int(secret_length)
        if salt_length < 1:
            raise ConfigurationException("CSRF salt_length must be at least 1", code="CSRF_CONFIG")
        if secret_length < 1:
            raise ConfigurationException("CSRF secret_length must be at least 1", code="CSRF_CONFIG")
        if value is not None and not callable(value):
            raise ConfigurationException("CSRF value extractor must be callable", code="CSRF_CONFIG")

        return cls(
            cookie=_resolve_cookie(cookie),
            ignore_methods=frozenset(m.upper() for m in ignore_methods),
            salt_length=salt_length,
            secret_length=secret_length,
            value=value,
        )

    @classmethod
    def from_config(cls, config: Config, value: TokenExtractor | None = None) -> CsrfOptions:
        """Resolve options from the ``flycsrf.csrf`` section of *config*."""
        props = config.bind(CsrfProperties)
        ignore_methods: Any = props.ignore_methods
        if isinstance(ignore_methods, str):
            ignore_methods = [m.strip() for m in ignore_methods.split(",") if m.strip()]
        return cls.create(
            cookie=props.cookie,
            ignore_methods=ignore_methods,
            value=value,
            salt_length=props.salt_length,
            secret_length=props.secret_length,
        )

    @property
    def cookie_enabled(self) -> bool:
        return self.cookie is not None


def _resolve_cookie(cookie: Any) -> CookieOptions | None:
    if isinstance(cookie, CookieOptions):
        return cookie
    if isinstance(cookie, str):
        cookie = cookie.strip().lower() in _TRUTHY
    if cookie is None or cookie is False:
        return None
    if cookie is True:
        return CookieOptions()
    if isinstance(cookie, Mapping):
        return CookieOptions.from_mapping(cookie)
    raise ConfigurationException(
        f"CSRF cookie option must be a bool or a mapping, got {type(cookie).__name__}",
        code="CSRF_CONFIG",
    )
