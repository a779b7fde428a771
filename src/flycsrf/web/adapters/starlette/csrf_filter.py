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
"""CsrfFilter — salted-token CSRF protection for Starlette applications.

* **Every request** gets ``request.state.csrf_token``, a zero-argument
  callable returning a fresh token.  The first call in a request without
  a secret cookie issues the secret and sets the cookie on the response.
* **Ignored methods** (GET, HEAD, OPTIONS by default) pass through.
* **Other methods** must present a token derived from the secret cookie,
  in the ``_csrf`` body field (urlencoded, multipart or JSON) or query
  parameter, or in one of the
  ``csrf-token`` / ``xsrf-token`` / ``x-csrf-token`` / ``x-xsrf-token``
  headers.  Anything else is answered with ``403 Invalid CSRF token``
  before the handler runs.

Usage::

    app = Starlette(
        routes=routes,
        middleware=[Middleware(WebFilterChainMiddleware, filters=[CsrfFilter()])],
    )
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any
from urllib.parse import parse_qsl

import structlog
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.responses import PlainTextResponse

from flycsrf.core.config import Config
from flycsrf.kernel.exceptions import ConfigurationException
from flycsrf.security.options import CsrfOptions, TokenExtractor
from flycsrf.security.protection import INVALID_TOKEN_MESSAGE, CsrfProtection, CsrfRequest
from flycsrf.web.adapters.starlette.cookies import StarletteCookieJar
from flycsrf.web.filters import OncePerRequestFilter
from flycsrf.web.ports.filter import CallNext

logger = structlog.get_logger("flycsrf.web.csrf")

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_MULTIPART_CONTENT_TYPE = "multipart/form-data"
_JSON_CONTENT_TYPE = "application/json"


async def _read_multipart(request: Any) -> Any:
    # body() caches the payload, so form() parses it and the chain can replay it
    await request.body()
    try:
        form = await request.form()
    except (MultiPartException, HTTPException, ValueError):
        return None
    try:
        return {key: value for key, value in form.multi_items() if isinstance(value, str)}
    finally:
        await form.close()


async def _read_body(request: Any) -> Any:
    """Parse a form, multipart or JSON body.  Anything unreadable counts as no body.

    File parts of a multipart body are dropped; only text fields can carry
    ``_csrf``.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == _MULTIPART_CONTENT_TYPE:
        return await _read_multipart(request)

    is_json = content_type == _JSON_CONTENT_TYPE or content_type.endswith("+json")
    if content_type != _FORM_CONTENT_TYPE and not is_json:
        return None

    raw: bytes = await request.body()
    if not raw:
        return None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return None

    if is_json:
        try:
            return json.loads(text)
        except (ValueError, RecursionError):
            return None
    return dict(parse_qsl(text, keep_blank_values=True))


class CsrfFilter(OncePerRequestFilter):
    """Validates CSRF tokens and exposes a token generator to handlers."""

    def __init__(
        self,
        options: CsrfOptions | None = None,
        *,
        url_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        self._protection = CsrfProtection(options)
        self.url_patterns = list(url_patterns)
        self.exclude_patterns = list(exclude_patterns)
        logger.debug(
            "csrf_filter_configured",
            cookie_enabled=self._protection.options.cookie_enabled,
            ignore_methods=sorted(self._protection.options.ignore_methods),
        )

    @classmethod
    def from_config(cls, config: Config, value: TokenExtractor | None = None) -> CsrfFilter:
        """Build a filter from the ``flycsrf.csrf`` and ``flycsrf.web.csrf`` sections."""
        return cls(
            CsrfOptions.from_config(config, value=value),
            url_patterns=config.get("flycsrf.web.csrf.url_patterns", []) or [],
            exclude_patterns=config.get("flycsrf.web.csrf.exclude_patterns", []) or [],
        )

    @property
    def protection(self) -> CsrfProtection:
        return self._protection

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        jar = StarletteCookieJar(request.cookies)
        scope = self._protection.new_scope(jar)
        request.state.csrf_token = self._protection.token_generator(scope)

        if not self._protection.is_ignored(request.method):
            verdict = self._protection.check(
                CsrfRequest(
                    method=request.method,
                    cookies=jar,
                    body=await _read_body(request),
                    query=request.query_params,
                    headers=request.headers,
                    raw=request,
                )
            )
            if not verdict.allowed:
                return PlainTextResponse(INVALID_TOKEN_MESSAGE, status_code=403)

        response = await call_next(request)
        jar.apply(response)
        return response


def csrf_token(request: Any) -> str:
    """Return a fresh CSRF token for *request*.

    Raises:
        ConfigurationException: No :class:`CsrfFilter` ran for this request.
    """
    generator = getattr(request.state, "csrf_token", None)
    if generator is None:
        raise ConfigurationException(
            "CsrfFilter is not installed for this request",
            code="CSRF_FILTER_MISSING",
        )
    return generator()
