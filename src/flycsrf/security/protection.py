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
"""CsrfProtection — framework-agnostic request validation and token issuance.

Each request is classified once:

* **EXEMPT** — the method is in ``ignore_methods``; nothing is checked.
* **CHECKED** — the client secret is read from the cookie, a candidate
  token is extracted and verified against it.

A failed check is an expected outcome and is returned as a
:class:`CsrfVerdict`, never raised.  The rejection reason is logged at
debug level for operators but is not part of the client-facing response.

Token generation is independent of the method: :meth:`CsrfProtection.token_generator`
returns a zero-argument callable bound to the request scope.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from flycsrf.security.options import CsrfOptions
from flycsrf.security.ports.outbound import CookieStore
from flycsrf.security.secret import CsrfRequestScope, CsrfSecretManager
from flycsrf.security.tokens import generate_salt, tokenize, verify_token

logger = structlog.get_logger("flycsrf.security.protection")

TOKEN_FIELD: str = "_csrf"
"""Body field and query parameter carrying the token."""

TOKEN_HEADERS: tuple[str, ...] = ("csrf-token", "xsrf-token", "x-csrf-token", "x-xsrf-token")
"""Headers searched for the token, in order."""

INVALID_TOKEN_MESSAGE: str = "Invalid CSRF token"


class CsrfState(enum.Enum):
    """Classification of a request by the CSRF check."""

    EXEMPT = "exempt"
    CHECKED = "checked"


class RejectReason(enum.Enum):
    """Why a checked request was rejected.  Logged only, never sent to clients."""

    MISSING_SECRET = "missing_secret"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"


@dataclass(frozen=True)
class CsrfVerdict:
    state: CsrfState
    allowed: bool
    reason: RejectReason | None = None


@dataclass
class CsrfRequest:
    """The parts of an HTTP request the CSRF check reads.

    Attributes:
        method: HTTP method, any case.
        cookies: Cookie jar of the request.
        body: Parsed body (a mapping for form or JSON object bodies), else ``None``.
        query: Query parameters.
        headers: Request headers; adapters pass a case-insensitive mapping.
        raw: The framework's own request object, for custom extractors.
    """

    method: str
    cookies: CookieStore
    body: Any = None
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)
    raw: Any = None


def _field(container: Any, name: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(name)
    return None


def default_token_value(request: CsrfRequest) -> Any:
    """Extract the token from the body, the query string or a header.

    The first non-empty value wins, in this order: body ``_csrf``, query
    ``_csrf``, headers ``csrf-token``, ``xsrf-token``, ``x-csrf-token``,
    ``x-xsrf-token``.
    """
    candidate = _field(request.body, TOKEN_FIELD) or _field(request.query, TOKEN_FIELD)
    if candidate:
        return candidate
    for header in TOKEN_HEADERS:
        candidate = _field(request.headers, header)
        if candidate:
            return candidate
    return None


class CsrfProtection:
    """Validates requests and mints tokens according to :class:`CsrfOptions`.

    Holds only immutable configuration, so one instance serves any number
    of concurrent requests.
    """

    def __init__(self, options: CsrfOptions | None = None) -> None:
        self._options = options or CsrfOptions()
        self._secrets = CsrfSecretManager(self._options)
        self._extract: Callable[[CsrfRequest], Any] = self._options.value or default_token_value

    @property
    def options(self) -> CsrfOptions:
        return self._options

    @property
    def secrets(self) -> CsrfSecretManager:
        return self._secrets

    def new_scope(self, cookies: CookieStore) -> CsrfRequestScope:
        """Create the request-local scope for a new request."""
        return CsrfRequestScope(cookies=cookies)

    def is_ignored(self, method: str) -> bool:
        return method.upper() in self._options.ignore_methods

    def generate_token(self, scope: CsrfRequestScope) -> str:
        """Mint a fresh token for the scope's secret, issuing the secret if needed."""
        secret = self._secrets.obtain_or_create_secret(scope)
        return tokenize(secret, generate_salt(self._options.salt_length))

    def token_generator(self, scope: CsrfRequestScope) -> Callable[[], str]:
        """Return a zero-argument callable minting tokens for *scope*.

        Every call draws a new salt; all tokens share the scope's secret.
        """

        def csrf_token() -> str:
            return self.generate_token(scope)

        return csrf_token

    def check(self, request: CsrfRequest) -> CsrfVerdict:
        """Classify *request* and validate it unless its method is ignored."""
        if self.is_ignored(request.method):
            return CsrfVerdict(CsrfState.EXEMPT, allowed=True)

        secret = self._secrets.read_secret(request.cookies)
        if secret is None:
            return self._reject(request, RejectReason.MISSING_SECRET)

        candidate = self._extract(request)
        if not candidate:
            return self._reject(request, RejectReason.MISSING_TOKEN)

        if not verify_token(secret, candidate):
            return self._reject(request, RejectReason.INVALID_TOKEN)

        return CsrfVerdict(CsrfState.CHECKED, allowed=True)

    def _reject(self, request: CsrfRequest, reason: RejectReason) -> CsrfVerdict:
        logger.debug("csrf_rejected", method=request.method.upper(), reason=reason.value)
        return CsrfVerdict(CsrfState.CHECKED, allowed=False, reason=reason)
