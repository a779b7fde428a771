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
"""Client secret management — one durable secret per client, kept in a cookie."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from flycsrf.kernel.exceptions import CookieStorageDisabledException
from flycsrf.security.options import CsrfOptions
from flycsrf.security.ports.outbound import CookieStore
from flycsrf.security.tokens import generate_secret

logger = structlog.get_logger("flycsrf.security.secret")


@dataclass
class CsrfRequestScope:
    """Per-request memo of the resolved secret.

    Created once per request by the web adapter and never shared between
    requests.  Once ``secret`` is set it is reused for every token minted
    during the request.

    Attributes:
        cookies: The request's cookie jar.
        secret: The resolved secret, ``None`` until first needed.
        secret_created: ``True`` if the secret was issued during this request.
    """

    cookies: CookieStore
    secret: str | None = None
    secret_created: bool = False


class CsrfSecretManager:
    """Reads, and lazily issues, the client secret through a :class:`CookieStore`."""

    def __init__(self, options: CsrfOptions) -> None:
        self._options = options

    def read_secret(self, cookies: CookieStore) -> str | None:
        """Return the secret sent by the client, or ``None``.

        Never creates a secret.  Always ``None`` when cookie storage is disabled.
        """
        cookie = self._options.cookie
        if cookie is None:
            return None
        value = cookies.get(cookie.key)
        return str(value) if value else None

    def obtain_or_create_secret(self, scope: CsrfRequestScope) -> str:
        """Return the client secret, issuing a new one if the cookie is absent.

        Raises:
            CookieStorageDisabledException: Cookie storage is disabled, so a
                secret could never reach the client.
        """
        if scope.secret:
            return scope.secret

        cookie = self._options.cookie
        if cookie is None:
            raise CookieStorageDisabledException(
                "CSRF: cookie storage must be enabled to generate tokens",
                code="CSRF_COOKIE_DISABLED",
            )

        secret = self.read_secret(scope.cookies)
        if secret is None:
            secret = generate_secret(self._options.secret_length)
            scope.cookies.set(cookie.key, secret, cookie)
            scope.secret_created = True
            logger.debug("csrf_secret_issued", cookie_key=cookie.key)

        scope.secret = secret
        return secret
