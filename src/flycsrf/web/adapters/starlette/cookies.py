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
"""StarletteCookieJar — CookieStore over a Starlette request/response pair."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flycsrf.security.options import CookieOptions


class StarletteCookieJar:
    """Reads request cookies and collects writes until the response exists.

    The handler runs before the response is built, so ``set`` only records
    the cookie; the filter calls :meth:`apply` on the final response.
    """

    def __init__(self, request_cookies: Mapping[str, str]) -> None:
        self._request_cookies = request_cookies
        self._pending: dict[str, tuple[str, CookieOptions]] = {}

    def get(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key][0]
        return self._request_cookies.get(key)

    def set(self, key: str, value: str, options: CookieOptions) -> None:
        self._pending[key] = (value, options)

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Any) -> None:
        """Emit a ``Set-Cookie`` header on *response* for every recorded write."""
        for key, (value, options) in self._pending.items():
            kwargs: dict[str, Any] = {
                "key": key,
                "value": value,
                "path": options.path,
                "httponly": options.http_only,
                "samesite": options.same_site,
            }
            if options.domain:
                kwargs["domain"] = options.domain
            if options.secure is not None:
                kwargs["secure"] = options.secure
            if options.max_age:
                kwargs["max_age"] = options.max_age
            response.set_cookie(**kwargs)
