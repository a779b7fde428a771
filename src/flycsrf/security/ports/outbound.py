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
"""CookieStore port — request-scoped cookie access supplied by the web layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flycsrf.security.options import CookieOptions


@runtime_checkable
class CookieStore(Protocol):
    """Cookie jar for a single request.

    ``get`` reads the cookie sent by the client (or one written earlier in
    the same request).  ``set`` schedules a cookie on the response with the
    given attributes.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, options: CookieOptions) -> None: ...
