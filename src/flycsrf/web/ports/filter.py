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
"""WebFilter protocol — the seam where CSRF checks run before a handler.

Request/Response are typed ``Any`` so that Starlette types stay confined
to the adapter layer.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

# Concrete type: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class WebFilter(Protocol):
    """Protocol for HTTP request/response filters.

    A filter may answer the request itself (short-circuit), or delegate to
    ``call_next`` and post-process the response.
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Execute this filter's logic.

        Args:
            request: The incoming HTTP request.
            call_next: Calls the next filter in the chain (or the route handler).

        Returns:
            The HTTP response.
        """
        ...

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` to skip this filter for the given request."""
        ...
