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
"""flycsrf — salted-token CSRF protection with cookie-held client secrets.

Import the Starlette binding from its adapter package::

    from flycsrf.web.adapters.starlette import CsrfFilter, WebFilterChainMiddleware
"""

from flycsrf.kernel.exceptions import (
    ConfigurationException,
    CookieStorageDisabledException,
    FlyCsrfException,
)
from flycsrf.logging import StructlogAdapter
from flycsrf.security import (
    CookieOptions,
    CsrfOptions,
    CsrfProtection,
    CsrfRequest,
    CsrfVerdict,
    tokenize,
    verify_token,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationException",
    "CookieOptions",
    "CookieStorageDisabledException",
    "CsrfOptions",
    "CsrfProtection",
    "CsrfRequest",
    "CsrfVerdict",
    "FlyCsrfException",
    "StructlogAdapter",
    "tokenize",
    "verify_token",
]
