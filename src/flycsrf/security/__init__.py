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
"""flycsrf security — token codec, client secrets and request validation."""

from flycsrf.security.options import CookieOptions, CsrfOptions, CsrfProperties
from flycsrf.security.ports.outbound import CookieStore
from flycsrf.security.protection import (
    CsrfProtection,
    CsrfRequest,
    CsrfState,
    CsrfVerdict,
    RejectReason,
    default_token_value,
)
from flycsrf.security.secret import CsrfRequestScope, CsrfSecretManager
from flycsrf.security.tokens import (
    generate_salt,
    generate_secret,
    hash_value,
    random_string,
    tokenize,
    verify_token,
)

__all__ = [
    "CookieOptions",
    "CookieStore",
    "CsrfOptions",
    "CsrfProperties",
    "CsrfProtection",
    "CsrfRequest",
    "CsrfRequestScope",
    "CsrfSecretManager",
    "CsrfState",
    "CsrfVerdict",
    "RejectReason",
    "default_token_value",
    "generate_salt",
    "generate_secret",
    "hash_value",
    "random_string",
    "tokenize",
    "verify_token",
]
