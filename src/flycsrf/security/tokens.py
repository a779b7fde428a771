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
"""CSRF token codec — salted SHA-256 tokens bound to a client secret.

A token has the form ``{salt}-{hash}`` where ``hash`` is the URL-safe,
unpadded base64 SHA-256 digest of ``{salt}-{secret}``.  Every function here
is pure: nothing is stored per token, validity is re-derived from the
``(secret, token)`` pair.
"""

from __future__ import annotations

import base64
import hashlib
import math
import secrets
import string

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
TOKEN_SEPARATOR: str = "-"
"""Separator between the salt and the hash in a token."""

DEFAULT_SALT_LENGTH: int = 8
"""Number of characters in a token salt."""

DEFAULT_SECRET_LENGTH: int = 18
"""Number of random bytes in a client secret (before encoding)."""

SALT_ALPHABET: str = string.ascii_letters + string.digits + "_"
"""URL-safe base64 alphabet without the separator (63 characters)."""


# ---------------------------------------------------------------------------
# Encoding helpers
# ---------------------------------------------------------------------------
def _urlsafe(raw: bytes) -> str:
    # "+" -> "-", "/" -> "_", "=" padding stripped
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _encode(value: str) -> bytes:
    return value.encode("utf-8", "surrogatepass")


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------
def hash_value(value: str) -> str:
    """Return the URL-safe, unpadded base64 SHA-256 digest of *value*.

    The output never contains ``+``, ``/`` or ``=``.
    """
    return _urlsafe(hashlib.sha256(_encode(value)).digest())


def random_string(length: int) -> str:
    """Return exactly *length* characters drawn from the URL-safe base64 alphabet.

    Uses :mod:`secrets`, so the result is suitable as key material.
    """
    if length <= 0:
        return ""
    # 4 base64 characters per 3 bytes; one extra byte covers rounding
    raw = secrets.token_bytes(math.ceil(length * 0.75) + 1)
    return _urlsafe(raw)[:length]


def generate_salt(length: int = DEFAULT_SALT_LENGTH) -> str:
    """Return a random salt of *length* characters containing no separator.

    Each character is drawn independently from the URL-safe alphabet minus
    ``-``, so the first ``-`` of a token is always the salt/hash boundary.
    """
    return "".join(secrets.choice(SALT_ALPHABET) for _ in range(length))


def generate_secret(length: int = DEFAULT_SECRET_LENGTH) -> str:
    """Generate a client secret from *length* random bytes, URL-safe encoded."""
    return _urlsafe(secrets.token_bytes(length))


def tokenize(secret: str, salt: str) -> str:
    """Derive the token for *secret* and *salt*: ``{salt}-{hash(salt-secret)}``."""
    return f"{salt}{TOKEN_SEPARATOR}{hash_value(f'{salt}{TOKEN_SEPARATOR}{secret}')}"


def verify_token(secret: object, token: object) -> bool:
    """Check *token* against *secret* using a timing-safe comparison.

    Args:
        secret: The client secret read from the CSRF cookie.
        token: The token presented by the client.

    Returns:
        ``True`` if *token* was derived from *secret*; ``False`` for any
        other input, including empty or non-string values.  Never raises.
    """
    if not secret or not isinstance(secret, str):
        return False
    if not token or not isinstance(token, str):
        return False

    sep = token.find(TOKEN_SEPARATOR)
    if sep < 0:
        return False

    expected = tokenize(secret, token[:sep])
    if len(token) != len(expected):
        return False

    return secrets.compare_digest(_encode(token), _encode(expected))
