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
"""Tests for the CSRF token codec."""

from __future__ import annotations

import base64
import hashlib
import re

import pytest

from flycsrf.security.tokens import (
    generate_salt,
    generate_secret,
    hash_value,
    random_string,
    tokenize,
    verify_token,
)

_URLSAFE = re.compile(r"^[A-Za-z0-9_-]*$")


class TestHashValue:
    def test_matches_urlsafe_unpadded_sha256(self) -> None:
        expected = base64.urlsafe_b64encode(hashlib.sha256(b"abc-secret").digest()).decode().rstrip("=")
        assert hash_value("abc-secret") == expected

    @pytest.mark.parametrize("value", ["", "a", "salt-secret", "éè", "x" * 1000, "+/="])
    def test_output_has_no_plus_slash_or_padding(self, value: str) -> None:
        digest = hash_value(value)
        assert "+" not in digest
        assert "/" not in digest
        assert "=" not in digest
        assert len(digest) == 43

    def test_known_vector(self) -> None:
        # sha256("") in url-safe base64
        assert hash_value("") == "47DEQpj8HBSa-_TImW-5JCeuQeRkm5NMpJWZG3hSuFU"


class TestRandomString:
    @pytest.mark.parametrize("length", [1, 2, 3, 4, 7, 8, 16, 33])
    def test_exact_length(self, length: int) -> None:
        assert len(random_string(length)) == length

    def test_urlsafe_alphabet(self) -> None:
        for _ in range(50):
            assert _URLSAFE.match(random_string(24))

    def test_zero_length(self) -> None:
        assert random_string(0) == ""

    def test_values_differ(self) -> None:
        assert random_string(16) != random_string(16)


class TestGenerateSalt:
    def test_never_contains_separator(self) -> None:
        for _ in range(500):
            salt = generate_salt(8)
            assert "-" not in salt
            assert len(salt) == 8

    def test_long_salt(self) -> None:
        salt = generate_salt(4096)
        assert len(salt) == 4096
        assert "-" not in salt
        assert _URLSAFE.match(salt)

    def test_long_salt_token_verifies(self) -> None:
        secret = generate_secret()
        token = tokenize(secret, generate_salt(4096))
        assert token.index("-") == 4096
        assert verify_token(secret, token) is True

    def test_zero_length(self) -> None:
        assert generate_salt(0) == ""


class TestGenerateSecret:
    def test_default_length_is_18_bytes(self) -> None:
        # 18 bytes encode to exactly 24 base64 characters, no padding
        assert len(generate_secret()) == 24

    def test_custom_length(self) -> None:
        secret = generate_secret(32)
        assert len(base64.urlsafe_b64decode(secret + "=" * (-len(secret) % 4))) == 32

    def test_urlsafe(self) -> None:
        assert _URLSAFE.match(generate_secret())


class TestTokenize:
    def test_layout(self) -> None:
        token = tokenize("s3cret", "abcdefgh")
        assert token == "abcdefgh-" + hash_value("abcdefgh-s3cret")

    def test_different_salts_give_different_tokens(self) -> None:
        secret = generate_secret()
        first = tokenize(secret, "saltAAAA")
        second = tokenize(secret, "saltBBBB")
        assert first != second
        assert verify_token(secret, first) is True
        assert verify_token(secret, second) is True


class TestVerifyToken:
    def test_roundtrip(self) -> None:
        secret = generate_secret()
        for _ in range(100):
            assert verify_token(secret, tokenize(secret, generate_salt(8))) is True

    def test_other_secret_rejected(self) -> None:
        token = tokenize(generate_secret(), generate_salt(8))
        assert verify_token(generate_secret(), token) is False

    def test_salt_length_is_not_fixed(self) -> None:
        secret = generate_secret()
        assert verify_token(secret, tokenize(secret, "abc")) is True

    @pytest.mark.parametrize(
        "secret, token",
        [
            ("", "salt-hash"),
            ("secret", ""),
            (None, "salt-hash"),
            ("secret", None),
            (123, "salt-hash"),
            ("secret", ["salt-hash"]),
            ("secret", "no_separator_here"),
            ("secret", "garbage-notahash"),
            ("secret", "-"),
            ("secret", "\ud800-lone-surrogate"),
        ],
    )
    def test_rejects_without_raising(self, secret: object, token: object) -> None:
        assert verify_token(secret, token) is False

    def test_length_mismatch_rejected(self) -> None:
        secret = generate_secret()
        token = tokenize(secret, "abcdefgh")
        assert verify_token(secret, token + "A") is False
        assert verify_token(secret, token[:-1]) is False

    def test_tampered_hash_rejected(self) -> None:
        secret = generate_secret()
        token = tokenize(secret, "abcdefgh")
        flipped = token[:-1] + ("A" if token[-1] != "A" else "B")
        assert verify_token(secret, flipped) is False

    def test_empty_salt_only_valid_with_secret(self) -> None:
        secret = generate_secret()
        token = tokenize(secret, "")
        assert token.startswith("-")
        assert verify_token(secret, token) is True
        assert verify_token(generate_secret(), token) is False
