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
"""Tests for the configuration layer."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from flycsrf.core.config import Config, config_properties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"flycsrf": {"csrf": {"salt_length": 12}}})
        assert config.get("flycsrf.csrf.salt_length") == 12

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_false_value_is_not_default(self):
        config = Config({"flycsrf": {"csrf": {"cookie": False}}})
        assert config.get("flycsrf.csrf.cookie", True) is False

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "flycsrf.yaml"
        config_file.write_text("flycsrf:\n  csrf:\n    cookie:\n      key: xsrf\n")
        config = Config.from_file(config_file)
        assert config.get("flycsrf.csrf.cookie.key") == "xsrf"
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "flycsrf.toml"
        config_file.write_text('[flycsrf.csrf]\nignore_methods = ["GET"]\n')
        config = Config.from_file(config_file)
        assert config.get("flycsrf.csrf.ignore_methods") == ["GET"]

    def test_missing_file_is_empty(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("FLYCSRF_CSRF_SECRET_LENGTH", "32")
        config = Config({"flycsrf": {"csrf": {"secret_length": 18}}})
        assert config.get("flycsrf.csrf.secret_length") == "32"

    def test_get_section(self):
        config = Config({"flycsrf": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("flycsrf.logging.level") == {"root": "DEBUG"}
        assert config.get_section("flycsrf.absent") == {}


class TestPlaceholders:
    def test_env_placeholder(self, monkeypatch):
        monkeypatch.setenv("CSRF_DOMAIN", "example.com")
        config = Config({"flycsrf": {"csrf": {"cookie": {"domain": "${CSRF_DOMAIN}"}}}})
        assert config.get("flycsrf.csrf.cookie.domain") == "example.com"

    def test_config_reference(self):
        config = Config({"site": {"host": "example.org"}, "cookie": {"domain": "${site.host}"}})
        assert config.get("cookie.domain") == "example.org"

    def test_default_value(self):
        config = Config({"cookie": {"path": "${CSRF_COOKIE_PATH_UNSET:/}"}})
        assert config.get("cookie.path") == "/"

    def test_unresolvable_placeholder(self):
        config = Config({"cookie": {"path": "${NOPE_NOT_SET_ANYWHERE}"}})
        with pytest.raises(ValueError):
            config.get("cookie.path")

    def test_circular_reference(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="flycsrf.csrf")
        @dataclass
        class Lengths:
            salt_length: int = 8
            secret_length: int = 18

        config = Config({"flycsrf": {"csrf": {"salt_length": 10}}})
        bound = config.bind(Lengths)
        assert bound.salt_length == 10
        assert bound.secret_length == 18

    def test_bind_coerces_env_strings(self, monkeypatch):
        @config_properties(prefix="flycsrf.csrf")
        @dataclass
        class Settings:
            salt_length: int = 8
            strict: bool = False

        monkeypatch.setenv("FLYCSRF_CSRF_SALT_LENGTH", "16")
        monkeypatch.setenv("FLYCSRF_CSRF_STRICT", "yes")
        bound = Config({}).bind(Settings)
        assert bound.salt_length == 16
        assert bound.strict is True

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)


class TestProfileConfigMerging:
    def test_merge_profile_config(self, tmp_path):
        base = tmp_path / "flycsrf.yaml"
        base.write_text("flycsrf:\n  csrf:\n    salt_length: 8\n    secret_length: 18\n")

        profile = tmp_path / "flycsrf-prod.yaml"
        profile.write_text("flycsrf:\n  csrf:\n    secret_length: 32\n    cookie:\n      secure: true\n")

        config = Config.from_file(base, active_profiles=["prod"])
        assert config.get("flycsrf.csrf.salt_length") == 8
        assert config.get("flycsrf.csrf.secret_length") == 32
        assert config.get("flycsrf.csrf.cookie.secure") is True

    def test_later_profile_wins(self, tmp_path):
        base = tmp_path / "flycsrf.yaml"
        base.write_text("flycsrf:\n  csrf:\n    cookie:\n      key: base\n")
        (tmp_path / "flycsrf-dev.yaml").write_text("flycsrf:\n  csrf:\n    cookie:\n      key: dev\n")
        (tmp_path / "flycsrf-local.yaml").write_text("flycsrf:\n  csrf:\n    cookie:\n      key: local\n")

        config = Config.from_file(base, active_profiles=["dev", "local"])
        assert config.get("flycsrf.csrf.cookie.key") == "local"

    def test_missing_profile_file_is_skipped(self, tmp_path):
        base = tmp_path / "flycsrf.yaml"
        base.write_text("flycsrf:\n  csrf:\n    salt_length: 9\n")
        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("flycsrf.csrf.salt_length") == 9
