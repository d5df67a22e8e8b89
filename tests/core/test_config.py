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
"""Tests for the configuration system."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from cookiesession.core.config import Config, config_properties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_get_through_non_dict_returns_default(self):
        config = Config({"app": "plain"})
        assert config.get("app.name", "fallback") == "fallback"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "cookiesession.yaml"
        config_file.write_text("cookiesession:\n  session:\n    name: _app\n")
        config = Config.from_file(config_file)
        assert config.get("cookiesession.session.name") == "_app"
        assert config.loaded_sources == [str(config_file)]

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "cookiesession.toml"
        config_file.write_text("[cookiesession.session]\nmax_age = 600\n")
        config = Config.from_file(config_file)
        assert config.get("cookiesession.session.max_age") == 600

    def test_missing_file_is_empty(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("COOKIESESSION_SESSION_NAME", "env-cookie")
        config = Config({"cookiesession": {"session": {"name": "file-cookie"}}})
        assert config.get("cookiesession.session.name") == "env-cookie"

    def test_env_key_mapping(self):
        assert Config.env_key("cookiesession.session.max-age") == "COOKIESESSION_SESSION_MAX_AGE"
        assert Config.env_key("app.name") == "COOKIESESSION_APP_NAME"

    def test_get_section(self):
        config = Config({"cookiesession": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("cookiesession.logging.level") == {"root": "DEBUG"}
        assert config.get_section("cookiesession.missing") == {}


class TestProfileMerging:
    def test_profile_overlay_wins(self, tmp_path: Path):
        base = tmp_path / "app.yaml"
        base.write_text("cookiesession:\n  session:\n    name: base\n    quiet: false\n")
        (tmp_path / "app-prod.yaml").write_text("cookiesession:\n  session:\n    quiet: true\n")

        config = Config.from_file(base, active_profiles=["prod"])
        assert config.get("cookiesession.session.name") == "base"
        assert config.get("cookiesession.session.quiet") is True

    def test_missing_profile_file_is_skipped(self, tmp_path: Path):
        base = tmp_path / "app.yaml"
        base.write_text("app:\n  name: test\n")
        config = Config.from_file(base, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"


class TestPlaceholderResolution:
    def test_resolve_env_var(self, monkeypatch):
        monkeypatch.setenv("SESSION_SECRET", "s3cret")
        config = Config({"secret": "${SESSION_SECRET}"})
        assert config.get("secret") == "s3cret"

    def test_resolve_config_reference(self):
        config = Config({"app": {"name": "shop"}, "cookie": "_${app.name}_session"})
        assert config.get("cookie") == "_shop_session"

    def test_resolve_with_default(self):
        config = Config({"key": "${MISSING_VAR:fallback_value}"})
        assert config.get("key") == "fallback_value"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"key": "${NOWHERE_TO_BE_FOUND}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("key")

    def test_max_recursion_guard(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError, match="Max recursion depth"):
            config.get("a")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="cookiesession.session")
        @dataclass
        class Props:
            name: str = "_session"
            max_age: int = 0

        config = Config({"cookiesession": {"session": {"name": "_sid", "max_age": 60}}})
        props = config.bind(Props)
        assert props.name == "_sid"
        assert props.max_age == 60

    def test_bind_uses_defaults(self):
        @config_properties(prefix="cookiesession.session")
        @dataclass
        class Props:
            name: str = "_session"
            quiet: bool = False

        props = Config({}).bind(Props)
        assert props.name == "_session"
        assert props.quiet is False

    def test_bind_coerces_env_strings(self, monkeypatch):
        @config_properties(prefix="cookiesession.session")
        @dataclass
        class Props:
            max_age: int = 0
            quiet: bool = False

        monkeypatch.setenv("COOKIESESSION_SESSION_MAX_AGE", "120")
        monkeypatch.setenv("COOKIESESSION_SESSION_QUIET", "yes")
        props = Config({}).bind(Props)
        assert props.max_age == 120
        assert props.quiet is True

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            name: str = "x"

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
