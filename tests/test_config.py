"""Unit tests for Config (stackforge.config).

Tests cover:
- Defaults and blank project names
- Enum coercion and validation
- save/load round trip
- from_env
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from stackforge.config import Config, OutputFormat
from stackforge.resolver.models import ResolverProfile


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.project_name == "my-app"
        assert config.profile is ResolverProfile.CLASSIC
        assert config.catalog_path is None
        assert config.output_format is OutputFormat.TABLE

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_uses_default(self, name):
        assert Config(project_name=name).project_name == "my-app"

    @pytest.mark.unit
    def test_name_is_stripped(self):
        assert Config(project_name="  shop ").project_name == "shop"

    @pytest.mark.unit
    def test_string_enums_coerced(self):
        config = Config(profile="delegated", output_format="markdown")
        assert config.profile is ResolverProfile.DELEGATED
        assert config.output_format is OutputFormat.MARKDOWN

    @pytest.mark.unit
    def test_invalid_profile(self):
        with pytest.raises(ValidationError):
            Config(profile="turbo")

    @pytest.mark.unit
    def test_output_format_values(self):
        assert [f.value for f in OutputFormat] == ["table", "json", "script", "markdown"]


# ---------------------------------------------------------------------------
# Config.save / Config.load
# ---------------------------------------------------------------------------


class TestConfigSaveLoad:
    @pytest.mark.unit
    def test_roundtrip(self, tmp_path: Path):
        config = Config(
            project_name="roundtrip",
            profile=ResolverProfile.DELEGATED,
            catalog_path=tmp_path / "stack.yaml",
            output_format=OutputFormat.JSON,
        )
        saved = config.save(tmp_path / "config.json")
        assert saved == tmp_path / "config.json"
        assert Config.load(saved) == config

    @pytest.mark.unit
    def test_saved_file_is_json(self, tmp_path: Path):
        path = Config(project_name="x").save(tmp_path / "c.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["project_name"] == "x"
        assert data["profile"] == "classic"

    @pytest.mark.unit
    def test_save_creates_parent_dirs(self, tmp_path: Path):
        deep = tmp_path / "deep" / "nested" / "config.json"
        Config().save(deep)
        assert deep.exists()

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(OSError):
            Config.load(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError):
            Config.load(path)


# ---------------------------------------------------------------------------
# Config.from_env
# ---------------------------------------------------------------------------


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config.from_env() == Config()

    @pytest.mark.unit
    def test_from_env_all_vars(self):
        env = {
            "STACKFORGE_PROJECT_NAME": "env-app",
            "STACKFORGE_PROFILE": "delegated",
            "STACKFORGE_CATALOG": "/tmp/stack.yaml",
            "STACKFORGE_FORMAT": "script",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.project_name == "env-app"
        assert config.profile is ResolverProfile.DELEGATED
        assert config.catalog_path == Path("/tmp/stack.yaml")
        assert config.output_format is OutputFormat.SCRIPT

    @pytest.mark.unit
    def test_from_env_empty_values_ignored(self):
        with patch.dict(os.environ, {"STACKFORGE_PROFILE": ""}, clear=True):
            assert Config.from_env().profile is ResolverProfile.CLASSIC

    @pytest.mark.unit
    def test_from_env_invalid_format(self):
        with patch.dict(os.environ, {"STACKFORGE_FORMAT": "yaml"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()
