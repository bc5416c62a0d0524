"""Tests for TOML config loader."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

from gemini_fallback.domain.ports.config import DEFAULT_MODELS
from gemini_fallback.infrastructure.config.toml_loader import _apply_env_overrides, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(self):
        """Loads the bundled default.toml."""
        with patch.dict(os.environ, {}, clear=True):
            config = load_config()

        assert config.gemini.models == list(DEFAULT_MODELS)
        assert config.generation.temperature == 0.7
        assert config.generation.max_output_tokens == 4096
        assert config.generation.timeout == 60000
        assert config.gemini.api_key == ""

    def test_loads_from_custom_dir(self):
        """Loads config from custom directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[gemini]
models = ["x", "y"]

[generation]
temperature = 0.1
timeout = 1000
""")
            with patch.dict(os.environ, {}, clear=True):
                config = load_config(Path(tmpdir))

            assert config.gemini.resolved_models() == ("x", "y")
            assert config.generation.temperature == 0.1
            assert config.generation.timeout == 1000
            assert config.generation.max_output_tokens == 4096

    def test_merges_development_config(self):
        """Merges development.toml over default.toml."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[gemini]
base_url = "https://a.test"
models = ["x"]
""")
            (Path(tmpdir) / "development.toml").write_text("""
[gemini]
base_url = "https://b.test"
""")
            with patch.dict(os.environ, {}, clear=True):
                config = load_config(Path(tmpdir))

            # Should be overridden
            assert config.gemini.base_url == "https://b.test"
            # Should be preserved from default
            assert config.gemini.models == ["x"]

    def test_handles_missing_files(self):
        """Empty directory uses model defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.dict(os.environ, {}, clear=True):
                config = load_config(Path(tmpdir))

            assert config.gemini.resolved_models() == DEFAULT_MODELS
            assert config.log_level == "INFO"

    def test_empty_models_fall_back_to_defaults(self):
        """An empty models list resolves to the default order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("[gemini]\nmodels = []\n")
            with patch.dict(os.environ, {}, clear=True):
                config = load_config(Path(tmpdir))

            assert config.gemini.resolved_models() == DEFAULT_MODELS


class TestApplyEnvOverrides:
    """Tests for _apply_env_overrides function."""

    def test_api_key_override(self):
        """GEMINI_API_KEY env var sets the credential."""
        with patch.dict(os.environ, {"GEMINI_API_KEY": " secret "}):
            result = _apply_env_overrides({})
        assert result["gemini"]["api_key"] == "secret"

    def test_models_override(self):
        """GEMINI_MODELS is a comma separated fallback order."""
        with patch.dict(os.environ, {"GEMINI_MODELS": "a, b,,c "}):
            result = _apply_env_overrides({})
        assert result["gemini"]["models"] == ["a", "b", "c"]

    def test_numeric_overrides(self):
        """Generation env vars are converted to numbers."""
        env = {
            "GEMINI_TEMPERATURE": "0.25",
            "GEMINI_MAX_OUTPUT_TOKENS": "512",
            "GEMINI_TIMEOUT_MS": "15000",
        }
        with patch.dict(os.environ, env):
            result = _apply_env_overrides({})
        assert result["generation"] == {"temperature": 0.25, "max_output_tokens": 512, "timeout": 15000}

    def test_invalid_timeout_ignored(self):
        """Invalid GEMINI_TIMEOUT_MS value is ignored."""
        config = {"generation": {"timeout": 60000}}
        with patch.dict(os.environ, {"GEMINI_TIMEOUT_MS": "soon"}):
            result = _apply_env_overrides(config)
        assert result["generation"]["timeout"] == 60000

    def test_log_level_override(self):
        """LOG_LEVEL env var overrides config."""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            result = _apply_env_overrides({})
        assert result["logging"]["level"] == "DEBUG"

    def test_env_key_reaches_app_config(self):
        """Env overrides flow through load_config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.dict(os.environ, {"GEMINI_API_KEY": "k", "GEMINI_MODELS": "only"}, clear=True):
                config = load_config(Path(tmpdir))

        assert config.gemini.api_key == "k"
        assert config.gemini.resolved_models() == ("only",)
