"""TOML configuration loader with env overrides."""

import logging
import os
import tomllib
from pathlib import Path

from gemini_fallback.domain.ports.config import AppConfig, GeminiConfig, GenerationOptions

logger = logging.getLogger(__name__)


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _set_number(config: dict, section: str, key: str, env_name: str, cast: type) -> None:
    """Set config[section][key] from a numeric env var; warn and skip invalid values."""
    raw = os.getenv(env_name)
    if not raw:
        return
    try:
        config.setdefault(section, {})[key] = cast(raw)
    except ValueError:
        logger.warning("Invalid %s env value: %r, ignoring", env_name, raw)


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    if key := os.getenv("GEMINI_API_KEY"):
        config.setdefault("gemini", {})["api_key"] = key.strip()
    if base_url := os.getenv("GEMINI_BASE_URL"):
        config.setdefault("gemini", {})["base_url"] = base_url.strip()
    if models := os.getenv("GEMINI_MODELS"):
        config.setdefault("gemini", {})["models"] = [m.strip() for m in models.split(",") if m.strip()]
    _set_number(config, "generation", "temperature", "GEMINI_TEMPERATURE", float)
    _set_number(config, "generation", "max_output_tokens", "GEMINI_MAX_OUTPUT_TOKENS", int)
    _set_number(config, "generation", "timeout", "GEMINI_TIMEOUT_MS", int)
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()
    if path := os.getenv("LOG_FILE"):
        config.setdefault("logging", {})["file"] = path.strip()
    return config


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Loads default.toml, then development.toml if exists.
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parent.parent.parent.parent / "config"

    config: dict = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = _load_toml(default_path)

    dev_path = config_dir / "development.toml"
    if dev_path.exists():
        dev_config = _load_toml(dev_path)
        for key, value in dev_config.items():
            if isinstance(value, dict) and key in config and isinstance(config[key], dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

    config = _apply_env_overrides(config)

    gemini = GeminiConfig(**(config.get("gemini") or {}))
    generation = GenerationOptions.model_validate(config.get("generation") or {})
    logging_raw = config.get("logging") or {}
    log_level = logging_raw.get("level", "INFO")
    log_file = (logging_raw.get("file") or "").strip()
    log_rotation_max_mb = int(logging_raw.get("log_rotation_max_mb", 5))
    log_rotation_backups = int(logging_raw.get("log_rotation_backups", 3))

    return AppConfig(
        gemini=gemini,
        generation=generation,
        log_level=log_level,
        log_file=log_file,
        log_rotation_max_mb=log_rotation_max_mb,
        log_rotation_backups=log_rotation_backups,
    )
