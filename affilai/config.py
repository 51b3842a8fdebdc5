"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      committed static defaults
  2. ``config/local.toml``        optional local overrides (gitignored)
  3. ``.env``                     local env overrides (gitignored)
  4. Environment variables        ``AFFILAI_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from affilai.taxonomy.platforms import Platform

# ── Sub-config models ─────────────────────────────────────────────────────────


class DatabaseConfig(BaseModel):
    """SQLite database connection settings."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/affilai.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/affilai.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class DiscoveryConfig(BaseModel):
    """Platform discovery thresholds used by the generation flows."""

    model_config = ConfigDict(frozen=True)

    min_audience_match: float = 0.3
    max_platforms: int = 5
    fallback_platform: Platform = Platform.INSTAGRAM

    @field_validator("min_audience_match")
    @classmethod
    def validate_min_match(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"min_audience_match must be in [0.0, 1.0), got {v}.")
        return v

    @field_validator("max_platforms")
    @classmethod
    def validate_max_platforms(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_platforms must be >= 1, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()``, which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    discovery: DiscoveryConfig = DiscoveryConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOCAL_OVERRIDE_NAME = "local.toml"

# env var -> (section, key, converter); section None means top level.
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "AFFILAI_DB_PATH":            ("database",  "db_path",            str),
    "AFFILAI_LOG_LEVEL":          ("logging",   "level",              str),
    "AFFILAI_MIN_AUDIENCE_MATCH": ("discovery", "min_audience_match", float),
    "AFFILAI_FALLBACK_PLATFORM":  ("discovery", "fallback_platform",  str),
    "AFFILAI_DEBUG":              (None,        "debug",              lambda v: v.lower() in ("1", "true", "yes")),
}


def _find_project_root() -> Path:
    """Nearest ancestor of this file holding ``pyproject.toml``."""
    for candidate in Path(__file__).resolve().parents:
        if (candidate / "pyproject.toml").exists():
            return candidate
    return _PROJECT_ROOT


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``$AFFILAI_CONFIG`` when set, else ``<project_root>/config/default.toml``.
            A ``local.toml`` beside it is merged on top.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        env_path = os.environ.get("AFFILAI_CONFIG")
        config_path = Path(env_path) if env_path else root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(config_path)
    local_path = config_path.parent / LOCAL_OVERRIDE_NAME
    if local_path.exists() and local_path != config_path:
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = dict(base)
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply the ``AFFILAI_*`` variables listed in ``_ENV_OVERRIDES``.

    Values that fail conversion (e.g. a non-numeric
    ``AFFILAI_MIN_AUDIENCE_MATCH``) raise ``ValueError``.
    """
    for env_name, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = convert(value)
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Hoist ``[project]`` keys to the top level and validate."""
    project = raw.pop("project", {})
    raw.setdefault("debug", project.get("debug", False))
    return AppConfig.model_validate(raw)
