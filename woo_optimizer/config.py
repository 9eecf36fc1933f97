"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``WOO_OPTIMIZER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Configuration only drives the CLI (where files go, how it logs, which
profile to use when none is given).  The derivation engine and assembler
never read it: their output depends on the server profile alone.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, field_validator

from woo_optimizer.models.server import ServerProfile, validate_profile

# ── Sub-config models ─────────────────────────────────────────────────────────


class OutputConfig(BaseModel):
    """Where and what ``generate`` writes."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "generated"
    write_recommendations: bool = True
    write_manifest: bool = True


class ProfileDefaultsConfig(BaseModel):
    """Server profile used when the CLI is given no profile file.

    Domain bounds are checked as a ``ServerProfile`` by ``to_profile()``, so a
    bad default is reported with the same field errors as a bad file.  Types
    are strict and unknown keys are rejected here, so a typo in ``[profile]``
    fails at load time.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cpu_cores: StrictInt = 4
    ram_gb: StrictInt = 8
    storage_type: str = "ssd"
    expected_traffic: StrictInt = 10000
    php_version: str = "8.2"
    db_engine: str = "mysql"
    has_redis: StrictBool = True
    has_varnish: StrictBool = False
    avg_product_count: StrictInt = 1000
    avg_orders_per_day: StrictInt = 100

    def to_profile(self, **overrides: Any) -> ServerProfile:
        """Validate these defaults, with non-None ``overrides`` applied."""
        raw = self.model_dump()
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return validate_profile(raw)


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    output: OutputConfig = OutputConfig()
    profile: ProfileDefaultsConfig = ProfileDefaultsConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file
            is absent the built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicitly given ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_path = default_path
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)

    # Also merge local.toml if present (gitignored local overrides)
    if config_path is not None:
        local_config_path = config_path.parent / "local.toml"
        if local_config_path.exists():
            raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply WOO_OPTIMIZER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply WOO_OPTIMIZER_* env vars to the raw config dict.

    Supported overrides:
      WOO_OPTIMIZER_OUTPUT_DIR  → raw["output"]["output_dir"]
      WOO_OPTIMIZER_LOG_LEVEL   → raw["logging"]["level"]
      WOO_OPTIMIZER_DEBUG       → raw["debug"]
    """
    if output_dir := os.environ.get("WOO_OPTIMIZER_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if log_level := os.environ.get("WOO_OPTIMIZER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("WOO_OPTIMIZER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        output=OutputConfig(**raw.get("output", {})),
        profile=ProfileDefaultsConfig(**raw.get("profile", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
