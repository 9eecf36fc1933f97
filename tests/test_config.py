"""Tests for woo_optimizer.config: TOML layering and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from woo_optimizer.config import AppConfig, LoggingConfig, ProfileDefaultsConfig, load_config
from woo_optimizer.models.server import InvalidInputError
from woo_optimizer.taxonomy.server_taxonomy import StorageType


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_reference_profile() -> None:
    profile = AppConfig().profile.to_profile()
    assert profile.cpu_cores == 4
    assert profile.ram_gb == 8
    assert profile.has_redis is True


def test_load_explicit_file(tmp_path: Path) -> None:
    cfg_path = _write(tmp_path / "app.toml", """
[output]
output_dir = "out/configs"
write_manifest = false

[profile]
ram_gb = 32
storage_type = "nvme"
""")
    cfg = load_config(cfg_path)
    assert cfg.output.output_dir == "out/configs"
    assert cfg.output.write_manifest is False
    assert cfg.output.write_recommendations is True
    profile = cfg.profile.to_profile()
    assert profile.ram_gb == 32
    assert profile.storage_type is StorageType.NVME
    assert profile.cpu_cores == 4


def test_local_toml_overrides(tmp_path: Path) -> None:
    cfg_path = _write(tmp_path / "default.toml", '[logging]\nlevel = "INFO"\n[profile]\nram_gb = 16\n')
    _write(tmp_path / "local.toml", '[logging]\nlevel = "debug"\n')
    cfg = load_config(cfg_path)
    assert cfg.logging.level == "DEBUG"
    assert cfg.profile.ram_gb == 16


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg_path = _write(tmp_path / "app.toml", '[output]\noutput_dir = "a"\n')
    monkeypatch.setenv("WOO_OPTIMIZER_OUTPUT_DIR", "from-env")
    monkeypatch.setenv("WOO_OPTIMIZER_LOG_LEVEL", "warning")
    monkeypatch.setenv("WOO_OPTIMIZER_DEBUG", "true")
    cfg = load_config(cfg_path)
    assert cfg.output.output_dir == "from-env"
    assert cfg.logging.level == "WARNING"
    assert cfg.debug is True


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_bad_log_level_rejected() -> None:
    with pytest.raises(ValidationError):
        LoggingConfig(level="CHATTY")


def test_profile_overrides_ignore_none() -> None:
    profile = ProfileDefaultsConfig().to_profile(ram_gb=64, has_redis=None)
    assert profile.ram_gb == 64
    assert profile.has_redis is True


def test_bad_profile_defaults_reported_as_invalid_input() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        ProfileDefaultsConfig(ram_gb=1).to_profile()
    assert excinfo.value.fields == ["ram_gb"]


def test_profile_table_typo_rejected(tmp_path: Path) -> None:
    cfg_path = _write(tmp_path / "app.toml", "[profile]\nram_gbb = 64\n")
    with pytest.raises(ValidationError, match="ram_gbb"):
        load_config(cfg_path)


def test_profile_table_non_bool_toggle_rejected(tmp_path: Path) -> None:
    cfg_path = _write(tmp_path / "app.toml", '[profile]\nhas_redis = "yes"\n')
    with pytest.raises(ValidationError, match="has_redis"):
        load_config(cfg_path)


def test_profile_table_string_count_rejected(tmp_path: Path) -> None:
    cfg_path = _write(tmp_path / "app.toml", '[profile]\ncpu_cores = "8"\n')
    with pytest.raises(ValidationError):
        load_config(cfg_path)
