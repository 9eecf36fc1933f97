"""
Shared pytest fixtures for the WooCommerce optimizer test suite.

Provides:
  - ``base_profile_data``: raw field dict of the reference profile
    (4 cores, 8 GB, ssd, 10000 visitors, PHP 8.2, mysql, Redis on,
    Varnish off, 1000 products, 100 orders/day).
  - ``base_profile`` / ``base_settings``: the validated profile and its
    derived settings.
  - ``make_profile``: factory returning a validated profile with overrides.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from woo_optimizer.engine.derive import derive
from woo_optimizer.models.server import ServerProfile, validate_profile
from woo_optimizer.models.settings import DerivedSettings

BASE_PROFILE: dict[str, Any] = {
    "cpu_cores": 4,
    "ram_gb": 8,
    "storage_type": "ssd",
    "expected_traffic": 10000,
    "php_version": "8.2",
    "db_engine": "mysql",
    "has_redis": True,
    "has_varnish": False,
    "avg_product_count": 1000,
    "avg_orders_per_day": 100,
}


@pytest.fixture
def base_profile_data() -> dict[str, Any]:
    """A fresh copy of the reference profile fields."""
    return dict(BASE_PROFILE)


@pytest.fixture
def make_profile() -> Callable[..., ServerProfile]:
    """Factory: ``make_profile(ram_gb=16, has_redis=False)``."""

    def _make(**overrides: Any) -> ServerProfile:
        return validate_profile({**BASE_PROFILE, **overrides})

    return _make


@pytest.fixture
def base_profile(make_profile) -> ServerProfile:
    return make_profile()


@pytest.fixture
def base_settings(base_profile) -> DerivedSettings:
    return derive(base_profile)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WOO_OPTIMIZER_* variables from the developer's shell out of tests."""
    for key in ("WOO_OPTIMIZER_OUTPUT_DIR", "WOO_OPTIMIZER_LOG_LEVEL", "WOO_OPTIMIZER_DEBUG"):
        monkeypatch.delenv(key, raising=False)
