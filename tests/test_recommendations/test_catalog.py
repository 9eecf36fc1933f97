"""
Tests for woo_optimizer/recommendations/catalog.py.

What we test
------------
build_plugins():
  - Redis Object Cache required iff Redis enabled.
  - Page-cache plugin required iff Varnish disabled.
  - Cloudflare required iff traffic strictly above 50000.
build_database_tasks():
  - Archiving entry carries the two-year order figure.
build_verification_commands():
  - Labelled commands; version-specific php-fpm test; Redis ping only with Redis.
build_rollout_steps():
  - Fixed order; Redis install step only with Redis.
"""

from __future__ import annotations

import pytest

from woo_optimizer.engine.derive import derive
from woo_optimizer.recommendations.catalog import (
    MAINTENANCE_TASKS,
    MONITORING_TOOLS,
    WOOCOMMERCE_TIPS,
    build_database_tasks,
    build_plugins,
    build_recommendations,
    build_rollout_steps,
    build_verification_commands,
)


def _required(profile) -> dict[str, bool]:
    return {p.name: p.required for p in build_plugins(profile)}


class TestPlugins:
    def test_reference_profile(self, base_profile):
        flags = _required(base_profile)
        assert flags["Redis Object Cache"] is True
        assert flags["WP Rocket or W3 Total Cache"] is True
        assert flags["Cloudflare"] is False
        assert flags["Query Monitor"] is False

    def test_redis_flag_follows_profile(self, make_profile):
        assert _required(make_profile(has_redis=False))["Redis Object Cache"] is False

    def test_varnish_makes_page_cache_optional(self, make_profile):
        assert _required(make_profile(has_varnish=True))["WP Rocket or W3 Total Cache"] is False

    @pytest.mark.parametrize("traffic, expected", [
        (50000, False),
        (50001, True),
        (250000, True),
    ])
    def test_cdn_threshold(self, make_profile, traffic, expected):
        assert _required(make_profile(expected_traffic=traffic))["Cloudflare"] is expected

    def test_order_is_stable(self, make_profile):
        a = [p.name for p in build_plugins(make_profile())]
        b = [p.name for p in build_plugins(make_profile(has_redis=False, has_varnish=True))]
        assert a == b
        assert len(a) == 7


class TestDatabaseTasks:
    def test_archive_figure(self):
        tasks = build_database_tasks(73000)
        assert tasks[-1] == "Archive orders older than 2 years (current: ~73000 orders)"

    def test_reference_profile_figure(self, base_profile, base_settings):
        recs = build_recommendations(base_profile, base_settings)
        assert "~73000 orders" in recs.database[-1]


class TestVerificationCommands:
    @staticmethod
    def _commands(profile) -> list[str]:
        return [c.command for c in build_verification_commands(profile)]

    def test_php_version_in_fpm_check(self, make_profile):
        assert "sudo php-fpm8.3 -t" in self._commands(make_profile(php_version="8.3"))

    def test_redis_ping_only_with_redis(self, make_profile):
        assert "redis-cli ping" in self._commands(make_profile(has_redis=True))
        assert "redis-cli ping" not in self._commands(make_profile(has_redis=False))

    def test_nginx_check_first(self, base_profile):
        first = build_verification_commands(base_profile)[0]
        assert first.command == "sudo nginx -t"
        assert first.label == "Test NGINX configuration"

    def test_every_command_labelled(self, base_profile):
        labels = {c.command: c.label for c in build_verification_commands(base_profile)}
        assert labels["redis-cli ping"] == "Check Redis connectivity"
        assert labels["ab -n 1000 -c 10 https://yoursite.com/"] == "Benchmark site with Apache Bench"
        assert all(labels.values())


class TestRolloutSteps:
    def test_order_with_redis(self, base_profile):
        steps = build_rollout_steps(base_profile)
        assert len(steps) == 11
        assert steps[0] == "Backup all current configuration files and database"
        assert steps[6] == "Install and configure Redis"
        assert steps[-1] == "Fine-tune based on actual traffic patterns"

    def test_redis_step_only_with_redis(self, make_profile):
        steps = build_rollout_steps(make_profile(has_redis=False))
        assert len(steps) == 10
        assert not any("Redis" in step for step in steps)

    def test_backup_before_kernel_changes(self, base_profile):
        steps = build_rollout_steps(base_profile)
        assert steps.index("Backup all current configuration files and database") < steps.index(
            "Apply system kernel optimizations (sysctl) and reboot"
        )


def test_fixed_lists_are_copied(base_profile, base_settings):
    recs = build_recommendations(base_profile, base_settings)
    assert recs.monitoring == list(MONITORING_TOOLS)
    assert recs.maintenance == list(MAINTENANCE_TASKS)
    assert recs.woocommerce == list(WOOCOMMERCE_TIPS)


def test_orders_scale_archive_figure(make_profile):
    profile = make_profile(avg_orders_per_day=1500)
    recs = build_recommendations(profile, derive(profile))
    assert recs.database[-1].endswith("(current: ~1095000 orders)")
