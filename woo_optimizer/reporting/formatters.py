"""
Plain-text formatters for CLI reporting commands.

All formatters accept models from ``woo_optimizer.models`` and return
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Settings summary layout::

    === Derived Settings ===
      Profile: 4 cores, 8 GB RAM, ssd, PHP 8.2, mysql
      Caches:  Redis on, Varnish off
      Traffic: 10000 visitors/day

      [PHP-FPM]
        Worker target               12
        pm.max_children             18
      ...
"""

from __future__ import annotations

from woo_optimizer.models.output import OptimizerOutput, Recommendations
from woo_optimizer.models.server import InvalidInputError, ServerProfile
from woo_optimizer.models.settings import DerivedSettings

_LABEL_WIDTH = 28


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def _rows(title: str, rows: list[tuple[str, object]]) -> list[str]:
    lines = ["", f"  [{title}]"]
    for label, value in rows:
        lines.append(f"    {label:<{_LABEL_WIDTH}}{value}")
    return lines


# ── Profile / settings ────────────────────────────────────────────────────────


def format_profile_header(profile: ServerProfile) -> str:
    """Two-to-three line description of the input profile."""
    return "\n".join([
        f"  Profile: {profile.cpu_cores} cores, {profile.ram_gb} GB RAM, "
        f"{profile.storage_type}, PHP {profile.php_version}, {profile.db_engine}",
        f"  Caches:  Redis {_on_off(profile.has_redis)}, Varnish {_on_off(profile.has_varnish)}",
        f"  Traffic: {profile.expected_traffic} visitors/day, "
        f"{profile.avg_product_count} products, {profile.avg_orders_per_day} orders/day",
    ])


def format_settings_summary(profile: ServerProfile, settings: DerivedSettings) -> str:
    """Format every derived value grouped by target system.

    Args:
        profile:  The input profile (header line).
        settings: ``derive(profile)`` result.

    Returns:
        Multi-line string.
    """
    s = settings
    lines: list[str] = ["", "=== Derived Settings ===", format_profile_header(profile)]

    lines += _rows("MEMORY", [("Memory budget", f"{s.memory_mb} MB")])
    lines += _rows("PHP-FPM", [
        ("Worker target", s.fpm_workers),
        ("pm.max_children", s.fpm_max_children),
        ("pm.start_servers", s.fpm_start_servers),
        ("pm.min_spare_servers", s.fpm_min_spare_servers),
        ("pm.max_spare_servers", s.fpm_max_spare_servers),
        ("Session backend", s.session_backend),
    ])
    lines += _rows("DATABASE", [
        ("innodb_buffer_pool_size", f"{s.innodb_buffer_pool_mb} MB"),
        ("innodb_buffer_pool_instances", s.innodb_buffer_pool_instances),
        ("innodb_log_file_size", f"{s.innodb_log_file_mb} MB"),
        ("innodb_io_capacity", f"{s.innodb_io_capacity} / {s.innodb_io_capacity_max} max"),
        ("innodb io threads (r/w)", f"{s.innodb_read_io_threads} / {s.innodb_write_io_threads}"),
        ("max_connections", s.max_connections),
        ("query_cache_size", f"{s.query_cache_mb} MB"),
        ("thread_cache_size", s.thread_cache_size),
        ("table_open_cache", s.table_open_cache),
        ("table_definition_cache", s.table_definition_cache),
        ("performance_schema", "ON" if s.performance_schema else "OFF"),
    ])
    if profile.has_redis:
        lines += _rows("REDIS", [("maxmemory", f"{s.redis_max_memory_mb} MB")])
    else:
        lines += ["", "  [REDIS]", "    (disabled - no redis.conf generated)"]
    lines += _rows("NGINX", [
        ("worker_processes", s.nginx_worker_processes),
        ("worker_connections", s.nginx_worker_connections),
    ])
    lines += _rows("KERNEL", [
        ("kernel.shmmax", f"{s.kernel_shmmax} bytes"),
        ("kernel.shmall", f"{s.kernel_shmall} pages"),
    ])
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def _bullets(title: str, items: list[str]) -> list[str]:
    return ["", f"  [{title}]", *(f"    - {item}" for item in items)]


def format_recommendations(recs: Recommendations) -> str:
    """Format all recommendation lists; required plugins are tagged."""
    lines: list[str] = ["", "=== Recommendations ==="]

    lines += ["", "  [PLUGINS]"]
    for plugin in recs.plugins:
        tag = "[REQUIRED]" if plugin.required else "[optional]"
        lines.append(f"    {tag:<10}  {plugin.name} - {plugin.purpose}")
        lines.append(f"                {plugin.url}")

    lines += _bullets("MONITORING", recs.monitoring)
    lines += _bullets("WOOCOMMERCE", recs.woocommerce)
    lines += _bullets("DATABASE", recs.database)
    lines += _bullets("MAINTENANCE", recs.maintenance)
    lines += ["", "  [ROLLOUT]", *(f"    {i:>2}. {step}" for i, step in enumerate(recs.rollout, start=1))]
    lines += ["", "  [VERIFY]"]
    for cmd in recs.verification:
        lines.append(f"    # {cmd.label}")
        lines.append(f"    $ {cmd.command}")
    return "\n".join(lines)


# ── Documents ─────────────────────────────────────────────────────────────────


def format_document_list(output: OptimizerOutput) -> str:
    """Table of generated documents: name, filename, size, title."""
    header = f"    {'Name':<12}  {'Filename':<26}  {'Lines':>5}  Title"
    lines = ["", "=== Generated Documents ===", header, "    " + "-" * (len(header) - 4)]
    for doc in output.all_documents():
        n_lines = doc.body.count("\n") + 1
        lines.append(f"    {doc.name:<12}  {doc.filename:<26}  {n_lines:>5}  {doc.title}")
    if not output.has_object_cache:
        lines.append("    (redis.conf omitted: object cache disabled)")
    return "\n".join(lines)


# ── Validation failures ───────────────────────────────────────────────────────


def format_validation_errors(exc: InvalidInputError) -> str:
    """List each invalid field with its reason and the rejected value."""
    lines = [f"Invalid server profile: {len(exc.violations)} field(s) rejected."]
    for v in exc.violations:
        got = "missing" if v.value is None else repr(v.value)
        lines.append(f"  {v.field}: {v.message} (got {got})")
    return "\n".join(lines)
