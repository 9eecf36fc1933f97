"""
Derivation engine: maps a ``ServerProfile`` onto ``DerivedSettings``.

Formulas (memory in MB, ``//`` is floor division)
--------------------------------------------------
PHP-FPM pool:
    workers      = max(10, min(cores * 3, memory // 128))
    max_children = floor(workers * 1.5)
    start        = ceil(workers / 4)
    min_spare    = ceil(workers / 5)
    max_spare    = ceil(workers / 2)

InnoDB:
    buffer_pool  = memory * 50%
    log_file     = min(512, buffer_pool // 4)
    instances    = min(cores, buffer_pool // 1024)      one per GB of pool
    io_threads   = min(64, cores * 2)
    io_capacity  = fixed lookup by storage class (see ``policy``)

Connections and caches:
    max_connections = max(151, workers + 50)
    query_cache     = 0 with Redis, else min(256, memory * 5%)
    redis_maxmemory = memory * 15% with Redis, else 0
    thread_cache    = min(100, cores * 10)
    table_open      = min(4000, products * 4)
    table_def       = min(2000, products * 2)

NGINX:
    worker_processes   = cores
    worker_connections = 4096 if traffic > 50000 else 2048

Kernel shared memory (80% of RAM):
    shmmax = memory * 1024 * 1024 * 80%     bytes
    shmall = memory * 256 * 80%             4KB pages

Percentages are applied in integer arithmetic (``x * 15 // 100``), which is
floor(x * 0.15) without float rounding surprises.

The engine trusts its input: ``ServerProfile`` has already been validated,
so every formula is total and no result can be negative.
"""

from __future__ import annotations

import logging
import math

from woo_optimizer.engine import policy
from woo_optimizer.models.server import HIGH_TRAFFIC_THRESHOLD, ServerProfile
from woo_optimizer.models.settings import DerivedSettings
from woo_optimizer.taxonomy.server_taxonomy import SessionBackend

logger = logging.getLogger(__name__)


def _pct(value: int, pct: int) -> int:
    """floor(value * pct / 100) for non-negative integers."""
    return value * pct // 100


def _clamp(value: int, lo: int, hi: int) -> int:
    # lower bound wins when the bounds cross
    return max(lo, min(value, hi))


def fpm_worker_target(cpu_cores: int, memory_mb: int) -> int:
    """Worker-pool target fitting both the CPU and 128MB-per-worker envelopes."""
    return _clamp(
        cpu_cores * policy.FPM_WORKERS_PER_CORE,
        policy.FPM_MIN_WORKERS,
        memory_mb // policy.FPM_MB_PER_WORKER,
    )


def derive(profile: ServerProfile) -> DerivedSettings:
    """Compute every configuration value for one server profile.

    Args:
        profile: Validated server profile.  Not modified.

    Returns:
        Frozen ``DerivedSettings`` snapshot shared by all documents.
    """
    cores  = profile.cpu_cores
    memory = profile.ram_gb * 1024

    # ── PHP-FPM ───────────────────────────────────────────────────────────────
    workers = fpm_worker_target(cores, memory)
    max_children = workers * 3 // 2
    start_servers = math.ceil(workers / 4)
    min_spare = math.ceil(workers / 5)
    max_spare = math.ceil(workers / 2)

    # ── InnoDB ────────────────────────────────────────────────────────────────
    buffer_pool = _pct(memory, policy.BUFFER_POOL_PCT)
    log_file = min(policy.DB_MAX_LOG_FILE_MB, buffer_pool // 4)
    instances = min(cores, buffer_pool // 1024)
    io_threads = min(policy.DB_MAX_IO_THREADS, cores * 2)
    io = policy.IO_CAPACITY_BY_STORAGE[profile.storage_type]

    max_connections = max(
        policy.DB_DEFAULT_MAX_CONNECTIONS, workers + policy.DB_CONNECTION_HEADROOM
    )

    # Redis takes over query result caching; don't pay for both.
    if profile.has_redis:
        query_cache = 0
        redis_memory = _pct(memory, policy.REDIS_MEMORY_PCT)
        session_backend = SessionBackend.REDIS
    else:
        query_cache = min(policy.DB_MAX_QUERY_CACHE_MB, _pct(memory, policy.QUERY_CACHE_PCT))
        redis_memory = 0
        session_backend = SessionBackend.FILES

    worker_connections = (
        policy.NGINX_CONNECTIONS_HIGH_TRAFFIC
        if profile.expected_traffic > HIGH_TRAFFIC_THRESHOLD
        else policy.NGINX_CONNECTIONS_DEFAULT
    )

    settings = DerivedSettings(
        memory_mb=memory,
        fpm_workers=workers,
        fpm_max_children=max_children,
        fpm_start_servers=start_servers,
        fpm_min_spare_servers=min_spare,
        fpm_max_spare_servers=max_spare,
        innodb_buffer_pool_mb=buffer_pool,
        innodb_buffer_pool_instances=instances,
        innodb_log_file_mb=log_file,
        innodb_read_io_threads=io_threads,
        innodb_write_io_threads=io_threads,
        innodb_io_capacity=io.io_capacity,
        innodb_io_capacity_max=io.io_capacity_max,
        max_connections=max_connections,
        query_cache_mb=query_cache,
        thread_cache_size=min(policy.DB_MAX_THREAD_CACHE, cores * 10),
        table_open_cache=min(policy.DB_MAX_TABLE_OPEN_CACHE, profile.avg_product_count * 4),
        table_definition_cache=min(policy.DB_MAX_TABLE_DEF_CACHE, profile.avg_product_count * 2),
        performance_schema=profile.ram_gb >= policy.PERFORMANCE_SCHEMA_MIN_RAM_GB,
        redis_max_memory_mb=redis_memory,
        session_backend=session_backend,
        nginx_worker_processes=cores,
        nginx_worker_connections=worker_connections,
        kernel_shmmax=_pct(memory * 1024 * 1024, policy.KERNEL_SHM_PCT),
        kernel_shmall=_pct(memory * 256, policy.KERNEL_SHM_PCT),
        archivable_orders=profile.avg_orders_per_day * policy.ORDER_RETENTION_DAYS,
    )

    logger.debug(
        "Derived settings: memory=%dMB fpm_workers=%d max_children=%d "
        "buffer_pool=%dMB max_connections=%d redis=%dMB",
        settings.memory_mb,
        settings.fpm_workers,
        settings.fpm_max_children,
        settings.innodb_buffer_pool_mb,
        settings.max_connections,
        settings.redis_max_memory_mb,
    )
    return settings
