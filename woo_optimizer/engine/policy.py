"""
Fixed tuning policy constants.

These values are policy, not formulas: they are reasonable defaults for a
WooCommerce host and have no derivation beyond that.  Keep them in one place
so a change of policy is a one-line diff.
"""

from __future__ import annotations

from typing import NamedTuple

from woo_optimizer.taxonomy.server_taxonomy import StorageType


class IoCapacity(NamedTuple):
    """InnoDB background-flush IOPS budget for one storage class."""

    io_capacity:     int
    io_capacity_max: int


# Two tiers: solid-state vs spinning disk.
IO_CAPACITY_BY_STORAGE: dict[StorageType, IoCapacity] = {
    StorageType.SSD:  IoCapacity(io_capacity=2000, io_capacity_max=4000),
    StorageType.NVME: IoCapacity(io_capacity=2000, io_capacity_max=4000),
    StorageType.HDD:  IoCapacity(io_capacity=200,  io_capacity_max=400),
}

# ── PHP-FPM ───────────────────────────────────────────────────────────────────
FPM_MIN_WORKERS        = 10
FPM_WORKERS_PER_CORE   = 3
FPM_MB_PER_WORKER      = 128

# ── MySQL / MariaDB ───────────────────────────────────────────────────────────
DB_DEFAULT_MAX_CONNECTIONS = 151     # MySQL's own default
DB_CONNECTION_HEADROOM     = 50      # admin, cron and replication on top of FPM
DB_MAX_LOG_FILE_MB         = 512
DB_MAX_QUERY_CACHE_MB      = 256
DB_MAX_THREAD_CACHE        = 100
DB_MAX_TABLE_OPEN_CACHE    = 4000
DB_MAX_TABLE_DEF_CACHE     = 2000
DB_MAX_IO_THREADS          = 64
PERFORMANCE_SCHEMA_MIN_RAM_GB = 8

# ── Memory shares (percent of total memory) ──────────────────────────────────
BUFFER_POOL_PCT   = 50
QUERY_CACHE_PCT   = 5
REDIS_MEMORY_PCT  = 15
KERNEL_SHM_PCT    = 80

# ── NGINX ─────────────────────────────────────────────────────────────────────
NGINX_CONNECTIONS_HIGH_TRAFFIC = 4096
NGINX_CONNECTIONS_DEFAULT      = 2048

# Orders kept online before archiving is recommended.
ORDER_RETENTION_DAYS = 365 * 2
