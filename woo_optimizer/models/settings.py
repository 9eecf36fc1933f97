"""
Derived settings: the computed snapshot every document is rendered from.

``DerivedSettings`` is produced once per invocation by
``woo_optimizer.engine.derive.derive()`` and is frozen, so every document in
one output reads the same numbers.  A database buffer pool sized here is the
same buffer pool the kernel shared-memory ceiling and the recommendations
see.

All sizes are whole numbers because they end up as literal config values.
Units are in the field name (``_mb``) or are plain counts.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt

from woo_optimizer.taxonomy.server_taxonomy import SessionBackend


class DerivedSettings(BaseModel):
    """Immutable snapshot of every computed configuration value.

    Attributes:
        memory_mb: Total memory budget (ram_gb * 1024).
        fpm_workers: Worker-pool target sized to CPU and 128MB-per-worker memory.
        fpm_max_children: Hard ceiling of the PHP-FPM pool (1.5x target).
        fpm_start_servers: Workers forked at pool start.
        fpm_min_spare_servers: Idle workers kept at minimum.
        fpm_max_spare_servers: Idle workers kept at most.
        innodb_buffer_pool_mb: InnoDB buffer pool (50% of memory).
        innodb_buffer_pool_instances: One instance per GB of pool, capped by cores.
        innodb_log_file_mb: Redo log file size.
        innodb_read_io_threads: Background read threads.
        innodb_write_io_threads: Background write threads.
        innodb_io_capacity: IOPS budget for background flushing.
        innodb_io_capacity_max: IOPS ceiling for background flushing.
        max_connections: Database connection ceiling.
        query_cache_mb: Query cache size; 0 when Redis handles query results.
        thread_cache_size: Cached server threads.
        table_open_cache: Open table handles.
        table_definition_cache: Cached table definitions.
        performance_schema: Whether the performance schema is worth its memory.
        redis_max_memory_mb: Redis ``maxmemory``; 0 when Redis is disabled.
        session_backend: PHP session storage backend.
        nginx_worker_processes: NGINX worker processes.
        nginx_worker_connections: Connections per NGINX worker.
        kernel_shmmax: Largest shared-memory segment in bytes.
        kernel_shmall: Total shared memory in 4KB pages.
        archivable_orders: Orders accumulated over two years (informational).
    """

    model_config = ConfigDict(frozen=True)

    memory_mb: PositiveInt

    fpm_workers: PositiveInt
    fpm_max_children: PositiveInt
    fpm_start_servers: PositiveInt
    fpm_min_spare_servers: PositiveInt
    fpm_max_spare_servers: PositiveInt

    innodb_buffer_pool_mb: PositiveInt
    innodb_buffer_pool_instances: NonNegativeInt
    innodb_log_file_mb: PositiveInt
    innodb_read_io_threads: PositiveInt
    innodb_write_io_threads: PositiveInt
    innodb_io_capacity: PositiveInt
    innodb_io_capacity_max: PositiveInt
    max_connections: PositiveInt
    query_cache_mb: NonNegativeInt
    thread_cache_size: PositiveInt
    table_open_cache: PositiveInt
    table_definition_cache: PositiveInt
    performance_schema: bool

    redis_max_memory_mb: NonNegativeInt
    session_backend: SessionBackend

    nginx_worker_processes: PositiveInt
    nginx_worker_connections: PositiveInt

    kernel_shmmax: PositiveInt
    kernel_shmall: PositiveInt

    archivable_orders: PositiveInt
