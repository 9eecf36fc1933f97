"""
MySQL / MariaDB ``my.cnf``.

Every sizing value is read from ``DerivedSettings``; the only decision made
here is whether the query-cache block is emitted.  It is emitted for MySQL
when no Redis object cache is present, and replaced by an explanatory
comment otherwise.
"""

from __future__ import annotations

from woo_optimizer.models.settings import DerivedSettings
from woo_optimizer.taxonomy.server_taxonomy import DbEngine

QUERY_CACHE_REDIS_COMMENT = "# Query cache disabled: Redis object cache already caches query results"
QUERY_CACHE_ENGINE_COMMENT = "# Query cache disabled: not used for this database engine"

_GENERAL = """\
# /etc/mysql/my.cnf or /etc/my.cnf
[mysqld]
# General
user = mysql
pid-file = /var/run/mysqld/mysqld.pid
socket = /var/run/mysqld/mysqld.sock
port = 3306
datadir = /var/lib/mysql
"""

_STATIC_TAIL = """
# MyISAM Settings (for older WP tables)
key_buffer_size = 32M
myisam_sort_buffer_size = 8M

# Temp & Sort Settings
tmp_table_size = 64M
max_heap_table_size = 64M
sort_buffer_size = 2M
read_buffer_size = 2M
read_rnd_buffer_size = 4M
join_buffer_size = 2M

# Binary Logging (for replication/backup)
log_bin = /var/log/mysql/mysql-bin.log
binlog_format = ROW
expire_logs_days = 7
max_binlog_size = 100M

# Slow Query Log
slow_query_log = 1
slow_query_log_file = /var/log/mysql/slow.log
long_query_time = 2

[mysql]
no-auto-rehash

[mysqldump]
quick
max_allowed_packet = 256M"""


def emits_query_cache(db_engine: DbEngine, has_redis: bool) -> bool:
    """Whether ``my.cnf`` carries a query-cache block."""
    return db_engine is DbEngine.MYSQL and not has_redis


def render_query_cache_block(db_engine: DbEngine, has_redis: bool, query_cache_mb: int) -> str:
    """Query-cache directives, or the comment explaining their absence."""
    if emits_query_cache(db_engine, has_redis):
        return "\n".join([
            "query_cache_type = 1",
            f"query_cache_size = {query_cache_mb}M",
            "query_cache_limit = 2M",
        ])
    if has_redis:
        return QUERY_CACHE_REDIS_COMMENT
    return QUERY_CACHE_ENGINE_COMMENT


def render_mysql_cnf(
    settings:  DerivedSettings,
    db_engine: DbEngine,
    has_redis: bool,
) -> str:
    """Render ``my.cnf`` for the selected engine."""
    s = settings
    lines = [
        _GENERAL,
        "# Connection Settings",
        f"max_connections = {s.max_connections}",
        "max_connect_errors = 1000000",
        "wait_timeout = 600",
        "interactive_timeout = 600",
        "",
        "# Buffer Pool Settings",
        f"innodb_buffer_pool_size = {s.innodb_buffer_pool_mb}M",
        f"innodb_buffer_pool_instances = {s.innodb_buffer_pool_instances}",
        f"innodb_log_file_size = {s.innodb_log_file_mb}M",
        "innodb_log_buffer_size = 16M",
        "innodb_flush_log_at_trx_commit = 2",
        "innodb_flush_method = O_DIRECT",
        "",
        "# Performance Schema",
        f"performance_schema = {'ON' if s.performance_schema else 'OFF'}",
        "",
        "# Query Cache",
        render_query_cache_block(db_engine, has_redis, s.query_cache_mb),
        "",
        "# Thread Settings",
        f"thread_cache_size = {s.thread_cache_size}",
        f"table_open_cache = {s.table_open_cache}",
        f"table_definition_cache = {s.table_definition_cache}",
        "",
        "# InnoDB Settings",
        "innodb_file_per_table = 1",
        "innodb_stats_on_metadata = 0",
        f"innodb_read_io_threads = {s.innodb_read_io_threads}",
        f"innodb_write_io_threads = {s.innodb_write_io_threads}",
        f"innodb_io_capacity = {s.innodb_io_capacity}",
        f"innodb_io_capacity_max = {s.innodb_io_capacity_max}",
        _STATIC_TAIL,
    ]
    return "\n".join(lines)
