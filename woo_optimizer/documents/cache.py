"""Redis object-cache ``redis.conf`` (only rendered when Redis is enabled)."""

from __future__ import annotations

_PERSISTENCE_AND_REST = """
# Persistence (adjust based on needs)
save 900 1
save 300 10
save 60 10000
stop-writes-on-bgsave-error yes
rdbcompression yes
rdbchecksum yes
dbfilename dump.rdb
dir /var/lib/redis

# Replication
replica-serve-stale-data yes
replica-read-only yes
repl-diskless-sync no

# Performance
tcp-backlog 511
timeout 0
tcp-keepalive 300
databases 16

# Logging
loglevel notice
logfile /var/log/redis/redis-server.log

# Slow Log
slowlog-log-slower-than 10000
slowlog-max-len 128"""


def render_redis_conf(max_memory_mb: int) -> str:
    """Render the key ``/etc/redis/redis.conf`` settings."""
    lines = [
        "# /etc/redis/redis.conf - Key settings",
        "bind 127.0.0.1",
        "port 6379",
        "protected-mode yes",
        "daemonize yes",
        "supervised systemd",
        "pidfile /var/run/redis/redis-server.pid",
        "",
        "# Memory",
        f"maxmemory {max_memory_mb}mb",
        "maxmemory-policy allkeys-lru",
        "maxmemory-samples 5",
        _PERSISTENCE_AND_REST,
    ]
    return "\n".join(lines)
