"""
PHP documents: the PHP-FPM ``www`` pool and the ``php.ini`` overlay.

Pool sizes come from ``DerivedSettings``; the session handler switches
between Redis and the filesystem with the object-cache toggle.
"""

from __future__ import annotations

from woo_optimizer.taxonomy.server_taxonomy import PhpVersion, SessionBackend

REDIS_SESSION_SAVE_PATH = '"tcp://127.0.0.1:6379?weight=1&timeout=2.5&database=0"'
FILES_SESSION_SAVE_PATH = "/var/lib/php/sessions"

_FPM_PHP_SETTINGS = """\
; PHP Settings
php_admin_value[memory_limit] = 256M
php_admin_value[max_execution_time] = 300
php_admin_value[max_input_time] = 300
php_admin_value[upload_max_filesize] = 256M
php_admin_value[post_max_size] = 256M
php_admin_value[max_input_vars] = 5000

; Performance
php_admin_flag[opcache.enable] = on
php_admin_value[opcache.memory_consumption] = 256
php_admin_value[opcache.interned_strings_buffer] = 16
php_admin_value[opcache.max_accelerated_files] = 10000
php_admin_value[opcache.revalidate_freq] = 60
php_admin_flag[opcache.validate_timestamps] = on
php_admin_flag[opcache.save_comments] = on
"""


def render_php_fpm_pool(
    php_version:       PhpVersion,
    max_children:      int,
    start_servers:     int,
    min_spare_servers: int,
    max_spare_servers: int,
) -> str:
    """Render ``/etc/php/<version>/fpm/pool.d/www.conf``."""
    lines = [
        f"; /etc/php/{php_version}/fpm/pool.d/www.conf",
        "[www]",
        "user = www-data",
        "group = www-data",
        f"listen = /var/run/php/php{php_version}-fpm.sock",
        "listen.owner = www-data",
        "listen.group = www-data",
        "listen.mode = 0660",
        "",
        "; Process Management",
        "pm = dynamic",
        f"pm.max_children = {max_children}",
        f"pm.start_servers = {start_servers}",
        f"pm.min_spare_servers = {min_spare_servers}",
        f"pm.max_spare_servers = {max_spare_servers}",
        "pm.max_requests = 500",
        "pm.process_idle_timeout = 10s",
        "",
        _FPM_PHP_SETTINGS,
        "; Slow log",
        f"slowlog = /var/log/php{php_version}-fpm-slow.log",
        "request_slowlog_timeout = 5s",
        "",
        "; Status",
        "pm.status_path = /status",
        "ping.path = /ping",
    ]
    return "\n".join(lines)


_INI_LIMITS = """\
; Memory
memory_limit = 256M
max_execution_time = 300
max_input_time = 300

; File Uploads
upload_max_filesize = 256M
post_max_size = 256M
max_file_uploads = 20
"""

_INI_OPCACHE = """
; OPcache
opcache.enable=1
opcache.memory_consumption=256
opcache.interned_strings_buffer=16
opcache.max_accelerated_files=10000
opcache.revalidate_freq=60
opcache.fast_shutdown=1
opcache.enable_cli=0
"""


def render_php_ini(php_version: PhpVersion, session_backend: SessionBackend) -> str:
    """Render the key ``php.ini`` overrides for the FPM SAPI."""
    if session_backend is SessionBackend.REDIS:
        save_path = f"session.save_path = {REDIS_SESSION_SAVE_PATH}"
    else:
        save_path = f"session.save_path = {FILES_SESSION_SAVE_PATH}"

    lines = [
        f"; /etc/php/{php_version}/fpm/php.ini - Key optimizations",
        _INI_LIMITS,
        "; Session",
        f"session.save_handler = {session_backend}",
        save_path,
        "session.gc_maxlifetime = 3600",
        _INI_OPCACHE,
        "; Security",
        "expose_php = Off",
        "display_errors = Off",
        "log_errors = On",
        f"error_log = /var/log/php{php_version}-error.log",
        "",
        "; Limits for WooCommerce",
        "max_input_vars = 5000",
        "realpath_cache_size = 4096K",
        "realpath_cache_ttl = 600",
    ]
    return "\n".join(lines)
