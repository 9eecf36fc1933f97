"""``wp-config.php`` additions; the Redis block is present only with Redis."""

from __future__ import annotations

_HEAD = """\
// wp-config.php - Add these lines before "That's all, stop editing!"

// === PERFORMANCE OPTIMIZATIONS ===

// Memory Limits
define('WP_MEMORY_LIMIT', '256M');
define('WP_MAX_MEMORY_LIMIT', '512M');

// Database Optimization
define('WP_AUTO_UPDATE_CORE', false);
define('AUTOSAVE_INTERVAL', 300);
define('WP_POST_REVISIONS', 3);
define('EMPTY_TRASH_DAYS', 7);
"""

REDIS_BLOCK = """\
// Redis Object Cache
define('WP_REDIS_HOST', '127.0.0.1');
define('WP_REDIS_PORT', 6379);
define('WP_REDIS_DATABASE', 0);
define('WP_REDIS_TIMEOUT', 1);
define('WP_REDIS_READ_TIMEOUT', 1);
define('WP_REDIS_MAXTTL', 86400);
"""

_TAIL = """\
// Disable File Editing
define('DISALLOW_FILE_EDIT', true);

// Cron Optimization (use system cron instead)
define('DISABLE_WP_CRON', true);
// Add to system crontab: */15 * * * * wget -q -O - https://yoursite.com/wp-cron.php?doing_wp_cron >/dev/null 2>&1

// WooCommerce Specific
define('WOOCOMMERCE_UPDATE_DB_IN_BACKGROUND', false);
define('WC_ADMIN_DISABLED', false);

// Debug (disable in production)
define('WP_DEBUG', false);
define('WP_DEBUG_LOG', false);
define('WP_DEBUG_DISPLAY', false);"""


def render_wp_config(has_redis: bool) -> str:
    """Render the lines to add to ``wp-config.php``."""
    parts = [_HEAD]
    if has_redis:
        parts.append(REDIS_BLOCK)
    parts.append(_TAIL)
    return "\n".join(parts)
