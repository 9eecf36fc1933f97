"""
Recommendation catalog: plugins, monitoring, maintenance and tips.

The lists are mostly fixed.  What depends on the profile:

  Plugin ``required`` flags
  -------------------------
    Redis Object Cache          required iff Redis is enabled
    Page-cache plugin           required iff Varnish is NOT doing page caching
    Cloudflare (CDN)            required iff traffic > 50000/day

  Database maintenance
  --------------------
    The archiving task embeds the two-year order count
    (``settings.archivable_orders``) as an informational figure.

  Verification commands
  ---------------------
    Each command carries a label saying what it checks.  The PHP-FPM test
    uses the profile's PHP version; the Redis ping is only listed when Redis
    is enabled.

  Rollout steps
  -------------
    Ordered steps for applying the files; the Redis install step appears
    only when Redis is enabled.
"""

from __future__ import annotations

from woo_optimizer.models.output import PluginRecommendation, Recommendations, VerificationCommand
from woo_optimizer.models.server import ServerProfile
from woo_optimizer.models.settings import DerivedSettings

MONITORING_TOOLS: tuple[str, ...] = (
    "New Relic APM - Application performance monitoring",
    "Netdata - Real-time system monitoring",
    "Monit - Process monitoring and automatic restart",
    "Prometheus + Grafana - Metrics and dashboards",
    "WP-CLI - Command line management",
)

MAINTENANCE_TASKS: tuple[str, ...] = (
    "Set up automated daily database backups",
    "Configure logrotate for all logs",
    "Enable automated security updates",
    "Monitor disk space and setup alerts",
    "Regular WooCommerce database optimization",
    "Monitor PHP-FPM slow log and error log",
    "Setup MySQL slow query monitoring",
    "Implement uptime monitoring (UptimeRobot, Pingdom)",
    "Configure SSL/TLS with Let's Encrypt",
    "Setup fail2ban for SSH protection",
)

WOOCOMMERCE_TIPS: tuple[str, ...] = (
    "Enable WooCommerce REST API caching",
    "Optimize product images (WebP format)",
    "Use transients caching for expensive queries",
    "Disable WooCommerce widgets if not needed",
    "Limit order statuses in admin",
    "Archive old orders to separate tables",
    "Optimize checkout page (remove unnecessary fields)",
    "Use lazy loading for product images",
    "Implement infinite scroll for product listings",
    "Consider splitting products into categories",
)

_DATABASE_TASKS: tuple[str, ...] = (
    "Run WP-Optimize or WP-Sweep weekly",
    "Optimize database tables monthly",
    "Clean up post revisions and transients",
    "Remove orphaned post meta",
    "Delete spam comments regularly",
    "Index optimization for WooCommerce tables",
    "Consider partitioning large tables",
)


def build_plugins(profile: ServerProfile) -> list[PluginRecommendation]:
    """Plugin/tool entries with their computed ``required`` flags."""
    return [
        PluginRecommendation(
            name="Redis Object Cache",
            purpose="Object caching with Redis",
            required=profile.has_redis,
            url="https://wordpress.org/plugins/redis-cache/",
        ),
        PluginRecommendation(
            name="WP Rocket or W3 Total Cache",
            purpose="Page caching and optimization",
            required=not profile.has_varnish,
            url="https://wp-rocket.me/",
        ),
        PluginRecommendation(
            name="Imagify or ShortPixel",
            purpose="Image optimization",
            required=True,
            url="https://wordpress.org/plugins/imagify/",
        ),
        PluginRecommendation(
            name="Query Monitor",
            purpose="Performance debugging (dev only)",
            required=False,
            url="https://wordpress.org/plugins/query-monitor/",
        ),
        PluginRecommendation(
            name="WooCommerce Admin",
            purpose="Enhanced WooCommerce dashboard",
            required=True,
            url="Built-in",
        ),
        PluginRecommendation(
            name="Autoptimize",
            purpose="CSS/JS optimization",
            required=True,
            url="https://wordpress.org/plugins/autoptimize/",
        ),
        PluginRecommendation(
            name="Cloudflare",
            purpose="CDN and DDoS protection",
            required=profile.is_high_traffic,
            url="https://www.cloudflare.com/",
        ),
    ]


def build_database_tasks(archivable_orders: int) -> list[str]:
    """Database maintenance tasks, ending with the order-archiving figure."""
    return [
        *_DATABASE_TASKS,
        f"Archive orders older than 2 years (current: ~{archivable_orders} orders)",
    ]


def build_verification_commands(profile: ServerProfile) -> list[VerificationCommand]:
    """Commands to check each service after the configs are applied."""
    commands = [
        VerificationCommand(label="Test NGINX configuration", command="sudo nginx -t"),
        VerificationCommand(
            label="Test PHP-FPM configuration", command=f"sudo php-fpm{profile.php_version} -t"
        ),
        VerificationCommand(label="Check MySQL performance", command="mysqltuner"),
        VerificationCommand(
            label="Benchmark site with Apache Bench",
            command="ab -n 1000 -c 10 https://yoursite.com/",
        ),
        VerificationCommand(label="Monitor PHP-FPM status", command="curl http://localhost/status"),
    ]
    if profile.has_redis:
        commands.append(VerificationCommand(label="Check Redis connectivity", command="redis-cli ping"))
    commands.append(
        VerificationCommand(
            label="Monitor real-time MySQL queries",
            command="mysqladmin -u root -p processlist -i 1",
        )
    )
    return commands


def build_rollout_steps(profile: ServerProfile) -> list[str]:
    """Ordered steps for applying the generated files to a live server."""
    steps = [
        "Backup all current configuration files and database",
        "Set up a staging environment to test configurations",
        "Apply system kernel optimizations (sysctl) and reboot",
        "Update PHP-FPM and PHP.ini configurations, restart PHP-FPM",
        "Update MySQL/MariaDB configuration, restart database",
        "Configure NGINX and test with: nginx -t",
    ]
    if profile.has_redis:
        steps.append("Install and configure Redis")
    steps += [
        "Update wp-config.php with performance settings",
        "Install recommended plugins and configure caching",
        "Monitor performance with New Relic or similar tools",
        "Fine-tune based on actual traffic patterns",
    ]
    return steps


def build_recommendations(profile: ServerProfile, settings: DerivedSettings) -> Recommendations:
    """Assemble every recommendation list for one profile."""
    return Recommendations(
        plugins=build_plugins(profile),
        monitoring=list(MONITORING_TOOLS),
        maintenance=list(MAINTENANCE_TASKS),
        woocommerce=list(WOOCOMMERCE_TIPS),
        database=build_database_tasks(settings.archivable_orders),
        verification=build_verification_commands(profile),
        rollout=build_rollout_steps(profile),
    )
