"""
woo_optimizer.documents — Configuration document rendering.

One pure render function per target system, each taking only the raw or
derived values it needs, so every document can be tested on its own.

Modules:
  nginx     — nginx.conf and the WooCommerce site config.
  php       — PHP-FPM pool and php.ini.
  database  — MySQL/MariaDB my.cnf.
  cache     — Redis redis.conf.
  kernel    — sysctl.conf.
  wordpress — wp-config.php additions.
  assembler — Document table, render_document() and assemble().
"""
