"""
NGINX documents: main ``nginx.conf`` and the WooCommerce site config.

Both documents carry a FastCGI page-cache block.  When Varnish is in front
of NGINX the block is replaced, in both files, by ``VARNISH_CACHE_COMMENT``
so the two layers never cache the same responses with different rules.
"""

from __future__ import annotations

from woo_optimizer.taxonomy.server_taxonomy import PhpVersion

VARNISH_CACHE_COMMENT = "# Varnish edge cache active - it supersedes the FastCGI cache, which is disabled"

_MAIN_HEADER = """\
# /etc/nginx/nginx.conf
user www-data;"""

_HTTP_BASICS = """\
http {
    # Basic Settings
    sendfile on;
    tcp_nopush on;
    tcp_nodelay on;
    keepalive_timeout 65;
    types_hash_max_size 2048;
    server_tokens off;
    client_max_body_size 256M;

    # Buffer Settings
    client_body_buffer_size 128k;
    client_header_buffer_size 1k;
    large_client_header_buffers 4 16k;

    # Gzip Settings
    gzip on;
    gzip_vary on;
    gzip_proxied any;
    gzip_comp_level 6;
    gzip_types text/plain text/css text/xml text/javascript
               application/json application/javascript application/xml+rss
               application/rss+xml font/truetype font/opentype
               application/vnd.ms-fontobject image/svg+xml;
"""

_FASTCGI_CACHE_ZONE = """\
    # FastCGI Cache
    fastcgi_cache_path /var/cache/nginx levels=1:2 keys_zone=WORDPRESS:100m
                       inactive=60m max_size=1g;
    fastcgi_cache_key "$scheme$request_method$host$request_uri";
    fastcgi_cache_use_stale error timeout invalid_header http_500;
    fastcgi_ignore_headers Cache-Control Expires Set-Cookie;"""

_HTTP_TAIL = """
    include /etc/nginx/mime.types;
    default_type application/octet-stream;

    # Logging
    access_log /var/log/nginx/access.log;
    error_log /var/log/nginx/error.log;

    include /etc/nginx/conf.d/*.conf;
    include /etc/nginx/sites-enabled/*;
}"""


def render_nginx_conf(
    worker_processes:   int,
    worker_connections: int,
    has_varnish:        bool,
) -> str:
    """Render ``/etc/nginx/nginx.conf``.

    Args:
        worker_processes:   One per core.
        worker_connections: Per-worker connection ceiling.
        has_varnish:        Replace the FastCGI cache zone with a comment.
    """
    lines = [
        _MAIN_HEADER,
        f"worker_processes {worker_processes};",
        "worker_rlimit_nofile 65535;",
        "pid /run/nginx.pid;",
        "",
        "events {",
        f"    worker_connections {worker_connections};",
        "    use epoll;",
        "    multi_accept on;",
        "}",
        "",
        _HTTP_BASICS,
        f"    {VARNISH_CACHE_COMMENT}" if has_varnish else _FASTCGI_CACHE_ZONE,
        _HTTP_TAIL,
    ]
    return "\n".join(lines)


_SITE_HEAD = """\
# /etc/nginx/sites-available/woocommerce
server {
    listen 80;
    server_name example.com www.example.com;
    root /var/www/html;
    index index.php index.html;

    # Security headers
    add_header X-Frame-Options "SAMEORIGIN" always;
    add_header X-XSS-Protection "1; mode=block" always;
    add_header X-Content-Type-Options "nosniff" always;
    add_header Referrer-Policy "no-referrer-when-downgrade" always;

    # Static file handling with aggressive caching
    location ~* \\.(jpg|jpeg|png|gif|ico|css|js|svg|woff|woff2|ttf|eot)$ {
        expires 365d;
        add_header Cache-Control "public, immutable";
        access_log off;
    }

    # Deny access to sensitive files
    location ~ /\\.(ht|git|env) {
        deny all;
    }

    location ~ /wp-content/uploads/.*\\.php$ {
        deny all;
    }

    # WooCommerce specific
    location ~ ^/wp-content/uploads/wc-logs/ {
        deny all;
    }"""

# Cart, checkout and logged-in sessions must never be served from cache.
_SKIP_CACHE_RULES = """\

    # Skip the page cache for dynamic WooCommerce pages
    set $skip_cache 0;
    if ($request_method = POST) {
        set $skip_cache 1;
    }
    if ($query_string != "") {
        set $skip_cache 1;
    }
    if ($request_uri ~* "/cart/|/checkout/|/my-account/|/wp-admin/|/wp-json/|wc-api") {
        set $skip_cache 1;
    }
    if ($http_cookie ~* "woocommerce_items_in_cart|wp_woocommerce_session|wordpress_logged_in") {
        set $skip_cache 1;
    }"""

_MAIN_LOCATION = """
    # Main location block
    location / {
        try_files $uri $uri/ /index.php?$args;
    }
"""

_FASTCGI_CACHE_DIRECTIVES = """\
        # FastCGI Cache
        fastcgi_cache WORDPRESS;
        fastcgi_cache_valid 200 60m;
        fastcgi_cache_bypass $skip_cache;
        fastcgi_no_cache $skip_cache;
        add_header X-FastCGI-Cache $upstream_cache_status;"""

_PHP_TAIL = """
        # Increase timeouts for WooCommerce
        fastcgi_read_timeout 300;
        fastcgi_buffer_size 128k;
        fastcgi_buffers 256 16k;
        fastcgi_busy_buffers_size 256k;
        fastcgi_temp_file_write_size 256k;
    }
}"""


def render_nginx_site(php_version: PhpVersion, has_varnish: bool) -> str:
    """Render ``/etc/nginx/sites-available/woocommerce``."""
    lines = [_SITE_HEAD]
    if not has_varnish:
        lines.append(_SKIP_CACHE_RULES)
    lines += [
        _MAIN_LOCATION,
        "    # PHP processing",
        "    location ~ \\.php$ {",
        "        try_files $uri =404;",
        "        fastcgi_split_path_info ^(.+\\.php)(/.+)$;",
        f"        fastcgi_pass unix:/var/run/php/php{php_version}-fpm.sock;",
        "        fastcgi_index index.php;",
        "        include fastcgi_params;",
        "        fastcgi_param SCRIPT_FILENAME $document_root$fastcgi_script_name;",
        "",
        f"        {VARNISH_CACHE_COMMENT}" if has_varnish else _FASTCGI_CACHE_DIRECTIVES,
        _PHP_TAIL,
    ]
    return "\n".join(lines)
