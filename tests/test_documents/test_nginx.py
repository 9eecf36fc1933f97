"""Tests for the NGINX renderers (main config and site config)."""

from __future__ import annotations

from woo_optimizer.documents.nginx import (
    VARNISH_CACHE_COMMENT,
    render_nginx_conf,
    render_nginx_site,
)
from woo_optimizer.taxonomy.server_taxonomy import PhpVersion


class TestNginxConf:
    def test_worker_values(self):
        body = render_nginx_conf(worker_processes=6, worker_connections=4096, has_varnish=False)
        assert "worker_processes 6;" in body
        assert "worker_connections 4096;" in body
        assert body.startswith("# /etc/nginx/nginx.conf\n")

    def test_fastcgi_cache_zone_without_varnish(self):
        body = render_nginx_conf(4, 2048, has_varnish=False)
        assert "fastcgi_cache_path /var/cache/nginx" in body
        assert 'fastcgi_cache_key "$scheme$request_method$host$request_uri";' in body
        assert VARNISH_CACHE_COMMENT not in body

    def test_varnish_replaces_cache_zone(self):
        body = render_nginx_conf(4, 2048, has_varnish=True)
        assert VARNISH_CACHE_COMMENT in body
        assert "fastcgi_cache_path" not in body
        assert "fastcgi_cache_key" not in body

    def test_http_block_is_closed(self):
        body = render_nginx_conf(4, 2048, has_varnish=False)
        assert body.rstrip().endswith("}")
        assert body.count("{") == body.count("}")


class TestNginxSite:
    def test_php_socket_uses_version(self):
        body = render_nginx_site(PhpVersion.PHP_83, has_varnish=False)
        assert "fastcgi_pass unix:/var/run/php/php8.3-fpm.sock;" in body

    def test_regex_escapes_survive(self):
        body = render_nginx_site(PhpVersion.PHP_82, has_varnish=False)
        assert r"location ~ \.php$ {" in body
        assert r"location ~ /\.(ht|git|env) {" in body

    def test_fastcgi_cache_without_varnish(self):
        body = render_nginx_site(PhpVersion.PHP_82, has_varnish=False)
        assert "fastcgi_cache WORDPRESS;" in body
        assert "fastcgi_cache_bypass $skip_cache;" in body
        # $skip_cache must be defined before it is used
        assert body.index("set $skip_cache 0;") < body.index("fastcgi_cache_bypass $skip_cache;")

    def test_varnish_replaces_cache_directives(self):
        body = render_nginx_site(PhpVersion.PHP_82, has_varnish=True)
        assert VARNISH_CACHE_COMMENT in body
        assert "fastcgi_cache WORDPRESS" not in body
        assert "$skip_cache" not in body

    def test_braces_balanced_both_modes(self):
        for has_varnish in (True, False):
            body = render_nginx_site(PhpVersion.PHP_80, has_varnish)
            assert body.count("{") == body.count("}")
