"""
Tests for woo_optimizer/documents/assembler.py.

What we test
------------
assemble():
  - Reference profile yields all eight documents, Redis in ``object_cache``.
  - Redis off: no Redis document anywhere, file-based sessions, get() raises.
  - Varnish on: both NGINX documents carry the supersession comment.
  - Output is byte-identical across repeated calls.

render_document():
  - Single-document path equals the full-set path for every document.
  - Unknown names raise ValueError; Redis without Redis raises
    DocumentUnavailableError.
"""

from __future__ import annotations

import pytest

from woo_optimizer.documents.assembler import (
    DOCUMENT_SPECS,
    assemble,
    generate,
    render_document,
)
from woo_optimizer.documents.nginx import VARNISH_CACHE_COMMENT
from woo_optimizer.engine.derive import derive
from woo_optimizer.models.output import DocumentUnavailableError
from woo_optimizer.taxonomy.server_taxonomy import DocumentName


def _bodies(output) -> dict[str, str]:
    return {doc.filename: doc.body for doc in output.all_documents()}


class TestAssembleReference:
    def test_all_documents_present(self, base_profile, base_settings):
        output = assemble(base_profile, base_settings)
        assert [d.name for d in output.all_documents()] == list(DocumentName)
        assert output.has_object_cache
        assert DocumentName.REDIS not in output.documents

    def test_filenames(self, base_profile, base_settings):
        output = assemble(base_profile, base_settings)
        assert [d.filename for d in output.all_documents()] == [
            "nginx.conf",
            "woocommerce-site.conf",
            "php-fpm-www.conf",
            "php.ini",
            "my.cnf",
            "redis.conf",
            "sysctl.conf",
            "wp-config-additions.php",
        ]

    def test_documents_agree_on_shared_values(self, base_profile, base_settings):
        output = assemble(base_profile, base_settings)
        assert "pm.max_children = 18" in output.get(DocumentName.PHP_FPM).body
        assert "maxmemory 1228mb" in output.get(DocumentName.REDIS).body
        assert "session.save_handler = redis" in output.get(DocumentName.PHP_INI).body
        assert "WP_REDIS_HOST" in output.get(DocumentName.WP_CONFIG).body
        sock = "php8.2-fpm.sock"
        assert sock in output.get(DocumentName.PHP_FPM).body
        assert sock in output.get(DocumentName.NGINX_SITE).body

    def test_recommendations_attached(self, base_profile, base_settings):
        output = assemble(base_profile, base_settings)
        assert any("~73000 orders" in task for task in output.recommendations.database)


class TestObjectCacheToggle:
    def test_redis_off_omits_document(self, make_profile):
        profile = make_profile(has_redis=False)
        output = assemble(profile, derive(profile))
        assert output.object_cache is None
        assert not output.has_object_cache
        assert "redis.conf" not in _bodies(output)
        with pytest.raises(DocumentUnavailableError):
            output.get(DocumentName.REDIS)

    def test_redis_off_switches_sessions_to_files(self, make_profile):
        profile = make_profile(has_redis=False)
        php_ini = assemble(profile, derive(profile)).get("php_ini").body
        assert "session.save_handler = files" in php_ini
        assert "session.save_handler = redis" not in php_ini

    def test_redis_off_enables_query_cache(self, make_profile):
        profile = make_profile(has_redis=False)
        my_cnf = assemble(profile, derive(profile)).get("mysql").body
        assert "query_cache_size = 256M" in my_cnf

    def test_other_documents_unaffected_by_redis(self, make_profile):
        on = generate(make_profile(has_redis=True))
        off = generate(make_profile(has_redis=False))
        for name in (DocumentName.NGINX, DocumentName.NGINX_SITE, DocumentName.PHP_FPM,
                     DocumentName.SYSCTL):
            assert on.get(name).body == off.get(name).body


class TestEdgeCacheToggle:
    def test_varnish_on_replaces_both_nginx_cache_blocks(self, make_profile):
        output = generate(make_profile(has_varnish=True))
        main = output.get(DocumentName.NGINX).body
        site = output.get(DocumentName.NGINX_SITE).body
        assert VARNISH_CACHE_COMMENT in main
        assert VARNISH_CACHE_COMMENT in site
        assert "fastcgi_cache_path" not in main
        assert "fastcgi_cache WORDPRESS" not in site

    def test_varnish_off_keeps_both_nginx_cache_blocks(self, make_profile):
        output = generate(make_profile(has_varnish=False))
        assert VARNISH_CACHE_COMMENT not in output.get(DocumentName.NGINX).body
        assert VARNISH_CACHE_COMMENT not in output.get(DocumentName.NGINX_SITE).body


class TestDeterminism:
    def test_repeated_calls_are_byte_identical(self, base_profile):
        first = _bodies(generate(base_profile))
        second = _bodies(generate(base_profile))
        assert first == second

    def test_whole_output_equal(self, base_profile, base_settings):
        assert assemble(base_profile, base_settings) == assemble(base_profile, base_settings)


class TestRenderDocument:
    @pytest.mark.parametrize("has_redis", [True, False])
    def test_single_matches_full_set(self, make_profile, has_redis):
        profile = make_profile(has_redis=has_redis, has_varnish=not has_redis)
        settings = derive(profile)
        output = assemble(profile, settings)
        for doc in output.all_documents():
            assert render_document(doc.name, profile, settings) == doc

    def test_accepts_string_names(self, base_profile, base_settings):
        doc = render_document("sysctl", base_profile, base_settings)
        assert doc.filename == "sysctl.conf"

    def test_unknown_name_raises_value_error(self, base_profile, base_settings):
        with pytest.raises(ValueError):
            render_document("apache", base_profile, base_settings)

    def test_redis_unavailable_without_redis(self, make_profile):
        profile = make_profile(has_redis=False)
        with pytest.raises(DocumentUnavailableError) as excinfo:
            render_document(DocumentName.REDIS, profile, derive(profile))
        assert excinfo.value.name is DocumentName.REDIS


def test_every_document_has_a_spec():
    assert set(DOCUMENT_SPECS) == set(DocumentName)
    assert [n for n, spec in DOCUMENT_SPECS.items() if spec.optional] == [DocumentName.REDIS]
