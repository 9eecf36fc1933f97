"""
Document assembler: ``(profile, settings) -> OptimizerOutput``.

Each document has one ``DocumentSpec`` in ``DOCUMENT_SPECS`` that binds its
title, suggested filename and renderer.  The renderer adapters pass each
render function only the values it needs.

``render_document()`` is the only place a document body is produced;
``assemble()`` calls it for every document, so a single document fetched on
its own is byte-identical to the same document in the full set.

Usage
-----
    from woo_optimizer.documents.assembler import assemble
    from woo_optimizer.engine.derive import derive

    settings = derive(profile)
    output = assemble(profile, settings)
    output.get("mysql").body
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from woo_optimizer.documents.cache import render_redis_conf
from woo_optimizer.documents.database import render_mysql_cnf
from woo_optimizer.documents.kernel import render_sysctl_conf
from woo_optimizer.documents.nginx import render_nginx_conf, render_nginx_site
from woo_optimizer.documents.php import render_php_fpm_pool, render_php_ini
from woo_optimizer.documents.wordpress import render_wp_config
from woo_optimizer.engine.derive import derive
from woo_optimizer.models.output import DocumentUnavailableError, GeneratedDocument, OptimizerOutput
from woo_optimizer.models.server import ServerProfile
from woo_optimizer.models.settings import DerivedSettings
from woo_optimizer.recommendations.catalog import build_recommendations
from woo_optimizer.taxonomy.server_taxonomy import DocumentName

logger = logging.getLogger(__name__)

Renderer = Callable[[ServerProfile, DerivedSettings], str]


@dataclass(frozen=True)
class DocumentSpec:
    """Static description of one generated document.

    Attributes:
        name:     Document identifier.
        title:    Human-readable title.
        filename: Suggested file name.
        render:   ``(profile, settings) -> body``.
        optional: True for documents that depend on a profile toggle.
    """

    name:     DocumentName
    title:    str
    filename: str
    render:   Renderer
    optional: bool = False


DOCUMENT_SPECS: dict[DocumentName, DocumentSpec] = {
    spec.name: spec
    for spec in (
        DocumentSpec(
            DocumentName.NGINX,
            "NGINX Main Configuration",
            "nginx.conf",
            lambda p, s: render_nginx_conf(
                s.nginx_worker_processes, s.nginx_worker_connections, p.has_varnish
            ),
        ),
        DocumentSpec(
            DocumentName.NGINX_SITE,
            "NGINX Site Configuration",
            "woocommerce-site.conf",
            lambda p, s: render_nginx_site(p.php_version, p.has_varnish),
        ),
        DocumentSpec(
            DocumentName.PHP_FPM,
            "PHP-FPM Pool Configuration",
            "php-fpm-www.conf",
            lambda p, s: render_php_fpm_pool(
                p.php_version,
                s.fpm_max_children,
                s.fpm_start_servers,
                s.fpm_min_spare_servers,
                s.fpm_max_spare_servers,
            ),
        ),
        DocumentSpec(
            DocumentName.PHP_INI,
            "PHP.ini Optimizations",
            "php.ini",
            lambda p, s: render_php_ini(p.php_version, s.session_backend),
        ),
        DocumentSpec(
            DocumentName.MYSQL,
            "MySQL/MariaDB Configuration",
            "my.cnf",
            lambda p, s: render_mysql_cnf(s, p.db_engine, p.has_redis),
        ),
        DocumentSpec(
            DocumentName.REDIS,
            "Redis Configuration",
            "redis.conf",
            lambda p, s: render_redis_conf(s.redis_max_memory_mb),
            optional=True,
        ),
        DocumentSpec(
            DocumentName.SYSCTL,
            "System Kernel Optimization (sysctl)",
            "sysctl.conf",
            lambda p, s: render_sysctl_conf(s.kernel_shmmax, s.kernel_shmall),
        ),
        DocumentSpec(
            DocumentName.WP_CONFIG,
            "WordPress Configuration (wp-config.php)",
            "wp-config-additions.php",
            lambda p, s: render_wp_config(p.has_redis),
        ),
    )
}


def is_document_available(name: DocumentName, profile: ServerProfile) -> bool:
    """Whether ``name`` is produced for this profile."""
    if name is DocumentName.REDIS:
        return profile.has_redis
    return True


def render_document(
    name:     DocumentName | str,
    profile:  ServerProfile,
    settings: DerivedSettings,
) -> GeneratedDocument:
    """Render one document.

    Raises:
        DocumentUnavailableError: If the document is not produced for this
            profile (the Redis document without Redis).
        ValueError: If ``name`` is not a known document name.
    """
    name = DocumentName(name)
    if not is_document_available(name, profile):
        raise DocumentUnavailableError(name, "object cache (Redis) is disabled")
    spec = DOCUMENT_SPECS[name]
    return GeneratedDocument(
        name=spec.name,
        title=spec.title,
        filename=spec.filename,
        body=spec.render(profile, settings),
    )


def assemble(profile: ServerProfile, settings: DerivedSettings) -> OptimizerOutput:
    """Render every document and recommendation list for one profile.

    Args:
        profile:  Validated server profile.
        settings: ``derive(profile)`` snapshot.

    Returns:
        ``OptimizerOutput`` with the Redis document in ``object_cache``
        (``None`` when Redis is disabled).
    """
    documents: dict[DocumentName, GeneratedDocument] = {}
    object_cache: GeneratedDocument | None = None

    for name, spec in DOCUMENT_SPECS.items():
        if not is_document_available(name, profile):
            logger.debug("Skipping %s: not produced for this profile", name)
            continue
        doc = render_document(name, profile, settings)
        if spec.optional:
            object_cache = doc
        else:
            documents[name] = doc

    output = OptimizerOutput(
        documents=documents,
        object_cache=object_cache,
        recommendations=build_recommendations(profile, settings),
    )
    logger.info(
        "Assembled %d document(s) (object cache: %s)",
        len(output.all_documents()),
        "yes" if output.has_object_cache else "no",
    )
    return output


def generate(profile: ServerProfile) -> OptimizerOutput:
    """Convenience wrapper: ``assemble(profile, derive(profile))``."""
    return assemble(profile, derive(profile))
