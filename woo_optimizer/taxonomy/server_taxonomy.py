"""
Server taxonomy for the WooCommerce optimizer.

Categorical inputs and outputs are closed vocabularies:
  - ``StorageType`` — the storage class backing the database volume.
  - ``DbEngine``    — which MySQL-family server the ``my.cnf`` targets.
  - ``PhpVersion``  — supported PHP-FPM runtime versions.
  - ``SessionBackend`` — where PHP stores sessions.
  - ``DocumentName``   — stable identifiers of every generated document.

Usage example::

    from woo_optimizer.taxonomy.server_taxonomy import PhpVersion, StorageType

    StorageType("nvme") is StorageType.NVME   # True
    PhpVersion("8.2").value                   # "8.2"

This module has NO imports from any other ``woo_optimizer`` package.
"""

from enum import StrEnum


class StorageType(StrEnum):
    """Storage class of the disk holding the database files."""

    SSD = "ssd"
    """SATA/SAS solid-state drive."""

    NVME = "nvme"
    """NVMe solid-state drive."""

    HDD = "hdd"
    """Spinning disk."""


class DbEngine(StrEnum):
    """MySQL-family database server."""

    MYSQL = "mysql"
    MARIADB = "mariadb"


class PhpVersion(StrEnum):
    """PHP runtime versions with a maintained FPM package."""

    PHP_80 = "8.0"
    PHP_81 = "8.1"
    PHP_82 = "8.2"
    PHP_83 = "8.3"


class SessionBackend(StrEnum):
    """PHP ``session.save_handler`` value."""

    REDIS = "redis"
    FILES = "files"


class DocumentName(StrEnum):
    """Identifier of each generated configuration document.

    Declaration order is the canonical output order.
    """

    NGINX = "nginx"
    NGINX_SITE = "nginx_site"
    PHP_FPM = "php_fpm"
    PHP_INI = "php_ini"
    MYSQL = "mysql"
    REDIS = "redis"
    SYSCTL = "sysctl"
    WP_CONFIG = "wp_config"
