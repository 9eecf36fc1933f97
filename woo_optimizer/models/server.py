"""
Server profile: the single input record of the optimizer.

``ServerProfile`` describes the hardware and workload of one WooCommerce
host.  It is the only thing the derivation engine ever sees, and it is
constructed exactly once at the boundary (CLI options, profile file, or a
caller's dict) through ``validate_profile()``.

Fields are exposed under snake_case names and accept the camelCase aliases
used by exported form data (``cpuCores``, ``ramGB``, ...).

Integers and booleans are strict: ``True`` is not a core count and ``"yes"``
is not a toggle.  Unknown keys are rejected so a typo in a profile file is
reported instead of silently ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError, field_validator

from woo_optimizer.taxonomy.server_taxonomy import DbEngine, PhpVersion, StorageType

# Shared with the CDN recommendation and the NGINX worker_connections rule.
HIGH_TRAFFIC_THRESHOLD = 50_000


class ServerProfile(BaseModel):
    """Hardware and workload description of one store server.

    Attributes:
        cpu_cores: Physical/virtual cores available to the stack (1–128).
        ram_gb: Installed memory in GB (2–512).
        storage_type: Storage class of the database volume.
        expected_traffic: Expected daily unique visitors (>= 100).
        php_version: PHP-FPM runtime version.
        db_engine: MySQL or MariaDB.
        has_redis: Whether a Redis object cache is installed.
        has_varnish: Whether Varnish sits in front of NGINX.
        avg_product_count: Catalog size (>= 10).
        avg_orders_per_day: Order volume (>= 1).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    cpu_cores: StrictInt = Field(alias="cpuCores", ge=1, le=128)
    ram_gb: StrictInt = Field(alias="ramGB", ge=2, le=512)
    storage_type: StorageType = Field(alias="storageType")
    expected_traffic: StrictInt = Field(alias="expectedTraffic", ge=100)
    php_version: PhpVersion = Field(alias="phpVersion")
    db_engine: DbEngine = Field(alias="dbEngine")
    has_redis: StrictBool = Field(alias="hasRedis")
    has_varnish: StrictBool = Field(alias="hasVarnish")
    avg_product_count: StrictInt = Field(alias="avgProductCount", ge=10)
    avg_orders_per_day: StrictInt = Field(alias="avgOrdersPerDay", ge=1)

    @field_validator("php_version", mode="before")
    @classmethod
    def coerce_numeric_php_version(cls, v: Any) -> Any:
        # TOML/JSON authors often write ``php_version = 8.2``
        if isinstance(v, float):
            return str(v)
        if isinstance(v, int) and not isinstance(v, bool):
            return f"{v}.0"
        return v

    @property
    def is_high_traffic(self) -> bool:
        """True when daily visitors exceed the high-traffic threshold."""
        return self.expected_traffic > HIGH_TRAFFIC_THRESHOLD


_ALIAS_TO_FIELD: dict[str, str] = {
    info.alias: name for name, info in ServerProfile.model_fields.items() if info.alias
}


def normalize_profile_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase aliases to snake_case field names."""
    return {_ALIAS_TO_FIELD.get(key, key): val for key, val in raw.items()}


# ── Validation failures ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldViolation:
    """One input field outside its declared domain.

    Attributes:
        field:   snake_case field name (e.g. ``"cpu_cores"``).
        message: Human-readable reason from the validator.
        value:   The offending input value, or ``None`` when missing.
    """

    field:   str
    message: str
    value:   Any = None


class InvalidInputError(ValueError):
    """Raised when a server profile fails validation.

    Attributes:
        violations: Every field that broke its domain, in input order.
    """

    def __init__(self, violations: list[FieldViolation]) -> None:
        self.violations = violations
        details = "; ".join(f"{v.field}: {v.message}" for v in violations)
        super().__init__(f"Invalid server profile ({len(violations)} error(s)): {details}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidInputError":
        """Translate a pydantic ``ValidationError`` into field violations."""
        violations: list[FieldViolation] = []
        for err in exc.errors():
            loc = err.get("loc") or ("<profile>",)
            key = str(loc[0])
            field_name = _ALIAS_TO_FIELD.get(key, key)
            value = None if err.get("type") == "missing" else err.get("input")
            violations.append(FieldViolation(field=field_name, message=err["msg"], value=value))
        return cls(violations)


def validate_profile(raw: Mapping[str, Any]) -> ServerProfile:
    """Build a ``ServerProfile`` from a mapping, reporting every bad field.

    Args:
        raw: Field values keyed by snake_case name or camelCase alias.

    Returns:
        A frozen, fully validated ``ServerProfile``.

    Raises:
        InvalidInputError: If any field is missing, unknown, or out of domain.
    """
    try:
        return ServerProfile.model_validate(normalize_profile_keys(raw))
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error(exc) from exc
