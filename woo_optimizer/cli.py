"""
WooCommerce Server Optimizer — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build and validate the ``ServerProfile`` (profile file and/or options,
     falling back to the ``[profile]`` defaults in config).
  4. Derive settings and assemble documents.
  5. Report or write the result.

Install and run::

    pip install -e .
    woo-optimizer --help
    woo-optimizer generate --profile examples/high-traffic-store.toml
    woo-optimizer generate --ram-gb 32 --cpu-cores 8 --no-redis
    woo-optimizer generate --document mysql --stdout
    woo-optimizer show-settings --ram-gb 16
    woo-optimizer recommend --traffic 80000
    woo-optimizer validate-profile examples/small-store.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from woo_optimizer.config import AppConfig
from woo_optimizer.models.server import InvalidInputError, ServerProfile

app = typer.Typer(
    name="woo-optimizer",
    help="WooCommerce Server Optimizer — tuned NGINX/PHP/MySQL/Redis configs from hardware specs.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None) -> AppConfig:
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from woo_optimizer.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config: AppConfig) -> None:
    """Set up logging from config."""
    from woo_optimizer.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _build_profile_or_exit(
    config: AppConfig,
    profile_path: Optional[str],
    **overrides,
) -> ServerProfile:
    """Validate the profile; on failure list every bad field and exit 1."""
    from woo_optimizer.profiles import ProfileLoadError, load_profile
    from woo_optimizer.reporting.formatters import format_validation_errors

    try:
        if profile_path:
            return load_profile(Path(profile_path), **overrides)
        return config.profile.to_profile(**overrides)
    except InvalidInputError as exc:
        typer.echo(f"[ERROR] {format_validation_errors(exc)}", err=True)
        raise typer.Exit(code=1)
    except (FileNotFoundError, ProfileLoadError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# Shared per-field options.  ``None`` means "keep the profile/default value".
_PROFILE_OPT = typer.Option(None, "--profile", "-p", help="Server profile file (.toml or .json).")
_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_CORES_OPT = typer.Option(None, "--cpu-cores", help="CPU cores (1-128).")
_RAM_OPT = typer.Option(None, "--ram-gb", help="RAM in GB (2-512).")
_STORAGE_OPT = typer.Option(None, "--storage", help="Storage class: ssd, nvme, hdd.")
_TRAFFIC_OPT = typer.Option(None, "--traffic", help="Expected daily unique visitors (>= 100).")
_PHP_OPT = typer.Option(None, "--php", help="PHP version: 8.0, 8.1, 8.2, 8.3.")
_DB_OPT = typer.Option(None, "--db-engine", help="Database engine: mysql, mariadb.")
_REDIS_OPT = typer.Option(None, "--redis/--no-redis", help="Redis object cache.")
_VARNISH_OPT = typer.Option(None, "--varnish/--no-varnish", help="Varnish edge cache.")
_PRODUCTS_OPT = typer.Option(None, "--products", help="Average product count (>= 10).")
_ORDERS_OPT = typer.Option(None, "--orders-per-day", help="Average orders per day (>= 1).")


def _overrides(
    cpu_cores, ram_gb, storage, traffic, php, db_engine, redis, varnish, products, orders,
) -> dict:
    return {
        "cpu_cores": cpu_cores,
        "ram_gb": ram_gb,
        "storage_type": storage,
        "expected_traffic": traffic,
        "php_version": php,
        "db_engine": db_engine,
        "has_redis": redis,
        "has_varnish": varnish,
        "avg_product_count": products,
        "avg_orders_per_day": orders,
    }


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("generate")
def generate(
    profile_path: Optional[str] = _PROFILE_OPT,
    cpu_cores: Optional[int] = _CORES_OPT,
    ram_gb: Optional[int] = _RAM_OPT,
    storage: Optional[str] = _STORAGE_OPT,
    traffic: Optional[int] = _TRAFFIC_OPT,
    php: Optional[str] = _PHP_OPT,
    db_engine: Optional[str] = _DB_OPT,
    redis: Optional[bool] = _REDIS_OPT,
    varnish: Optional[bool] = _VARNISH_OPT,
    products: Optional[int] = _PRODUCTS_OPT,
    orders: Optional[int] = _ORDERS_OPT,
    document: Optional[str] = typer.Option(
        None,
        "--document",
        "-d",
        help="Generate only this document (see 'list-documents').",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Override output directory from config.",
    ),
    to_stdout: bool = typer.Option(
        False,
        "--stdout",
        help="Print document bodies instead of writing files.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Generate the configuration documents for a server profile.

    \b
    Writes one file per document plus recommendations.json and
    manifest.json.  redis.conf is only produced with --redis.
    """
    from woo_optimizer.documents.assembler import assemble, render_document
    from woo_optimizer.engine.derive import derive
    from woo_optimizer.models.output import DocumentUnavailableError
    from woo_optimizer.reporting.export import (
        write_document,
        write_documents,
        write_manifest,
        write_recommendations_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profile = _build_profile_or_exit(
        config, profile_path,
        **_overrides(cpu_cores, ram_gb, storage, traffic, php, db_engine,
                     redis, varnish, products, orders),
    )
    settings = derive(profile)
    target_dir = Path(output_dir or config.output.output_dir)

    if document:
        try:
            doc = render_document(document, profile, settings)
        except DocumentUnavailableError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)
        except ValueError:
            typer.echo(f"[ERROR] Unknown document '{document}'. Run 'list-documents'.", err=True)
            raise typer.Exit(code=1)
        if to_stdout:
            typer.echo(doc.body)
            return
        path = write_document(doc, target_dir)
        typer.echo(f"[OK] Wrote {path}")
        return

    output = assemble(profile, settings)
    docs = output.all_documents()

    if to_stdout:
        for doc in docs:
            typer.echo(f"##### {doc.filename} #####")
            typer.echo(doc.body)
            typer.echo("")
        return

    typer.echo(f"Writing {len(docs)} document(s) to: {target_dir}")
    for path in write_documents(docs, target_dir):
        typer.echo(f"  {path.name}")
    if config.output.write_recommendations:
        path = write_recommendations_json(output.recommendations, target_dir)
        typer.echo(f"  {path.name}")
    if config.output.write_manifest:
        path = write_manifest(profile, settings, output, target_dir)
        typer.echo(f"  {path.name}")
    if not output.has_object_cache:
        typer.echo("  (redis.conf skipped: object cache disabled)")
    typer.echo("")
    typer.echo("Back up your current configuration and test in staging before applying.")
    typer.echo("[OK] Configuration generated.")


@app.command("show-settings")
def show_settings(
    profile_path: Optional[str] = _PROFILE_OPT,
    cpu_cores: Optional[int] = _CORES_OPT,
    ram_gb: Optional[int] = _RAM_OPT,
    storage: Optional[str] = _STORAGE_OPT,
    traffic: Optional[int] = _TRAFFIC_OPT,
    php: Optional[str] = _PHP_OPT,
    db_engine: Optional[str] = _DB_OPT,
    redis: Optional[bool] = _REDIS_OPT,
    varnish: Optional[bool] = _VARNISH_OPT,
    products: Optional[int] = _PRODUCTS_OPT,
    orders: Optional[int] = _ORDERS_OPT,
    as_json: bool = typer.Option(False, "--json", help="Print settings as JSON."),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the derived settings for a server profile."""
    from woo_optimizer.engine.derive import derive
    from woo_optimizer.reporting.formatters import format_settings_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profile = _build_profile_or_exit(
        config, profile_path,
        **_overrides(cpu_cores, ram_gb, storage, traffic, php, db_engine,
                     redis, varnish, products, orders),
    )
    settings = derive(profile)

    if as_json:
        typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))
        return
    typer.echo(format_settings_summary(profile, settings))


@app.command("recommend")
def recommend(
    profile_path: Optional[str] = _PROFILE_OPT,
    cpu_cores: Optional[int] = _CORES_OPT,
    ram_gb: Optional[int] = _RAM_OPT,
    storage: Optional[str] = _STORAGE_OPT,
    traffic: Optional[int] = _TRAFFIC_OPT,
    php: Optional[str] = _PHP_OPT,
    db_engine: Optional[str] = _DB_OPT,
    redis: Optional[bool] = _REDIS_OPT,
    varnish: Optional[bool] = _VARNISH_OPT,
    products: Optional[int] = _PRODUCTS_OPT,
    orders: Optional[int] = _ORDERS_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print plugin, monitoring and maintenance recommendations."""
    from woo_optimizer.documents.assembler import generate as generate_output
    from woo_optimizer.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profile = _build_profile_or_exit(
        config, profile_path,
        **_overrides(cpu_cores, ram_gb, storage, traffic, php, db_engine,
                     redis, varnish, products, orders),
    )
    output = generate_output(profile)
    typer.echo(format_recommendations(output.recommendations))


@app.command("list-documents")
def list_documents(
    profile_path: Optional[str] = _PROFILE_OPT,
    redis: Optional[bool] = _REDIS_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """List the documents generated for a profile (name, filename, title)."""
    from woo_optimizer.documents.assembler import generate as generate_output
    from woo_optimizer.reporting.formatters import format_document_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profile = _build_profile_or_exit(config, profile_path, has_redis=redis)
    typer.echo(format_document_list(generate_output(profile)))


@app.command("validate-profile")
def validate_profile_cmd(
    profile_path: str = typer.Argument(..., help="Profile file (.toml or .json)."),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Validate a profile file and report every out-of-domain field.

    Exits with code 1 if the profile is invalid.
    """
    from woo_optimizer.reporting.formatters import format_profile_header

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    profile = _build_profile_or_exit(config, profile_path)

    typer.echo("Profile validated successfully.")
    typer.echo(format_profile_header(profile))
    typer.echo("[OK] Profile valid.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPT,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config or its default profile fails validation.
    """
    config = _load_config_or_exit(config_path)
    _build_profile_or_exit(config, None)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Output dir:       {config.output.output_dir}")
    typer.echo(f"  Write recs JSON:  {config.output.write_recommendations}")
    typer.echo(f"  Write manifest:   {config.output.write_manifest}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
