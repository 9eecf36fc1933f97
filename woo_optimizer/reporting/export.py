"""
File export for generated documents and recommendations.

All functions write to disk and return the written ``Path``(s).  Document
bodies are written exactly as rendered: each file is an opaque text blob
named by its ``GeneratedDocument.filename``.

Output layout (``generate`` command)::

    <output_dir>/
      nginx.conf
      woocommerce-site.conf
      php-fpm-www.conf
      php.ini
      my.cnf
      redis.conf                 -- only when Redis is enabled
      sysctl.conf
      wp-config-additions.php
      recommendations.json
      manifest.json
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from woo_optimizer.models.output import GeneratedDocument, OptimizerOutput, Recommendations
from woo_optimizer.models.server import ServerProfile
from woo_optimizer.models.settings import DerivedSettings

logger = logging.getLogger(__name__)

RECOMMENDATIONS_FILENAME = "recommendations.json"
MANIFEST_FILENAME = "manifest.json"


def write_document(doc: GeneratedDocument, output_dir: Path) -> Path:
    """Write one document body to ``output_dir/doc.filename``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / doc.filename
    path.write_text(doc.body, encoding="utf-8", newline="\n")
    return path


def write_documents(docs: list[GeneratedDocument], output_dir: Path) -> list[Path]:
    """Write each document and return the paths in input order."""
    paths = [write_document(doc, output_dir) for doc in docs]
    logger.info("Wrote %d document(s) to %s", len(paths), output_dir)
    return paths


def recommendations_to_dict(recs: Recommendations) -> dict:
    """Serialisable form of the recommendation lists."""
    return recs.model_dump(mode="json")


def write_recommendations_json(recs: Recommendations, output_dir: Path) -> Path:
    """Write ``recommendations.json``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / RECOMMENDATIONS_FILENAME
    path.write_text(
        json.dumps(recommendations_to_dict(recs), indent=2) + "\n", encoding="utf-8"
    )
    return path


def build_manifest(
    profile:  ServerProfile,
    settings: DerivedSettings,
    output:   OptimizerOutput,
) -> dict:
    """Describe one generation: inputs, derived values, and each file's digest.

    Contains no timestamps, so the same profile always yields the same
    manifest.
    """
    return {
        "profile": profile.model_dump(mode="json"),
        "settings": settings.model_dump(mode="json"),
        "object_cache": output.has_object_cache,
        "documents": [
            {
                "name": str(doc.name),
                "title": doc.title,
                "filename": doc.filename,
                "sha256": hashlib.sha256(doc.body.encode("utf-8")).hexdigest(),
            }
            for doc in output.all_documents()
        ],
    }


def write_manifest(
    profile:    ServerProfile,
    settings:   DerivedSettings,
    output:     OptimizerOutput,
    output_dir: Path,
) -> Path:
    """Write ``manifest.json`` (see ``build_manifest``)."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / MANIFEST_FILENAME
    manifest = build_manifest(profile, settings, output)
    path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    return path
