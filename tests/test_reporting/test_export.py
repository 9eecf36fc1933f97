"""Tests for woo_optimizer.reporting.export."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

from woo_optimizer.documents.assembler import assemble, generate
from woo_optimizer.engine.derive import derive
from woo_optimizer.reporting.export import (
    MANIFEST_FILENAME,
    RECOMMENDATIONS_FILENAME,
    build_manifest,
    recommendations_to_dict,
    write_document,
    write_documents,
    write_manifest,
    write_recommendations_json,
)


# ── write_document / write_documents ──────────────────────────────────────────


def test_write_document_exact_body(tmp_path: Path, base_profile) -> None:
    """The file content is the rendered body, byte for byte."""
    doc = generate(base_profile).get("mysql")
    path = write_document(doc, tmp_path / "out")

    assert path == tmp_path / "out" / "my.cnf"
    assert path.read_bytes() == doc.body.encode("utf-8")


def test_write_documents_full_set(tmp_path: Path, base_profile) -> None:
    docs = generate(base_profile).all_documents()
    paths = write_documents(docs, tmp_path)

    assert [p.name for p in paths] == [d.filename for d in docs]
    assert (tmp_path / "redis.conf").exists()


def test_write_documents_without_redis(tmp_path: Path, make_profile) -> None:
    write_documents(generate(make_profile(has_redis=False)).all_documents(), tmp_path)
    assert not (tmp_path / "redis.conf").exists()
    assert (tmp_path / "php.ini").exists()


# ── recommendations ───────────────────────────────────────────────────────────


def test_recommendations_json(tmp_path: Path, base_profile) -> None:
    recs = generate(base_profile).recommendations
    path = write_recommendations_json(recs, tmp_path)

    assert path.name == RECOMMENDATIONS_FILENAME
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == recommendations_to_dict(recs)
    assert data["plugins"][0] == {
        "name": "Redis Object Cache",
        "purpose": "Object caching with Redis",
        "required": True,
        "url": "https://wordpress.org/plugins/redis-cache/",
    }
    assert {"label": "Check Redis connectivity", "command": "redis-cli ping"} in data["verification"]
    assert data["rollout"][0] == "Backup all current configuration files and database"


# ── manifest ──────────────────────────────────────────────────────────────────


def test_manifest_digests(base_profile, base_settings) -> None:
    output = assemble(base_profile, base_settings)
    manifest = build_manifest(base_profile, base_settings, output)

    assert manifest["object_cache"] is True
    assert manifest["settings"]["fpm_max_children"] == 18
    assert manifest["profile"]["storage_type"] == "ssd"
    entry = next(d for d in manifest["documents"] if d["name"] == "sysctl")
    body = output.get("sysctl").body
    assert entry["sha256"] == hashlib.sha256(body.encode("utf-8")).hexdigest()
    assert entry["filename"] == "sysctl.conf"


def test_manifest_is_deterministic(make_profile) -> None:
    profile = make_profile(has_redis=False)
    settings = derive(profile)
    first = build_manifest(profile, settings, assemble(profile, settings))
    second = build_manifest(profile, settings, assemble(profile, settings))
    assert first == second
    assert first["object_cache"] is False
    assert "redis" not in [d["name"] for d in first["documents"]]


def test_write_manifest(tmp_path: Path, base_profile, base_settings) -> None:
    output = assemble(base_profile, base_settings)
    path = write_manifest(base_profile, base_settings, output, tmp_path)

    assert path.name == MANIFEST_FILENAME
    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["documents"]) == 8
