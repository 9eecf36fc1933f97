"""
Server profile files: TOML or JSON → validated ``ServerProfile``.

Accepted layouts
----------------
TOML, fields at top level or under a ``[server]`` table::

    [server]
    cpu_cores = 8
    ram_gb = 32
    storage_type = "nvme"
    ...

JSON, a single object (snake_case or camelCase keys)::

    {"cpuCores": 8, "ramGB": 32, "storageType": "nvme", ...}

The format is detected from the file extension.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from woo_optimizer.models.server import ServerProfile, normalize_profile_keys, validate_profile

log = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".toml", ".json")


class ProfileLoadError(ValueError):
    """Raised when a profile file cannot be read or parsed.

    Attributes:
        path: The offending file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot load profile {path}: {reason}")


def read_profile_data(path: Path) -> dict[str, Any]:
    """Read the raw field mapping from a profile file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ProfileLoadError: On unsupported extension, parse errors, or a
            document that is not a table/object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                data: Any = tomllib.load(f)
            data = data.get("server", data)
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ProfileLoadError(
                path, f"unsupported format '{suffix}'; use one of {', '.join(SUPPORTED_SUFFIXES)}"
            )
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        raise ProfileLoadError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise ProfileLoadError(path, "expected a table/object of profile fields")
    return data


def load_profile(path: Path, **overrides: Any) -> ServerProfile:
    """Load and validate a profile file.

    Args:
        path:      ``.toml`` or ``.json`` profile.
        overrides: Field values that replace the file's (``None`` is ignored).

    Raises:
        FileNotFoundError, ProfileLoadError: See ``read_profile_data``.
        InvalidInputError: If any field is out of domain.
    """
    raw = normalize_profile_keys(read_profile_data(path))
    raw.update({k: v for k, v in overrides.items() if v is not None})
    profile = validate_profile(raw)
    log.debug("Loaded profile from %s", path)
    return profile
