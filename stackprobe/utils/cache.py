"""Cache location and persistence for architecture models.

A cache entry is identified by the project root alone: its file name is the
root's base name plus a SHA-1 of the absolute root path, so reruns on the
same root reuse the entry regardless of file timestamps. Each save
overwrites the entry wholesale.
"""

import hashlib
import json
from pathlib import Path

from pydantic import ValidationError

from stackprobe.errors import CacheDecodeError, UnsupportedFormatError
from stackprobe.logging import logger
from stackprobe.models.architecture import ArchitectureModel

SUPPORTED_ARCHITECTURE_FORMATS = frozenset({"json"})


def get_project_hash(project_root: Path | str) -> str:
    """Get the hash identifier for a project root.

    Args:
        project_root: Absolute project root.

    Returns:
        Upper-case SHA-1 hex digest of the root path string.
    """
    return hashlib.sha1(str(project_root).encode()).hexdigest().upper()


def build_cache_file_name(project_root: Path | str) -> str:
    """Name of the cache file for a project root, e.g. ``shop-<sha1>.json``."""
    project_id = Path(project_root).name or "project"
    return f"{project_id}-{get_project_hash(project_root)}.json"


def resolve_cache_directory(project_root: Path | str, cache_root: Path | str) -> Path:
    """Cache directory for a project.

    An absolute ``cache_root`` is shared by all projects; a relative one is
    resolved against the project root.
    """
    cache = Path(cache_root)
    if cache.is_absolute():
        return cache
    return Path(project_root) / cache


def get_cache_path(project_root: Path | str, cache_root: Path | str) -> Path:
    """Full path of the cache file for a project."""
    return resolve_cache_directory(project_root, cache_root) / build_cache_file_name(project_root)


def save_architecture_model(
    model: ArchitectureModel,
    cache_root: Path | str,
    architecture_format: str = "json",
) -> Path:
    """Write a model to its cache file.

    The caller is responsible for recording the returned path on the model.

    Raises:
        UnsupportedFormatError: If a format other than JSON is requested.
    """
    if architecture_format not in SUPPORTED_ARCHITECTURE_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported architecture format `{architecture_format}`; only JSON is supported."
        )

    cache_dir = resolve_cache_directory(model.project_root, cache_root)
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / build_cache_file_name(model.project_root)
    with path.open("w", encoding="utf-8") as f:
        f.write(model.to_json(indent=2))
    logger.debug("  Saved architecture model to %s", path)
    return path


def load_architecture_model(
    project_root: Path | str,
    cache_root: Path | str,
) -> ArchitectureModel | None:
    """Load the cached model for a project root.

    Returns:
        The model with ``cache_file`` set, or None if nothing is cached.

    Raises:
        CacheDecodeError: If the cache file exists but cannot be decoded.
    """
    path = get_cache_path(project_root, cache_root)
    if not path.exists():
        return None

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        model = ArchitectureModel.from_json_dict(data)
    except (json.JSONDecodeError, RecursionError, OSError, ValidationError) as e:
        raise CacheDecodeError(f"Cannot decode cached architecture model {path}: {e}") from e

    model.cache_file = str(path)
    return model
