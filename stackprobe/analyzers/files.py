"""Project file collection.

Produces the canonical file list every rule is evaluated against: paths
relative to the project root, ``/`` separated, original case, sorted.
"""

import os
from pathlib import Path

from stackprobe.errors import ProjectRootError
from stackprobe.logging import logger


def canonicalize_path(path: str) -> str:
    """Normalize path separators to forward slashes."""
    return path.replace("\\", "/")


def collect_project_files(project_root: str | Path) -> list[str]:
    """List every file under a project root.

    No filtering happens here; which files matter is decided by the rules.

    Args:
        project_root: Absolute path of the project.

    Returns:
        Sorted relative file paths.

    Raises:
        ProjectRootError: If the root does not exist or is not a directory.
    """
    root = Path(project_root)
    if not root.exists():
        raise ProjectRootError(f"Project root does not exist: {root}")
    if not root.is_dir():
        raise ProjectRootError(f"Not a directory: {root}")

    def _raise(error: OSError) -> None:
        raise ProjectRootError(f"Cannot read project root {root}: {error}") from error

    # Symlinked directories are followed; a link back to a directory on the
    # current path is skipped.
    top = str(root)
    chains: dict[str, frozenset[str]] = {top: frozenset({os.path.realpath(top)})}

    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(top, onerror=_raise, followlinks=True):
        chain = chains.pop(dirpath)
        kept: list[str] = []
        for dname in dirnames:
            sub = os.path.join(dirpath, dname)
            real = os.path.realpath(sub)
            if real in chain:
                logger.debug("  Skipping directory link loop at %s", sub)
                continue
            kept.append(dname)
            chains[sub] = chain | {real}
        dirnames[:] = kept

        for fname in filenames:
            rel = os.path.relpath(os.path.join(dirpath, fname), root)
            files.append(canonicalize_path(rel))

    files.sort()
    return files
