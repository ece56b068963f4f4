"""Literal keyword scanning inside project files."""

from pathlib import Path

from stackprobe.logging import logger

# Files larger than this are never scanned for keywords.
MAX_KEYWORD_SCAN_BYTES = 1_048_576  # 1 MiB


def find_keyword_in_files(keyword: str, root: str | Path, files: list[str]) -> str | None:
    """Return the first file (in list order) containing ``keyword``.

    Missing, oversized, unreadable, or undecodable files are skipped.
    The comparison is a case-sensitive substring test.
    """
    root = Path(root)
    for rel_path in files:
        path = root / rel_path
        try:
            if not path.is_file() or path.stat().st_size > MAX_KEYWORD_SCAN_BYTES:
                continue
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("  Skipping %s during keyword scan: %s", rel_path, e)
            continue
        if keyword in content:
            return rel_path
    return None


def evaluate_keyword_hits(
    keywords: list[str],
    root: str | Path,
    relevant_files: list[str],
    all_files: list[str],
) -> set[str]:
    """Collect the files in which each keyword was first found.

    Searches ``relevant_files`` when non-empty, otherwise ``all_files``.
    Hits are deduplicated: two keywords found in the same file yield a single
    entry, so callers comparing ``len(hits)`` with ``len(keywords)`` reject
    rules whose keywords share a file.
    """
    if not keywords:
        return set()

    targets = relevant_files if relevant_files else all_files
    hits: set[str] = set()
    for keyword in keywords:
        hit = find_keyword_in_files(keyword, root, targets)
        if hit is not None:
            hits.add(hit)
    return hits
