"""Glob matching of rule patterns against the collected file list.

Matching is case-insensitive and works on ``/`` separated relative paths.
``*`` and ``?`` also match across ``/``, so ``*.tsx`` matches
``src/app.tsx``. ``{a,b}`` alternation is expanded before matching.
"""

import fnmatch
import re
from collections.abc import Iterable
from functools import lru_cache

from stackprobe.analyzers.files import canonicalize_path

_BRACE_PATTERN = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations into plain glob patterns.

    Examples:
        >>> expand_braces("*.{js,ts}")
        ['*.js', '*.ts']
    """
    match = _BRACE_PATTERN.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


@lru_cache(maxsize=1024)
def _compile(pattern: str) -> tuple[re.Pattern[str], ...]:
    normalized = canonicalize_path(pattern).lower()
    return tuple(re.compile(fnmatch.translate(p)) for p in expand_braces(normalized))


def matches_pattern(path: str, pattern: str) -> bool:
    """Check whether a relative path matches a glob pattern."""
    normalized = canonicalize_path(path).lower()
    return any(regex.match(normalized) for regex in _compile(pattern))


def all_patterns_satisfied(patterns: Iterable[str], files: list[str]) -> bool:
    """True if every pattern matches at least one file."""
    return all(any(matches_pattern(f, pattern) for f in files) for pattern in patterns)


def any_pattern_satisfied(patterns: Iterable[str], files: list[str]) -> bool:
    """True if at least one pattern matches at least one file."""
    return any(any(matches_pattern(f, pattern) for f in files) for pattern in patterns)


def collect_matching_files(patterns: Iterable[str], files: list[str]) -> list[str]:
    """Sorted, deduplicated files matching any of the patterns."""
    patterns = list(patterns)
    found = {f for f in files if any(matches_pattern(f, pattern) for pattern in patterns)}
    return sorted(found)
