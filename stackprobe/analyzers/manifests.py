"""Dependency manifest evaluation.

Finds manifest candidates by pattern, extracts the declared dependency
names, and checks them against a rule's ``required`` / ``anyOf`` sets.
Supported formats:

- ``json``: keys of dependency-map fields (package.json, composer.json, ...)
- ``text``: one requirement per line (requirements.txt and similar)
"""

import json
from pathlib import Path

from stackprobe.analyzers.patterns import collect_matching_files
from stackprobe.logging import logger
from stackprobe.models.architecture import ManifestCheckResult
from stackprobe.models.rules import ManifestRule

# Version specifier tokens, checked in this order; the first one present
# on a line ends the dependency name.
VERSION_SEPARATORS: tuple[str, ...] = ("==", ">=", "<=", "~=", "!=", "=", ">", "<", " ")


def extract_json_dependencies(content: str, dependency_fields: list[str]) -> list[str] | None:
    """Extract dependency names from a JSON manifest.

    Args:
        content: Raw manifest text.
        dependency_fields: Top-level fields holding dependency maps.

    Returns:
        Sorted dependency names, or None if the manifest is not a JSON object.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None

    collected: set[str] = set()
    for field in dependency_fields:
        deps = data.get(field)
        if isinstance(deps, dict):
            collected.update(deps.keys())
    return sorted(collected)


def _dependency_name(line: str) -> str:
    stripped = line.strip()
    comment = stripped.find("#")
    if comment != -1:
        stripped = stripped[:comment].strip()
    if not stripped:
        return ""

    bracket = stripped.find("[")
    if bracket != -1:
        stripped = stripped[:bracket]

    for sep in VERSION_SEPARATORS:
        pos = stripped.find(sep)
        if pos != -1:
            stripped = stripped[:pos]
            break
    return stripped.strip()


def extract_text_dependencies(content: str) -> list[str]:
    """Extract dependency names from a line-oriented manifest.

    Examples:
        >>> extract_text_dependencies("Flask==2.0.1  # web framework\\n")
        ['flask']

    When no line yields a name, every whitespace-separated token of the
    content is taken as a dependency instead.
    """
    normalized = content.lower()
    deps: set[str] = set()

    for line in normalized.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        name = _dependency_name(stripped)
        if name:
            deps.add(name)

    if not deps:
        deps.update(token for token in normalized.split() if token)

    return sorted(deps)


def load_manifest_dependencies(manifest_path: Path, rule: ManifestRule) -> list[str] | None:
    """Read a manifest and extract its dependencies per the rule's format.

    Returns None when the file cannot be read or parsed.
    """
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("  Cannot read manifest %s: %s", manifest_path, e)
        return None

    if rule.format == "json":
        return extract_json_dependencies(content, rule.effective_dependency_fields)
    return extract_text_dependencies(content)


def _intersection(expected: list[str], actual: list[str]) -> list[str]:
    found = set(actual)
    return sorted({dep for dep in expected if dep in found})


def evaluate_manifest_rule(
    rule: ManifestRule,
    root: str | Path,
    files: list[str],
) -> ManifestCheckResult | None:
    """Check one manifest rule against the project.

    Candidates are tried in sorted order; the first one that is readable,
    parseable, and satisfies the constraints provides the evidence.

    Returns:
        The evidence, or None if no candidate satisfies the rule.
    """
    root = Path(root)
    candidates = collect_matching_files([rule.path_pattern], files)

    for rel_path in candidates:
        manifest_path = root / rel_path
        if not manifest_path.exists():
            continue

        dependencies = load_manifest_dependencies(manifest_path, rule)
        if dependencies is None:
            logger.debug("  Unparseable %s manifest: %s", rule.format, rel_path)
            continue

        required_satisfied = _intersection(rule.required, dependencies)
        any_satisfied = _intersection(rule.any_of, dependencies)

        if rule.required and len(required_satisfied) != len(rule.required):
            continue
        if rule.any_of and not any_satisfied:
            continue

        return ManifestCheckResult(
            manifest_path=rel_path,
            format=rule.format,
            required_satisfied=required_satisfied,
            any_satisfied=any_satisfied,
        )

    return None


def evaluate_manifest_rules(
    rules: list[ManifestRule],
    root: str | Path,
    files: list[str],
) -> list[ManifestCheckResult] | None:
    """Evaluate every manifest rule of a stack.

    Returns:
        One evidence entry per manifest rule, or None as soon as one fails.
    """
    evidence: list[ManifestCheckResult] = []
    for rule in rules:
        result = evaluate_manifest_rule(rule, root, files)
        if result is None:
            return None
        evidence.append(result)
    return evidence
