"""Per-rule evaluation: pattern gates, keyword scan, manifest checks.

Gates run cheapest first and short-circuit on the first failure.
"""

from pathlib import Path

from stackprobe.analyzers.keywords import evaluate_keyword_hits
from stackprobe.analyzers.manifests import evaluate_manifest_rules
from stackprobe.analyzers.patterns import (
    all_patterns_satisfied,
    any_pattern_satisfied,
    collect_matching_files,
)
from stackprobe.logging import logger
from stackprobe.models.architecture import ManifestCheckResult, TechStackMatch
from stackprobe.models.rules import RecognitionRule


def passes_pattern_gates(rule: RecognitionRule, files: list[str]) -> bool:
    """Check the allOf / anyOf / excluded file patterns of a rule."""
    if rule.all_of_files and not all_patterns_satisfied(rule.all_of_files, files):
        return False
    if rule.any_of_files and not any_pattern_satisfied(rule.any_of_files, files):
        return False
    if rule.excluded_files and any_pattern_satisfied(rule.excluded_files, files):
        return False
    return True


def build_inactive_files(all_files: list[str], active_files: list[str]) -> list[str]:
    """Files from ``all_files`` that are not in ``active_files``, sorted."""
    active = set(active_files)
    return sorted({f for f in all_files if f not in active})


def evaluate_rule(
    rule: RecognitionRule,
    root: str | Path,
    files: list[str],
    include_inactive_files: bool = True,
) -> TechStackMatch | None:
    """Evaluate one recognition rule against the collected project files.

    Args:
        rule: The rule to evaluate.
        root: Absolute project root, used to read file contents.
        files: Canonical relative file list of the project.
        include_inactive_files: Whether to fill ``inactive_files``.

    Returns:
        A match without ``children``/``aggregated_files`` (the hierarchy
        builder fills those in), or None if any gate fails.
    """
    if not passes_pattern_gates(rule, files):
        logger.debug("  %s: rejected by file patterns", rule.name)
        return None

    relevant_files = collect_matching_files([*rule.all_of_files, *rule.any_of_files], files)

    keyword_hits = evaluate_keyword_hits(rule.keywords, root, relevant_files, files)
    if rule.keywords and len(keyword_hits) != len(rule.keywords):
        logger.debug(
            "  %s: %d keyword hit file(s) for %d keyword(s)",
            rule.name,
            len(keyword_hits),
            len(rule.keywords),
        )
        return None

    manifest_evidence: list[ManifestCheckResult] = []
    if rule.manifests:
        evidence = evaluate_manifest_rules(rule.manifests, root, files)
        if evidence is None:
            logger.debug("  %s: manifest constraints not satisfied", rule.name)
            return None
        manifest_evidence = evidence

    inactive_files = build_inactive_files(files, relevant_files) if include_inactive_files else []

    return TechStackMatch(
        name=rule.name,
        description=rule.description,
        parent=rule.parent,
        relevant_files=relevant_files,
        keyword_hits=sorted(keyword_hits),
        manifest_evidence=manifest_evidence,
        inactive_files=inactive_files,
    )
