"""Recognition engine: file collection, rule evaluation, hierarchy."""

from stackprobe.analyzers.evaluator import build_inactive_files, evaluate_rule, passes_pattern_gates
from stackprobe.analyzers.files import canonicalize_path, collect_project_files
from stackprobe.analyzers.hierarchy import build_hierarchy
from stackprobe.analyzers.keywords import (
    MAX_KEYWORD_SCAN_BYTES,
    evaluate_keyword_hits,
    find_keyword_in_files,
)
from stackprobe.analyzers.manifests import (
    evaluate_manifest_rule,
    evaluate_manifest_rules,
    extract_json_dependencies,
    extract_text_dependencies,
)
from stackprobe.analyzers.patterns import (
    all_patterns_satisfied,
    any_pattern_satisfied,
    collect_matching_files,
    matches_pattern,
)
from stackprobe.analyzers.rule_loader import (
    load_default_rules,
    load_profiles_dir,
    load_rules,
    load_rules_file,
    parse_rule_container,
)

__all__ = [
    "MAX_KEYWORD_SCAN_BYTES",
    "all_patterns_satisfied",
    "any_pattern_satisfied",
    "build_hierarchy",
    "build_inactive_files",
    "canonicalize_path",
    "collect_matching_files",
    "collect_project_files",
    "evaluate_keyword_hits",
    "evaluate_manifest_rule",
    "evaluate_manifest_rules",
    "evaluate_rule",
    "extract_json_dependencies",
    "extract_text_dependencies",
    "find_keyword_in_files",
    "load_default_rules",
    "load_profiles_dir",
    "load_rules",
    "load_rules_file",
    "matches_pattern",
    "parse_rule_container",
    "passes_pattern_gates",
]
