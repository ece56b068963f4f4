"""Loading recognition rules from JSON documents.

A rule document is either a single rule object or a container of the form
``{"rules": [...]}``. The container shape is tried first.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stackprobe.errors import RuleLoadError
from stackprobe.logging import logger
from stackprobe.models.rules import RecognitionRule

DEFAULT_PROFILES_DIR = Path(__file__).resolve().parent.parent / "profiles"


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"`{loc}`: {err['msg']}")
    return "; ".join(parts)


def parse_rule(value: Any, source_label: str) -> RecognitionRule:
    """Decode one rule definition.

    Raises:
        RuleLoadError: If the definition is not an object or is invalid.
    """
    if not isinstance(value, dict):
        raise RuleLoadError(f"Recognition rule definition must be a JSON object in {source_label}")

    rule_label = value.get("name") if isinstance(value.get("name"), str) else "<unnamed>"
    try:
        return RecognitionRule.model_validate(value)
    except ValidationError as e:
        raise RuleLoadError(
            f"Invalid recognition rule `{rule_label}` in {source_label}: "
            f"{_describe_validation_error(e)}"
        ) from e


def parse_rule_container(value: Any, source_label: str) -> list[RecognitionRule]:
    """Decode a rule document into its list of rules.

    Args:
        value: Parsed JSON document.
        source_label: Where the document came from, used in error messages.

    Returns:
        The rules in document order.

    Raises:
        RuleLoadError: If the document is malformed or holds no rules.
    """
    if not isinstance(value, dict):
        raise RuleLoadError(f"Recognition rule file must be a JSON object: {source_label}")

    rules_field = value.get("rules")
    if rules_field is not None:
        if not isinstance(rules_field, list):
            raise RuleLoadError(f"JSON field `rules` must be an array in {source_label}")
        parsed = [parse_rule(rule, source_label) for rule in rules_field]
        if not parsed:
            raise RuleLoadError(f"Recognition rule file did not contain any rules: {source_label}")
        return parsed

    return [parse_rule(value, source_label)]


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, RecursionError) as e:
        raise RuleLoadError(f"Invalid JSON in recognition rule file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise RuleLoadError(f"Cannot read recognition rule file {path}: {e}") from e


def load_rules_file(config_path: str | Path) -> list[RecognitionRule]:
    """Load every rule from a single JSON rule file."""
    path = Path(config_path)
    if not path.exists():
        raise RuleLoadError(f"Recognition rules file does not exist: {path}")
    return parse_rule_container(_read_json(path), str(path))


def list_profile_files(profiles_dir: str | Path) -> list[Path]:
    """JSON profile files directly inside a directory, sorted by path."""
    directory = Path(profiles_dir)
    if not directory.exists():
        raise RuleLoadError(f"Recognition profiles directory does not exist: {directory}")
    if not directory.is_dir():
        raise RuleLoadError(f"Recognition profiles path is not a directory: {directory}")

    return sorted(
        entry for entry in directory.iterdir()
        if entry.is_file() and entry.suffix.lower() == ".json"
    )


def load_profiles_dir(profiles_dir: str | Path) -> list[RecognitionRule]:
    """Load and concatenate the rules of every profile in a directory.

    Profiles are read in sorted file order, so rule order is stable.
    """
    profile_files = list_profile_files(profiles_dir)
    if not profile_files:
        raise RuleLoadError(f"No JSON profiles found in directory: {profiles_dir}")

    rules: list[RecognitionRule] = []
    for profile in profile_files:
        rules.extend(parse_rule_container(_read_json(profile), str(profile)))
    logger.debug("  Loaded %d rules from %d profiles in %s", len(rules), len(profile_files), profiles_dir)

    if not rules:
        raise RuleLoadError(
            f"No recognition rules could be loaded from profiles directory: {profiles_dir}"
        )
    return rules


def load_rules(source: str | Path) -> list[RecognitionRule]:
    """Load rules from a rule file or a profiles directory."""
    path = Path(source)
    if path.is_dir():
        return load_profiles_dir(path)
    return load_rules_file(path)


def load_default_rules() -> list[RecognitionRule]:
    """Load the rule catalog bundled with stackprobe."""
    return load_profiles_dir(DEFAULT_PROFILES_DIR)
