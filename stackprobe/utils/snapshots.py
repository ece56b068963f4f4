"""Change summaries between architecture models.

Compares a fresh recognition result with the model previously cached for
the same project, so "what changed since the last run" can be reported
before the cache entry is overwritten.
"""

from typing import Any

from stackprobe.models.architecture import ArchitectureModel, TechStackMatch


def _list_delta(current: list[str], previous: list[str]) -> dict[str, list[str]]:
    cur, prev = set(current), set(previous)
    return {"added": sorted(cur - prev), "removed": sorted(prev - cur)}


def _stack_delta(current: TechStackMatch, previous: TechStackMatch) -> dict[str, Any]:
    delta: dict[str, Any] = {}
    files = _list_delta(current.relevant_files, previous.relevant_files)
    if files["added"] or files["removed"]:
        delta["relevant_files"] = files
    if current.parent != previous.parent:
        delta["parent"] = (previous.parent, current.parent)
    return delta


def diff_models(
    current: ArchitectureModel,
    previous: ArchitectureModel | None,
) -> dict[str, Any]:
    """Compute what changed between two models of the same project.

    Args:
        current: Latest model.
        previous: Previously cached model, or None on a first run.

    Returns:
        Dict with added_stacks, removed_stacks, changed_stacks (per stack
        name), unclassified (added/removed files), and previous_generated_at.
    """
    if previous is None:
        return {
            "added_stacks": [stack.name for stack in current.tech_stacks],
            "removed_stacks": [],
            "changed_stacks": {},
            "unclassified": {"added": list(current.unclassified_files), "removed": []},
            "previous_generated_at": None,
        }

    prev_by_name = {stack.name: stack for stack in previous.tech_stacks}
    cur_names = {stack.name for stack in current.tech_stacks}

    changed: dict[str, Any] = {}
    for stack in current.tech_stacks:
        old = prev_by_name.get(stack.name)
        if old is None:
            continue
        delta = _stack_delta(stack, old)
        if delta:
            changed[stack.name] = delta

    return {
        "added_stacks": [s.name for s in current.tech_stacks if s.name not in prev_by_name],
        "removed_stacks": [s.name for s in previous.tech_stacks if s.name not in cur_names],
        "changed_stacks": changed,
        "unclassified": _list_delta(current.unclassified_files, previous.unclassified_files),
        "previous_generated_at": previous.generated_at.isoformat(),
    }


def has_changes(delta: dict[str, Any]) -> bool:
    """True if a diff reports any change."""
    return bool(
        delta["added_stacks"]
        or delta["removed_stacks"]
        or delta["changed_stacks"]
        or delta["unclassified"]["added"]
        or delta["unclassified"]["removed"]
    )
