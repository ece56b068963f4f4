"""Parent/child hierarchy of matched stacks.

Matches are addressed by index into the match list (the arena) through a
name -> index map. Traversal state lives in side tables keyed by index, so
the match models never reference each other directly.
"""

from collections import defaultdict

from stackprobe.errors import CycleError, DuplicateStackError, HierarchyError, UnknownParentError
from stackprobe.models.architecture import TechStackMatch


def index_by_name(matches: list[TechStackMatch]) -> dict[str, int]:
    """Map each stack name to its position in ``matches``.

    Raises:
        HierarchyError: If a match has no name.
        DuplicateStackError: If two matches share a name.
    """
    index: dict[str, int] = {}
    for idx, match in enumerate(matches):
        if not match.name:
            raise HierarchyError("Tech stack match missing name.")
        if match.name in index:
            raise DuplicateStackError(f"Duplicate tech stack name detected: {match.name}")
        index[match.name] = idx
    return index


def resolve_children(matches: list[TechStackMatch], index: dict[str, int]) -> list[list[int]]:
    """Compute the child indices of every match, ordered by child name.

    Raises:
        UnknownParentError: If a match names a parent that is not in ``index``.
    """
    children_by_parent: dict[int, list[int]] = defaultdict(list)
    for idx, match in enumerate(matches):
        if not match.parent:
            continue
        if match.parent not in index:
            raise UnknownParentError(
                f"Tech stack `{match.name}` references unknown parent `{match.parent}`."
            )
        children_by_parent[index[match.parent]].append(idx)

    return [
        sorted(children_by_parent.get(idx, []), key=lambda child: matches[child].name)
        for idx in range(len(matches))
    ]


def compute_aggregates(matches: list[TechStackMatch], children: list[list[int]]) -> list[list[str]]:
    """Aggregate each match's relevant files with those of its subtree.

    Depth-first with memoization: every aggregate is computed exactly once,
    however many ancestors ask for it.

    Raises:
        CycleError: If a match is reached again while still on the active path.
    """
    aggregates: dict[int, list[str]] = {}
    on_path: set[int] = set()

    def visit(idx: int) -> list[str]:
        cached = aggregates.get(idx)
        if cached is not None:
            return cached
        if idx in on_path:
            raise CycleError(matches[idx].name)
        on_path.add(idx)

        total = set(matches[idx].relevant_files)
        for child in children[idx]:
            total.update(visit(child))

        on_path.discard(idx)
        aggregates[idx] = sorted(total)
        return aggregates[idx]

    return [visit(idx) for idx in range(len(matches))]


def build_hierarchy(matches: list[TechStackMatch]) -> list[TechStackMatch]:
    """Link matches into a forest and fill ``children`` / ``aggregated_files``.

    The input matches are left untouched; updated copies are returned in the
    same order.

    Args:
        matches: Successful matches of one recognition run.

    Returns:
        Copies of the matches with hierarchy fields populated.

    Raises:
        DuplicateStackError: Two matches share a name.
        UnknownParentError: A parent name did not match.
        CycleError: The parent relation is cyclic.
    """
    if not matches:
        return []

    index = index_by_name(matches)
    children = resolve_children(matches, index)
    aggregates = compute_aggregates(matches, children)

    return [
        match.model_copy(
            update={
                "children": [matches[child].name for child in children[idx]],
                "aggregated_files": aggregates[idx],
            }
        )
        for idx, match in enumerate(matches)
    ]
