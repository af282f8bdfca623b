"""
Exhaustive, conflict-free schedule combinations.

Every requested course contributes exactly one section. The search is a
depth-first backtrack over course groups that works on integer indices into a
flattened section array; Section objects are copied only once, after the
search, for the combinations that survived.

Worst case is the product of the group sizes. Callers that need a bound pass
a ``threading.Event`` and set it from outside (e.g. a timer).
"""
import json
import logging
import threading
from itertools import combinations as pairs_of
from typing import List, Optional, Sequence, Tuple

from app.exceptions import GenerationCancelled
from app.schemas.section import Section
from app.utils.conflict import sections_conflict

logger = logging.getLogger("app.combinations")


def generate_combinations(
    groups: Sequence[Sequence[Section]],
    cancel_event: Optional[threading.Event] = None,
) -> List[List[Section]]:
    if not groups:
        return []
    if any(len(g) == 0 for g in groups):
        return []

    flat: List[Section] = []
    group_indices: List[List[int]] = []
    for group in groups:
        idx = []
        for section in group:
            idx.append(len(flat))
            flat.append(section)
        group_indices.append(idx)

    total_groups = len(group_indices)
    results: List[List[int]] = []
    current: List[int] = []

    def is_compatible(candidate: int) -> bool:
        new = flat[candidate]
        for chosen in current:
            if sections_conflict(new, flat[chosen]):
                return False
        return True

    def backtrack(position: int) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelled(
                f"cancelled after {len(results)} combinations"
            )
        if position == total_groups:
            results.append(list(current))
            return
        for candidate in group_indices[position]:
            if is_compatible(candidate):
                current.append(candidate)
                backtrack(position + 1)
                current.pop()

    backtrack(0)
    logger.info(
        "Generated %d combinations from %d groups (%d sections)",
        len(results), total_groups, len(flat),
    )
    return [[flat[i].model_copy(deep=True) for i in combo] for combo in results]


def find_unresolvable_pairs(
    groups: Sequence[Sequence[Section]],
) -> List[Tuple[int, int]]:
    """
    Index pairs of course groups that can never coexist: every pairing of
    their sections conflicts. Empty groups are not reported here.
    """
    bad = []
    for i, j in pairs_of(range(len(groups)), 2):
        a, b = groups[i], groups[j]
        if not a or not b:
            continue
        if not any(not sections_conflict(sa, sb) for sa in a for sb in b):
            bad.append((i, j))
    return bad


def serialize_combination(combination: Sequence[Section]) -> str:
    """Canonical JSON; doubles as the storage key of the combination."""
    return json.dumps(
        [s.model_dump(mode="json") for s in combination],
        separators=(",", ":"),
        ensure_ascii=False,
    )


def deserialize_combination(data: str) -> List[Section]:
    return [Section.model_validate(item) for item in json.loads(data)]
