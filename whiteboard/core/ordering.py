"""
Chain Validation and Linearization
==================================

Turns an unordered set of lower_id-linked items into a checked,
bottom-to-top sequence. Both passes walk downward with explicit loops,
so chain depth is bounded by memory, not by the interpreter stack.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Set

from ..contracts.base import BoardItem
from ..contracts.errors import (
    DuplicateIdError, DanglingReferenceError, CycleError,
    MultipleChainsError, BranchingError
)


# =============================================================================
# STRUCTURAL VALIDATION (Deterministic, non-recursive)
# =============================================================================

class ChainValidator:
    """
    Check an unordered item set for structural integrity.

    Checks run per item in input order: the dangling-reference check for
    an item precedes its cycle walk, so the first offending item decides
    which error is raised.
    """

    def __init__(self, allow_multiple_chains: bool = True, reject_branching: bool = False):
        self._allow_multiple_chains = allow_multiple_chains
        self._reject_branching = reject_branching

    def build_index(self, items: List[BoardItem]) -> Dict[str, BoardItem]:
        index: Dict[str, BoardItem] = {}
        for item in items:
            if item.id in index:
                raise DuplicateIdError(f"Item with id {item.id} already exists.", item_id=item.id)
            index[item.id] = item
        return index

    def validate(self, items: List[BoardItem], index: Dict[str, BoardItem]) -> None:
        # Ids already proven to reach a bottom (or a dangling end)
        settled: Set[str] = set()

        for item in items:
            if not item.is_bottom and item.lower_id not in index:
                raise DanglingReferenceError(
                    f"Item with lowerId {item.lower_id} does not exist.",
                    item_id=item.id,
                    lower_id=item.lower_id
                )
            self._walk_down(item, index, settled)

        if self._reject_branching:
            self._check_branching(items)

        if not self._allow_multiple_chains:
            bottoms = [item.id for item in items if item.is_bottom]
            if len(bottoms) > 1:
                raise MultipleChainsError(
                    f"Expected a single chain but found {len(bottoms)} bottom items.",
                    bottoms=",".join(bottoms)
                )

    def _walk_down(
        self,
        start: BoardItem,
        index: Dict[str, BoardItem],
        settled: Set[str]
    ) -> None:
        path: List[str] = []
        on_path: Set[str] = set()
        current: Optional[BoardItem] = start

        while current is not None and current.id not in settled:
            if current.id in on_path:
                raise CycleError(f"Cycle detected involving item {current.id}.", item_id=current.id)
            on_path.add(current.id)
            path.append(current.id)
            current = None if current.is_bottom else index.get(current.lower_id)

        settled.update(path)

    def _check_branching(self, items: List[BoardItem]) -> None:
        claimed: Dict[str, str] = {}
        for item in items:
            if item.is_bottom:
                continue
            if item.lower_id in claimed:
                raise BranchingError(
                    f"Items {claimed[item.lower_id]} and {item.id} both sit on {item.lower_id}.",
                    item_id=item.id,
                    lower_id=item.lower_id
                )
            claimed[item.lower_id] = item.id


class ChainLinearizer:
    """
    Produce the bottom-to-top order of a validated item set.

    For each item in input order, its unplaced lower items are placed
    first, bottom-most first. Disjoint chains end up concatenated in the
    order their items are first met in the input.
    """

    def linearize(self, items: List[BoardItem], index: Dict[str, BoardItem]) -> List[BoardItem]:
        ordered: List[BoardItem] = []
        placed: Set[str] = set()

        for item in items:
            pending: List[BoardItem] = []
            current: Optional[BoardItem] = item
            while current is not None and current.id not in placed:
                pending.append(current)
                current = None if current.is_bottom else index.get(current.lower_id)

            while pending:
                node = pending.pop()
                ordered.append(node)
                placed.add(node.id)

        return ordered
