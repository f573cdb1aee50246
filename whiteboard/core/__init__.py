"""
Core Chain Ordering Engine

RESPONSIBILITY: Validate, linearize, extend and extract whiteboard items
ALLOWED INPUTS: BoardItem records (unordered) from the persistence layer
OUTPUTS: Bottom-to-top item lists, freshly linked extractions, snapshots

WHAT THIS LAYER MUST NOT DO:
============================
- Persist data (the caller stores add/extract results)
- Render or paint items (the UI consumes items() in order)
- Merge concurrent writers (one engine per board, serialized by caller)
- Reorder or remove interior items

BOUNDARY ENFORCEMENT:
=====================
- Callers receive NEW containers, never the live item list
- Caller-supplied items are never mutated (BoardItem is frozen)
- Every failure raises a typed ChainValidationError; a failed construct
  yields no engine and a failed add leaves the engine unchanged
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Set, Union
import copy
import logging

from ..contracts.base import BoardItem
from ..contracts.errors import (
    ChainValidationError, DuplicateIdError, BrokenChainError, NotFoundError,
    IdGenerationError
)
from ..contracts.events import AuditEventType, ChainSnapshot, ChainMetrics
from ..observability import AuditCollector
from .identity import IdGenerator, RandomIdGenerator
from .integrity import group_chains, compute_snapshot, check_placement
from .ordering import ChainValidator, ChainLinearizer
from .topology import ChainTopology

logger = logging.getLogger(__name__)


# =============================================================================
# WHITEBOARD ENGINE
# =============================================================================

@dataclass
class WhiteboardConfig:
    """Configuration for the chain ordering engine."""
    allow_multiple_chains: bool = True
    reject_branching: bool = False
    max_id_attempts: int = 100
    enable_audit: bool = True


Selection = Union[BoardItem, str]


class Whiteboard:
    """
    Shared whiteboard between a tutor and a student.

    Each new item goes on top of the previous top item. Order is implied
    by `lower_id` links, like a linked list: the bottom item has
    `lower_id=None`, the next one points at the bottom's id, and so on.

    The engine owns its bottom-to-top list. Reads hand out copies of the
    list (the items themselves are immutable and shared by reference).
    """

    def __init__(
        self,
        items: Iterable[BoardItem] = (),
        config: Optional[WhiteboardConfig] = None,
        id_generator: Optional[IdGenerator] = None,
        audit: Optional[AuditCollector] = None
    ):
        self._config = config or WhiteboardConfig()
        self._id_generator = id_generator or RandomIdGenerator()
        self._audit = audit or AuditCollector()
        self._validator = ChainValidator(
            allow_multiple_chains=self._config.allow_multiple_chains,
            reject_branching=self._config.reject_branching
        )
        self._linearizer = ChainLinearizer()
        # Every id handed out by extract(), so later calls never reuse one
        self._issued: Set[str] = set()

        incoming = [self._require_item(item) for item in items]
        try:
            index = self._validator.build_index(incoming)
            self._validator.validate(incoming, index)
        except ChainValidationError as exc:
            self._log_failure("construct", exc)
            raise

        self._items: List[BoardItem] = self._linearizer.linearize(incoming, index)
        self._index: Dict[str, BoardItem] = index
        self._positions: Dict[str, int] = {item.id: pos for pos, item in enumerate(self._items)}

        logger.debug("whiteboard constructed with %d items", len(self._items))
        self._log_audit(
            AuditEventType.CONSTRUCT, "construct",
            entity_id=self._items[-1].id if self._items else None,
            metadata=(("item_count", str(len(self._items))),)
        )

    @classmethod
    def from_dicts(cls, rows: Iterable[dict], **kwargs) -> Whiteboard:
        """Build from persistence rows shaped {"id", "lowerId", "data"}."""
        return cls([BoardItem.from_dict(row) for row in rows], **kwargs)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def items(self) -> List[BoardItem]:
        """All items, bottom to top, in a new list."""
        return list(self._items)

    def top(self) -> Optional[BoardItem]:
        """The most recently added item, or None when the board is empty."""
        return self._items[-1] if self._items else None

    def bottom(self) -> Optional[BoardItem]:
        return self._items[0] if self._items else None

    def get(self, item_id: str) -> Optional[BoardItem]:
        return self._index.get(item_id)

    def position(self, item_id: str) -> int:
        """Zero-based position counted from the bottom."""
        if item_id not in self._positions:
            raise NotFoundError(f"Item with id {item_id} does not exist on the whiteboard.", item_id=item_id)
        return self._positions[item_id]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, str) and item_id in self._index

    def __iter__(self) -> Iterator[BoardItem]:
        return iter(list(self._items))

    # -------------------------------------------------------------------------
    # Mutation (append-only)
    # -------------------------------------------------------------------------

    def add(self, item: BoardItem) -> None:
        """
        Put an item on top of the board.

        The id must be new and `lower_id` must equal the current top's id.
        On an empty board `lower_id` must be None.
        """
        item = self._require_item(item)
        try:
            if item.id in self._index:
                raise DuplicateIdError(f"Item with id {item.id} already exists.", item_id=item.id)

            top = self.top()
            if top is None:
                if item.lower_id is not None:
                    raise BrokenChainError(
                        f"Item with lowerId {item.lower_id} cannot be added to an empty whiteboard.",
                        item_id=item.id,
                        lower_id=item.lower_id
                    )
            elif item.lower_id != top.id:
                raise BrokenChainError(
                    f"Item with lowerId {item.lower_id} does not match the current top item.",
                    item_id=item.id,
                    lower_id=str(item.lower_id),
                    top_id=top.id
                )
        except ChainValidationError as exc:
            self._log_failure("add", exc)
            raise

        self._positions[item.id] = len(self._items)
        self._index[item.id] = item
        self._items.append(item)

        logger.debug("added %s on top of %s", item.id, item.lower_id)
        self._log_audit(AuditEventType.ADD, "add", entity_id=item.id)

    # -------------------------------------------------------------------------
    # Extraction
    # -------------------------------------------------------------------------

    def extract(self, selection: Iterable[Selection]) -> List[BoardItem]:
        """
        Duplicate a selection of board items as a new, self-linked chain.

        Given items already on the board, in any order, return copies that:
         * each carry a new id, unused on the board, among the copies and by
           any earlier extraction from this board
         * link through lower_id in the order the originals appear on the
           board; the lowest selected copy has lower_id None

        Example: with dog <- rabbit <- cat <- hamster on the board, selecting
        (hamster, rabbit) yields rabbit' (lower_id None) and hamster'
        (lower_id = rabbit'.id), whatever ids the generator picks.

        The result list is in board order, but only the lower_id links are
        part of the contract. Selecting the same id twice yields one copy.
        """
        selected: Set[str] = set()
        try:
            for entry in selection:
                item_id = self._selection_id(entry)
                if item_id not in self._index:
                    raise NotFoundError(
                        f"Item with id {item_id} does not exist on the whiteboard.",
                        item_id=item_id
                    )
                selected.add(item_id)
        except ChainValidationError as exc:
            self._log_failure("extract", exc)
            raise

        ordered_ids = sorted(selected, key=self._positions.__getitem__)
        taken: Set[str] = set(self._index) | self._issued

        extracted: List[BoardItem] = []
        lower_id: Optional[str] = None
        for item_id in ordered_ids:
            original = self._index[item_id]
            new_id = self._fresh_id(taken)
            extracted.append(BoardItem(id=new_id, lower_id=lower_id, data=copy.copy(original.data)))
            lower_id = new_id

        self._issued.update(copied.id for copied in extracted)
        logger.debug("extracted %d items", len(extracted))
        self._log_audit(
            AuditEventType.EXTRACT, "extract",
            metadata=tuple(("source", item_id) for item_id in ordered_ids)
        )
        return extracted

    def _fresh_id(self, taken: Set[str]) -> str:
        for _ in range(self._config.max_id_attempts):
            candidate = self._id_generator.next_id()
            if candidate not in taken:
                taken.add(candidate)
                return candidate
        raise IdGenerationError(
            f"No unused id after {self._config.max_id_attempts} attempts.",
            attempts=str(self._config.max_id_attempts)
        )

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def chains(self) -> List[List[BoardItem]]:
        """Disjoint chains, each bottom to top, ordered by their bottom's position."""
        return group_chains(self._items, self._positions)

    def metrics(self) -> ChainMetrics:
        topology = ChainTopology()
        topology.build(self._items)
        return topology.compute_metrics()

    def snapshot(self) -> ChainSnapshot:
        """Immutable view of the current order with a hash chain over ids."""
        return compute_snapshot(self._items)

    def verify(self) -> None:
        """
        Re-check the current sequence.

        VERIFIES:
        1. Structural rules used at construction still hold
        2. Every item sits above the item it references
        """
        try:
            index = self._validator.build_index(self._items)
            self._validator.validate(self._items, index)
            check_placement(self._items, self._positions)
        except ChainValidationError as exc:
            self._log_failure("verify", exc)
            raise

        self._log_audit(AuditEventType.VERIFY, "verify", metadata=(("item_count", str(len(self._items))),))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @property
    def audit(self) -> AuditCollector:
        return self._audit

    @staticmethod
    def _require_item(item: object) -> BoardItem:
        if not isinstance(item, BoardItem):
            raise TypeError(f"Expected BoardItem, got {type(item).__name__}")
        return item

    @staticmethod
    def _selection_id(entry: Selection) -> str:
        if isinstance(entry, BoardItem):
            return entry.id
        if isinstance(entry, str):
            return entry
        raise TypeError(f"Expected BoardItem or id string, got {type(entry).__name__}")

    def _log_audit(self, event_type: AuditEventType, action: str, entity_id: Optional[str] = None, metadata: tuple = ()):
        if self._config.enable_audit:
            self._audit.record(event_type, action, entity_id=entity_id, metadata=metadata)

    def _log_failure(self, action: str, exc: ChainValidationError):
        exc.error = exc.error.with_context("action", action)
        logger.warning("%s rejected: %s", action, exc)
        self._log_audit(
            AuditEventType.VALIDATION_FAILURE, action,
            entity_id=exc.item_id,
            metadata=(("code", exc.code.name),)
        )


__all__ = [
    "ChainValidator",
    "ChainLinearizer",
    "WhiteboardConfig",
    "Whiteboard",
    "ChainTopology",
]
