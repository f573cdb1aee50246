"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.
No behavior, no side effects, no dependencies.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    No silent fallbacks - every error state is enumerated.
    """
    # Structural errors (construction)
    DUPLICATE_ID = auto()
    DANGLING_REFERENCE = auto()
    CYCLE_DETECTED = auto()
    MULTIPLE_CHAINS = auto()
    BRANCHING_CHAIN = auto()

    # Mutation errors
    BROKEN_CHAIN = auto()

    # Query / extraction errors
    ITEM_NOT_FOUND = auto()
    ID_GENERATION_EXHAUSTED = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and queried.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def create(code: ErrorCode, message: str, **context: str) -> Error:
        return Error(
            code=code,
            message=message,
            timestamp=datetime.now(timezone.utc),
            context=tuple((key, str(value)) for key, value in sorted(context.items()))
        )

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )


# =============================================================================
# BOARD ITEM (the linked record)
# =============================================================================

@dataclass(frozen=True)
class BoardItem:
    """
    One item on the whiteboard.

    Order is implicit: `lower_id` names the item directly beneath this one.
    `lower_id is None` is the only way to mark a bottom item. Falsy ids
    such as "" are NOT treated as "no lower item".

    `data` is opaque to the engine and never inspected.
    """
    id: str
    lower_id: Optional[str] = None
    data: Any = None

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("BoardItem id must be a non-empty string")
        if self.lower_id is not None and not isinstance(self.lower_id, str):
            raise ValueError("BoardItem lower_id must be a string or None")

    @property
    def is_bottom(self) -> bool:
        return self.lower_id is None

    def to_dict(self) -> dict:
        """Persistence shape: {"id", "lowerId", "data"}."""
        return {"id": self.id, "lowerId": self.lower_id, "data": self.data}

    @staticmethod
    def from_dict(row: Mapping[str, Any]) -> BoardItem:
        """Accept both the persistence key `lowerId` and `lower_id`."""
        if "lowerId" in row:
            lower_id = row["lowerId"]
        else:
            lower_id = row.get("lower_id")
        return BoardItem(id=row["id"], lower_id=lower_id, data=row.get("data"))
