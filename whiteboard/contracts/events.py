"""
Event and Snapshot Contracts

Immutable records emitted by the engine: audit entries, chain snapshots
and structural metrics. Consumers receive these by value and can never
reach back into engine state through them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class AuditEventType(Enum):
    """Explicit audit event types."""
    CONSTRUCT = "construct"
    ADD = "add"
    EXTRACT = "extract"
    VERIFY = "verify"
    VALIDATION_FAILURE = "validation_failure"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: datetime
    action: str
    entity_id: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ChainSnapshot:
    """
    Immutable view of the board order at one point in time.

    WHY THIS TYPE:
    - Captures ordering without exposing the live list
    - `state_hash` is a hash chain over the ordered ids, so the same
      sequence always produces the same hash
    """
    item_ids: Tuple[str, ...]
    head_id: Optional[str]
    state_hash: str

    @property
    def item_count(self) -> int:
        return len(self.item_ids)

    @staticmethod
    def empty() -> ChainSnapshot:
        return ChainSnapshot(item_ids=(), head_id=None, state_hash="")


@dataclass(frozen=True)
class ChainMetrics:
    """Immutable structural metrics for the lower_id graph."""
    item_count: int
    link_count: int
    chain_count: int
    bottom_count: int
    branch_point_count: int
    longest_chain: int

    @property
    def is_single_chain(self) -> bool:
        return self.chain_count <= 1
