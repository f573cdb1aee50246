"""
Observability & Audit Layer

RESPONSIBILITY: Audit trail of engine operations
ALLOWED INPUTS: Audit entries produced by the core engine
OUTPUTS: AuditLogEntry copies

WHAT THIS LAYER MUST NOT DO:
============================
- Modify engine behavior
- Filter or interpret events (only record them)
- Hold references to live engine state

Diagnostic text logging goes through the stdlib `logging` module at each
call site; this collector keeps the structured, queryable record.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple
import hashlib
import logging

from ..contracts.events import AuditEventType, AuditLogEntry

logger = logging.getLogger(__name__)


class AuditCollector:
    """
    Append-only collector of audit entries.

    Entry ids are derived from a per-collector sequence number so that two
    entries in the same collector never share an id.
    """

    def __init__(self, layer_name: str = "whiteboard"):
        self._layer_name = layer_name
        self._entries: List[AuditLogEntry] = []
        self._sequence: int = 0

    def record(
        self,
        event_type: AuditEventType,
        action: str,
        entity_id: Optional[str] = None,
        metadata: Iterable[Tuple[str, str]] = ()
    ) -> AuditLogEntry:
        """Build and collect an entry; returns it for caller reference."""
        self._sequence += 1
        timestamp = datetime.now(timezone.utc)
        entry_hash = hashlib.sha256(
            f"{self._layer_name}|{self._sequence}|{action}|{timestamp.isoformat()}".encode()
        ).hexdigest()[:16]

        entry = AuditLogEntry(
            entry_id=f"audit_{entry_hash}",
            event_type=event_type,
            timestamp=timestamp,
            action=action,
            entity_id=entity_id,
            metadata=tuple((str(k), str(v)) for k, v in metadata)
        )
        self.collect(entry)
        return entry

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only)."""
        self._entries.append(entry)
        logger.debug("audit %s %s entity=%s", entry.event_type.value, entry.action, entry.entity_id)

    def get_entries(self, event_type: Optional[AuditEventType] = None) -> List[AuditLogEntry]:
        """Get entries, optionally filtered."""
        if event_type is None:
            return list(self._entries)
        return [e for e in self._entries if e.event_type == event_type]

    @property
    def layer_name(self) -> str:
        return self._layer_name

    @property
    def entry_count(self) -> int:
        return len(self._entries)
