"""
Whiteboard Chain Ordering Engine

An in-memory ordering engine for items on a shared tutor/student
whiteboard. Order is never stored as an index: each item names the item
beneath it through `lower_id`, and the engine rebuilds, guards and
extends that implicit chain.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable types: BoardItem, Error/ErrorCode, audit and snapshot records
   - Typed exceptions for every structural failure

2. CORE ENGINE (core/)
   - Validation (duplicates, dangling references, cycles)
   - Linearization into bottom-to-top order
   - Append-only growth at the top, extraction of re-linked copies
   - Topology diagnostics over the lower_id graph (networkx)

3. OBSERVABILITY (observability/)
   - Append-only audit collector for engine operations

4. DOMAIN (domain/)
   - Conversion to and from persistence rows {"id", "lowerId", "data"}

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: items are frozen; reads return new containers
- Append-only: the only mutation is adding a new top item
- Deterministic: the same input set always yields the same order
- Explicit errors: no silent fallbacks, every failure is a typed exception
"""

from .contracts import (
    BoardItem,
    Error,
    ErrorCode,
    ChainValidationError,
    DuplicateIdError,
    DanglingReferenceError,
    CycleError,
    BrokenChainError,
    NotFoundError,
    MultipleChainsError,
    BranchingError,
    IdGenerationError,
    AuditEventType,
    AuditLogEntry,
    ChainSnapshot,
    ChainMetrics,
)
from .core import Whiteboard, WhiteboardConfig, ChainValidator, ChainLinearizer
from .core.identity import IdGenerator, CounterIdGenerator, SeededIdGenerator, RandomIdGenerator
from .core.topology import ChainTopology
from .observability import AuditCollector

__version__ = "1.0.0"

__all__ = [
    "BoardItem",
    "Error",
    "ErrorCode",
    "ChainValidationError",
    "DuplicateIdError",
    "DanglingReferenceError",
    "CycleError",
    "BrokenChainError",
    "NotFoundError",
    "MultipleChainsError",
    "BranchingError",
    "IdGenerationError",
    "AuditEventType",
    "AuditLogEntry",
    "ChainSnapshot",
    "ChainMetrics",
    "Whiteboard",
    "WhiteboardConfig",
    "ChainValidator",
    "ChainLinearizer",
    "IdGenerator",
    "CounterIdGenerator",
    "SeededIdGenerator",
    "RandomIdGenerator",
    "ChainTopology",
    "AuditCollector",
]
