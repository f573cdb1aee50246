"""
Contracts Layer

Immutable types shared by the core, observability and domain layers.
Layers import from here, never from each other's implementations.
"""

from .base import BoardItem, Error, ErrorCode
from .errors import (
    ChainValidationError,
    DuplicateIdError,
    DanglingReferenceError,
    CycleError,
    BrokenChainError,
    NotFoundError,
    MultipleChainsError,
    BranchingError,
    IdGenerationError,
)
from .events import AuditEventType, AuditLogEntry, ChainSnapshot, ChainMetrics

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
]
