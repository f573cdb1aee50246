"""
Chain Validation Errors

Every structural failure surfaces as a typed exception carrying an
immutable `Error` record. No retries, no defaults, no partial state.
"""

from __future__ import annotations
from typing import Optional

from .base import Error, ErrorCode


class ChainValidationError(ValueError):
    """Base class for every whiteboard integrity failure."""

    code: ErrorCode = ErrorCode.BROKEN_CHAIN

    def __init__(self, message: str, item_id: Optional[str] = None, **context: str):
        super().__init__(message)
        self.item_id = item_id
        if item_id is not None:
            context.setdefault("item_id", item_id)
        self.error = Error.create(self.code, message, **context)


class DuplicateIdError(ChainValidationError):
    """Two items share an id (input vs input, or new vs existing)."""
    code = ErrorCode.DUPLICATE_ID


class DanglingReferenceError(ChainValidationError):
    """A lower_id names an item that does not exist."""
    code = ErrorCode.DANGLING_REFERENCE


class CycleError(ChainValidationError):
    """Following lower_id links revisits an item."""
    code = ErrorCode.CYCLE_DETECTED


class BrokenChainError(ChainValidationError):
    """An appended item does not sit on the current top."""
    code = ErrorCode.BROKEN_CHAIN


class NotFoundError(ChainValidationError):
    """A requested id is not on the whiteboard."""
    code = ErrorCode.ITEM_NOT_FOUND


class MultipleChainsError(ChainValidationError):
    """More than one bottom item while single-chain mode is enforced."""
    code = ErrorCode.MULTIPLE_CHAINS


class BranchingError(ChainValidationError):
    """Two items claim the same lower item while branching is rejected."""
    code = ErrorCode.BRANCHING_CHAIN


class IdGenerationError(ChainValidationError):
    """The id generator kept producing ids that are already taken."""
    code = ErrorCode.ID_GENERATION_EXHAUSTED
