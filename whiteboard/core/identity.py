"""
Identity Generation
===================

Sources of fresh item ids for extraction.

The engine consults a generator but never owns its entropy. Production
code uses random ids; tests inject a counter or a seeded generator so
uniqueness can be asserted deterministically.
"""

from __future__ import annotations
import hashlib
import secrets
import string

_BASE36 = string.digits + string.ascii_lowercase


class IdGenerator:
    """
    Abstract interface for id sources.

    WHY ABSTRACT:
    The engine should not know where ids come from.
    Collision checks against existing ids are the engine's job, not the
    generator's.
    """

    def next_id(self) -> str:
        """Return a candidate id. Must be a non-empty string."""
        raise NotImplementedError


class CounterIdGenerator(IdGenerator):
    """Deterministic sequential ids: id_1, id_2, ..."""

    def __init__(self, prefix: str = "id_", start: int = 1):
        self._prefix = prefix
        self._next = start

    def next_id(self) -> str:
        value = f"{self._prefix}{self._next}"
        self._next += 1
        return value


class SeededIdGenerator(IdGenerator):
    """
    Deterministic hash-derived ids.

    Same seed -> same id sequence. Each id is the sha256 of
    `seed|counter`, truncated to a short hex prefix.
    """

    def __init__(self, seed: str, prefix: str = "id_", length: int = 9):
        self._seed = seed
        self._prefix = prefix
        self._length = length
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        digest = hashlib.sha256(f"{self._seed}|{self._counter}".encode("utf-8")).hexdigest()
        return f"{self._prefix}{digest[:self._length]}"


class RandomIdGenerator(IdGenerator):
    """Random ids of the form id_<9 base-36 chars>."""

    def __init__(self, prefix: str = "id_", length: int = 9):
        self._prefix = prefix
        self._length = length

    def next_id(self) -> str:
        token = "".join(secrets.choice(_BASE36) for _ in range(self._length))
        return f"{self._prefix}{token}"
