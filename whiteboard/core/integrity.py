"""
Chain Integrity Views
=====================

Read-only derivations over an already linearized board: per-chain
grouping, the hash-chained snapshot and the placement check used by
verification. Nothing here mutates the sequence it is given.
"""

from __future__ import annotations
from typing import Dict, List, Sequence
import hashlib

from ..contracts.base import BoardItem
from ..contracts.errors import BrokenChainError
from ..contracts.events import ChainSnapshot
from .topology import ChainTopology


def group_chains(items: Sequence[BoardItem], positions: Dict[str, int]) -> List[List[BoardItem]]:
    """Disjoint chains, each bottom to top, ordered by their bottom's position."""
    topology = ChainTopology()
    topology.build(items)
    by_id = {item.id: item for item in items}

    chains = [
        sorted((by_id[item_id] for item_id in component), key=lambda i: positions[i.id])
        for component in topology.chains()
    ]
    chains.sort(key=lambda chain: positions[chain[0].id])
    return chains


def compute_snapshot(items: Sequence[BoardItem]) -> ChainSnapshot:
    """Each link hashes the previous hash with the next id, bottom first."""
    if not items:
        return ChainSnapshot.empty()

    state_hash = ""
    for item in items:
        state_hash = hashlib.sha256(f"{state_hash}|{item.id}".encode("utf-8")).hexdigest()

    return ChainSnapshot(
        item_ids=tuple(item.id for item in items),
        head_id=items[-1].id,
        state_hash=state_hash
    )


def check_placement(items: Sequence[BoardItem], positions: Dict[str, int]) -> None:
    """Every item must sit above the item it references."""
    for pos, item in enumerate(items):
        if not item.is_bottom and positions[item.lower_id] >= pos:
            raise BrokenChainError(
                f"Item {item.id} is placed below its lower item {item.lower_id}.",
                item_id=item.id,
                lower_id=item.lower_id
            )
