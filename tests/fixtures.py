"""
Whiteboard Test Fixtures

Explicit, deterministic item sets used across the suite.
All fixtures are explicit - no random generation.
"""

from typing import List, Optional

from whiteboard.contracts.base import BoardItem


def item(item_id: str, lower_id: Optional[str] = None, data="hello") -> BoardItem:
    return BoardItem(id=item_id, lower_id=lower_id, data=data)


def shuffled_four() -> List[BoardItem]:
    """dog <- rabbit <- cat <- hamster, supplied out of order."""
    return [
        item("dog"),
        item("hamster", "cat"),
        item("cat", "rabbit"),
        item("rabbit", "dog"),
    ]


def shuffled_three() -> List[BoardItem]:
    """dog <- rabbit <- cat, supplied out of order."""
    return [
        item("dog"),
        item("cat", "rabbit"),
        item("rabbit", "dog"),
    ]


def extract_board() -> List[BoardItem]:
    """dog <- rabbit <- cat <- tortoise with distinct payloads."""
    return [
        item("dog", None, "ww"),
        item("cat", "rabbit", "xx"),
        item("rabbit", "dog", "yy"),
        item("tortoise", "cat", "zz"),
    ]


def two_chains() -> List[BoardItem]:
    """Two disjoint chains: a <- b and x <- y <- z."""
    return [
        item("b", "a"),
        item("x"),
        item("a"),
        item("z", "y"),
        item("y", "x"),
    ]


def four_cycle() -> List[BoardItem]:
    """dog -> rabbit -> cat -> hamster -> dog, no bottom."""
    return [
        item("dog", "rabbit"),
        item("rabbit", "cat"),
        item("cat", "hamster"),
        item("hamster", "dog"),
    ]


def linked_chain(length: int, prefix: str = "n") -> List[BoardItem]:
    """Bottom-to-top chain n0 <- n1 <- ... of the given length."""
    items = []
    lower = None
    for i in range(length):
        item_id = f"{prefix}{i}"
        items.append(item(item_id, lower, i))
        lower = item_id
    return items


def ids(items) -> List[str]:
    return [i.id for i in items]
