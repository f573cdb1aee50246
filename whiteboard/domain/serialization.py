"""
Persistence-boundary serialization.

The storage layer holds rows shaped {"id", "lowerId", "data"}; these
helpers convert between that shape and BoardItem without touching order.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime, date
from enum import Enum
from typing import Any, Iterable, List, Mapping

from ..contracts.base import BoardItem


class StrictEncoder(json.JSONEncoder):
    """
    Encoder for item payloads and engine records on their way to storage.

    Item `data` is opaque, so whatever a drawing tool put there (timestamps,
    tool enums, tag sets) must still serialize:
    - datetimes/dates become ISO strings, enums their value
    - sets become sorted lists, so equal boards dump identically
    - BoardItems keep the `lowerId` row key; other dataclasses use asdict
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (set, frozenset)):
            return sorted(list(obj))
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)

        return super().default(obj)


def items_to_dicts(items: Iterable[BoardItem]) -> List[dict]:
    return [item.to_dict() for item in items]


def items_from_dicts(rows: Iterable[Mapping[str, Any]]) -> List[BoardItem]:
    return [BoardItem.from_dict(row) for row in rows]


def dumps(items: Iterable[BoardItem], **kwargs) -> str:
    """Serialize items (e.g. `board.items()`) to a JSON array."""
    return json.dumps(items_to_dicts(items), cls=StrictEncoder, **kwargs)


def loads(text: str) -> List[BoardItem]:
    rows = json.loads(text)
    if not isinstance(rows, list):
        raise ValueError("Expected a JSON array of items")
    return items_from_dicts(rows)
