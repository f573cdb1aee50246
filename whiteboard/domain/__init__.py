"""Domain helpers at the persistence boundary."""

from .serialization import StrictEncoder, dumps, loads, items_to_dicts, items_from_dicts

__all__ = ["StrictEncoder", "dumps", "loads", "items_to_dicts", "items_from_dicts"]
