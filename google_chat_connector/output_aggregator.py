"""
Output Aggregator - Flattens per-call results into one ordered collection.

  list    each element appended in order
  None    nothing appended (table-miss, nothing returned)
  other   appended as a single element
"""

from typing import Any, List


class OutputAggregator:
    """Accumulates results across all items of a run, in call order."""

    def __init__(self):
        self._items: List[Any] = []

    def append(self, result: Any) -> int:
        """Add one call's result. Returns how many elements were added."""
        if isinstance(result, list):
            self._items.extend(result)
            return len(result)
        if result is None:
            return 0
        self._items.append(result)
        return 1

    @property
    def items(self) -> List[Any]:
        return list(self._items)

    def __len__(self):
        return len(self._items)
