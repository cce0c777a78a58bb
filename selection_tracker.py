from typing import FrozenSet, Iterable

from row_store import APPEND_ROW_ID


class SelectionTracker:
    """Selected row ids; only ids of rows present in the store are kept."""

    def __init__(self, rows):
        self.rows = rows
        self._selected: set = set()

    @property
    def selected(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    def __len__(self):
        return len(self._selected)

    def __contains__(self, row_id):
        return row_id in self._selected

    def set_selection(self, row_ids: Iterable[str]) -> None:
        self._selected = {rid for rid in row_ids or () if self._selectable(rid)}

    def toggle(self, row_id: str) -> bool:
        if row_id in self._selected:
            self._selected.discard(row_id)
            return False
        if not self._selectable(row_id):
            return False
        self._selected.add(row_id)
        return True

    def clear(self) -> None:
        self._selected = set()

    def prune(self) -> int:
        stale = {rid for rid in self._selected if rid not in self.rows}
        self._selected -= stale
        return len(stale)

    def _selectable(self, row_id) -> bool:
        return row_id != APPEND_ROW_ID and row_id in self.rows
