import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from cell_coercion import default_value
from table_errors import InvalidValueError, TableError

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    ok: bool
    value: Any = None
    error: Optional[TableError] = None

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None


@dataclass
class CommitEvent:
    action: str
    detail: dict = field(default_factory=dict)


class TableEngine:
    """Mutations over a TableState, applied atomically and in call order.

    Expected failures come back as ``MutationResult(ok=False, error=...)``.
    After each successful mutation the registered listener (if any) is
    called with a ``CommitEvent``.
    """

    def __init__(
        self,
        state,
        set_status_cb: Optional[Callable[[str, float], None]] = None,
        listener: Optional[Callable[[CommitEvent], None]] = None,
    ):
        self.state = state
        self._set_status = set_status_cb or (lambda _msg, _ttl: None)
        self._listener = listener
        self.last_action: Optional[CommitEvent] = None

    def set_listener(self, listener: Optional[Callable[[CommitEvent], None]]):
        self._listener = listener

    # ---------- schema ----------
    def field_id_available(self, candidate_label) -> bool:
        return self.state.schema.field_id_available(candidate_label)

    def add_column(self, label, column_type, choices=None, field_id=None) -> MutationResult:
        try:
            column = self.state.schema.build_column(label, column_type, choices, field_id)
            frame = self.state.rows.with_column(column, default_value(column.type, column.choices))
        except TableError as exc:
            return self._fail("add_column", exc)
        self.state.schema.append(column)
        self.state.rows.replace_frame(frame)
        self._set_status(f"Inserted column '{column.label}'", 3)
        self._commit("add_column", field_id=column.field_id, type=column.type)
        return MutationResult(ok=True, value=column)

    # ---------- rows ----------
    def add_row(self) -> MutationResult:
        row = self.state.rows.add_row()
        self._set_status("Inserted 1 row", 2)
        self._commit("add_row", row_id=row.row_id)
        return MutationResult(ok=True, value=row)

    def update_cell(self, row_id, field_id, raw_value) -> MutationResult:
        try:
            self.state.rows.require(row_id)
            column = self.state.schema.get(field_id)
            try:
                value = self.state.coerce(column, raw_value)
            except ValueError as exc:
                raise InvalidValueError(str(exc)) from exc
        except TableError as exc:
            return self._fail("update_cell", exc)
        self.state.rows.set_cell(row_id, field_id, value)
        self._commit("update_cell", row_id=row_id, field_id=field_id)
        return MutationResult(ok=True, value=self.state.rows.value(row_id, field_id))

    def delete_rows(self, row_ids: Iterable[str]) -> MutationResult:
        deleted = self.state.rows.delete_rows(set(row_ids or ()))
        self.state.selection.prune()
        if deleted:
            self._set_status(f"Deleted {deleted} row{'s' if deleted != 1 else ''}", 2)
            self._commit("delete_rows", count=deleted)
        return MutationResult(ok=True, value=deleted)

    def delete_selected(self) -> MutationResult:
        if not len(self.state.selection):
            self._set_status("No rows selected", 2)
            return MutationResult(ok=True, value=0)
        result = self.delete_rows(self.state.selection.selected)
        self.state.selection.clear()
        return result

    # ---------- selection ----------
    def set_selection(self, row_ids: Iterable[str]) -> MutationResult:
        self.state.selection.set_selection(row_ids)
        return MutationResult(ok=True, value=self.state.selection.selected)

    def toggle_selection(self, row_id) -> MutationResult:
        self.state.selection.toggle(row_id)
        return MutationResult(ok=True, value=self.state.selection.selected)

    def clear_selection(self) -> MutationResult:
        self.state.selection.clear()
        return MutationResult(ok=True, value=self.state.selection.selected)

    # ---------- internals ----------
    def _fail(self, action: str, exc: TableError) -> MutationResult:
        logger.debug("%s rejected: %s (%s)", action, exc.kind, exc.message)
        self._set_status(exc.message, 3)
        return MutationResult(ok=False, error=exc)

    def _commit(self, action: str, **detail):
        event = CommitEvent(action=action, detail=detail)
        self.last_action = event
        logger.info("%s %s", action, detail)
        if self._listener is not None:
            self._listener(event)
