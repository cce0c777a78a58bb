from typing import Any, Dict, Iterable, List, Optional

from cell_coercion import coerce_cell_value
from row_store import APPEND_ROW_ID, Row, RowStore
from schema_store import Column, SchemaStore
from selection_tracker import SelectionTracker


class TableState:
    """Schema, rows and selection of one editable table.

    ``columns`` accepts ``Column`` objects or dicts with ``label``, ``type``
    and optional ``choices``/``field_id``. ``rows`` are dicts keyed by field
    id with the row id under ``"id"``; values go through the column's
    coercion and missing ones take the type default.
    """

    def __init__(
        self,
        columns: Optional[Iterable[Any]] = None,
        rows: Optional[Iterable[Dict[str, Any]]] = None,
        case_insensitive_choices: bool = False,
    ):
        self.case_insensitive_choices = case_insensitive_choices
        self.schema = SchemaStore()
        for definition in columns or ():
            self.schema.append(self._column_from_definition(definition))
        self.rows = RowStore(self.schema, [self._row_from_record(rec) for rec in rows or ()])
        self.selection = SelectionTracker(self.rows)

    # ---------- read accessors ----------
    @property
    def columns(self) -> List[Column]:
        return self.schema.columns

    @property
    def row_list(self) -> List[Row]:
        return self.rows.rows()

    @property
    def row_ids(self) -> List[str]:
        return self.rows.row_ids

    @property
    def selected(self):
        return self.selection.selected

    @property
    def df(self):
        return self.rows.frame

    def display_rows(self) -> List[Dict[str, Any]]:
        out = []
        for row in self.rows.rows():
            record = {"id": row.row_id}
            record.update(row.values)
            out.append(record)
        append_row = {"id": APPEND_ROW_ID}
        append_row.update({fid: "" for fid in self.schema.field_ids})
        out.append(append_row)
        return out

    def coerce(self, column: Column, raw):
        return coerce_cell_value(column, raw, case_insensitive=self.case_insensitive_choices)

    # ---------- construction helpers ----------
    def _column_from_definition(self, definition) -> Column:
        if isinstance(definition, Column):
            return definition
        return self.schema.build_column(
            definition.get("label"),
            definition.get("type", "text"),
            choices=definition.get("choices"),
            field_id=definition.get("field_id"),
        )

    def _row_from_record(self, record: Dict[str, Any]):
        if "id" not in record:
            raise ValueError("Row record needs an 'id'")
        values = {}
        for column in self.schema.columns:
            if column.field_id in record:
                values[column.field_id] = self.coerce(column, record[column.field_id])
        return str(record["id"]), values
