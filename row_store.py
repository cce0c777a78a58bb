import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from cell_coercion import default_value, pandas_dtype
from table_errors import UnknownRowError

logger = logging.getLogger(__name__)

# Row id rendered as the trailing "Add Row" affordance; never a real row.
APPEND_ROW_ID = "add_row"


@dataclass
class Row:
    row_id: str
    values: Dict[str, Any] = field(default_factory=dict)


def _plain(value):
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, list):
        return list(value)
    return value


class RowStore:
    """Rows of the table, held in a DataFrame indexed by row id.

    Column dtypes follow the schema; every live column has a value in
    every row.
    """

    def __init__(self, schema, rows: Optional[Iterable[Tuple[str, Dict[str, Any]]]] = None):
        self.schema = schema
        self._issued: set = set()
        row_ids: List[str] = []
        records: List[Dict[str, Any]] = []
        for row_id, values in rows or ():
            row_id = str(row_id)
            if row_id == APPEND_ROW_ID:
                raise ValueError(f"'{APPEND_ROW_ID}' is reserved and cannot be a row id")
            if row_id in self._issued:
                raise ValueError(f"Duplicate row id '{row_id}'")
            self._issued.add(row_id)
            row_ids.append(row_id)
            records.append(values)
        self._df = self._build_frame(row_ids, records)

    # ---------- read ----------
    @property
    def frame(self) -> pd.DataFrame:
        return self._df.copy()

    @property
    def row_ids(self) -> List[str]:
        return list(self._df.index)

    def __len__(self):
        return len(self._df)

    def __contains__(self, row_id):
        return row_id != APPEND_ROW_ID and row_id in self._df.index

    def value(self, row_id: str, field_id: str):
        self.require(row_id)
        return _plain(self._df.at[row_id, field_id])

    def get(self, row_id: str) -> Row:
        self.require(row_id)
        values = {fid: _plain(self._df.at[row_id, fid]) for fid in self.schema.field_ids}
        return Row(row_id=row_id, values=values)

    def rows(self) -> List[Row]:
        return [self.get(row_id) for row_id in self._df.index]

    def build_default_row(self) -> Dict[str, Any]:
        return {c.field_id: default_value(c.type, c.choices) for c in self.schema.columns}

    # ---------- mutate ----------
    def add_row(self) -> Row:
        row_id = self._new_row_id()
        row = self.build_default_row()
        records = [self._record(rid) for rid in self._df.index] + [row]
        self._df = self._build_frame(list(self._df.index) + [row_id], records)
        logger.debug("rows: added %s", row_id)
        return self.get(row_id)

    def set_cell(self, row_id: str, field_id: str, value) -> None:
        self.require(row_id)
        column = self.schema.get(field_id)
        values = list(self._df[field_id])
        values[self._df.index.get_loc(row_id)] = value
        df = self._df.copy()
        df[field_id] = pd.Series(values, index=df.index, dtype=pandas_dtype(column.type))
        self._df = df

    def delete_rows(self, row_ids: Iterable[str]) -> int:
        targets = {rid for rid in row_ids if rid in self}
        if not targets:
            return 0
        self._df = self._df.drop(index=[rid for rid in self._df.index if rid in targets])
        logger.debug("rows: deleted %d", len(targets))
        return len(targets)

    def with_column(self, column, default) -> pd.DataFrame:
        """Return a copy of the frame with ``column`` backfilled to ``default``."""
        df = self._df.copy()
        df[column.field_id] = pd.Series(
            [_fresh(default) for _ in range(len(df))],
            index=df.index,
            dtype=pandas_dtype(column.type),
        )
        return df

    def replace_frame(self, df: pd.DataFrame) -> None:
        self._df = df

    # ---------- internals ----------
    def require(self, row_id):
        if row_id not in self:
            raise UnknownRowError(f"Unknown row '{row_id}'")

    def _record(self, row_id) -> Dict[str, Any]:
        return {fid: self._df.at[row_id, fid] for fid in self.schema.field_ids}

    def _new_row_id(self) -> str:
        row_id = uuid.uuid4().hex
        while row_id in self._issued or row_id == APPEND_ROW_ID:
            row_id = uuid.uuid4().hex
        self._issued.add(row_id)
        return row_id

    def _build_frame(self, row_ids: List[str], records: List[Dict[str, Any]]) -> pd.DataFrame:
        index = pd.Index(row_ids, dtype=object, name="row_id")
        data = {}
        for column in self.schema.columns:
            fid = column.field_id
            values = [
                rec[fid] if fid in rec else default_value(column.type, column.choices)
                for rec in records
            ]
            data[fid] = pd.Series(values, index=index, dtype=pandas_dtype(column.type))
        return pd.DataFrame(data, index=index, columns=self.schema.field_ids)


def _fresh(value):
    # each row gets its own list for tag cells
    return list(value) if isinstance(value, list) else value
