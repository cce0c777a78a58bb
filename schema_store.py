import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from cell_coercion import CHOICE_TYPES, COLUMN_TYPES, SELECT_TYPES, normalize_column_type
from table_errors import (
    DuplicateFieldError,
    InvalidChoicesError,
    InvalidLabelError,
    InvalidTypeError,
    UnknownColumnError,
)

logger = logging.getLogger(__name__)

_FIELD_FILLER = re.compile(r"[^a-z0-9]+")

# key that carries the row id in projected records
RESERVED_FIELD_IDS = frozenset({"id"})


@dataclass(frozen=True)
class Column:
    field_id: str
    label: str
    type: str
    choices: Tuple[str, ...] = field(default_factory=tuple)


def derive_field_id(label) -> str:
    text = "" if label is None else str(label)
    return _FIELD_FILLER.sub("_", text.lower())


def clean_choices(choices: Optional[Iterable[str]]) -> Tuple[str, ...]:
    cleaned: List[str] = []
    for choice in choices or ():
        text = str(choice).strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return tuple(cleaned)


class SchemaStore:
    """Ordered, append-only list of columns keyed by unique field id."""

    def __init__(self, columns: Optional[Iterable[Column]] = None):
        self._columns: List[Column] = []
        for column in columns or ():
            self.append(column)

    @property
    def columns(self) -> List[Column]:
        return list(self._columns)

    @property
    def field_ids(self) -> List[str]:
        return [c.field_id for c in self._columns]

    def __len__(self):
        return len(self._columns)

    def __contains__(self, field_id):
        return any(c.field_id == field_id for c in self._columns)

    def get(self, field_id: str) -> Column:
        for column in self._columns:
            if column.field_id == field_id:
                return column
        raise UnknownColumnError(f"Unknown column '{field_id}'")

    def is_taken(self, field_id: str) -> bool:
        return field_id in RESERVED_FIELD_IDS or field_id in self

    def field_id_available(self, candidate_label) -> bool:
        field_id = derive_field_id(candidate_label)
        return is_usable_field_id(field_id) and not self.is_taken(field_id)

    def build_column(self, label, column_type, choices=None, field_id=None) -> Column:
        """Validate a column definition against the current schema.

        Nothing is mutated; call ``append`` with the result to commit it.
        """
        label_text = "" if label is None else str(label).strip()
        if not label_text:
            raise InvalidLabelError("Column label required")

        normalized = column_type if column_type in COLUMN_TYPES else normalize_column_type(column_type)
        if normalized is None:
            raise InvalidTypeError(
                f"Unknown column type '{column_type}'; use one of: " + "/".join(COLUMN_TYPES)
            )

        fid = derive_field_id(field_id if field_id else label_text)
        if not is_usable_field_id(fid):
            raise InvalidLabelError(f"Cannot derive a field id from '{label_text}'")
        if fid in RESERVED_FIELD_IDS:
            raise DuplicateFieldError(f"Field '{fid}' is reserved")
        if fid in self:
            raise DuplicateFieldError(f"Field '{fid}' already exists")

        kept = clean_choices(choices) if normalized in CHOICE_TYPES else ()
        if normalized in SELECT_TYPES and not kept:
            raise InvalidChoicesError(f"Column '{label_text}' needs at least one choice")

        return Column(field_id=fid, label=label_text, type=normalized, choices=kept)

    def append(self, column: Column) -> None:
        if self.is_taken(column.field_id):
            raise DuplicateFieldError(f"Field '{column.field_id}' already exists")
        self._columns.append(column)
        logger.debug("schema: appended %s (%s)", column.field_id, column.type)


def is_usable_field_id(field_id: str) -> bool:
    return any(ch.isalnum() for ch in field_id)
