from typing import Callable, List, Optional

from cell_coercion import CHOICE_TYPES, COLUMN_TYPES, SELECT_TYPES, TEXT, normalize_column_type
from schema_store import derive_field_id, is_usable_field_id


class ColumnDraft:
    """Pending "add column" form: label, type and choice list.

    Tracks what the drawer shows (derived field id, whether it is taken,
    whether submit is enabled) and hands the finished definition to the
    engine.
    """

    TYPE_CHOICES = list(COLUMN_TYPES)

    def __init__(self, engine, set_status_cb: Optional[Callable[[str, int], None]] = None):
        self.engine = engine
        self._set_status = set_status_cb or (lambda _msg, _ttl: None)
        self._reset()

    # ---------- public API ----------
    def set_label(self, text: str):
        self.label = "" if text is None else str(text)
        self.field_id = derive_field_id(self.label.strip())

    def set_field_id(self, text: str):
        self.field_id = derive_field_id(text)

    def set_type(self, text: str) -> bool:
        column_type = normalize_column_type(text)
        if column_type is None:
            self._set_status("Use one of: " + "/".join(self.TYPE_CHOICES), 4)
            return False
        self.column_type = column_type
        # choices don't carry over between types
        self.choices = []
        return True

    def add_choice(self, text: str) -> bool:
        option = "" if text is None else str(text).strip()
        if not option or option in self.choices:
            return False
        self.choices.append(option)
        return True

    def remove_choice(self, text: str) -> bool:
        if text not in self.choices:
            return False
        self.choices.remove(text)
        return True

    @property
    def takes_choices(self) -> bool:
        return self.column_type in CHOICE_TYPES

    @property
    def is_field_taken(self) -> bool:
        return bool(self.field_id) and self.engine.state.schema.is_taken(self.field_id)

    @property
    def can_submit(self) -> bool:
        if not self.label.strip() or not is_usable_field_id(self.field_id):
            return False
        if self.is_field_taken:
            return False
        if self.column_type in SELECT_TYPES and not self.choices:
            return False
        return True

    def submit(self):
        result = self.engine.add_column(
            self.label,
            self.column_type,
            choices=list(self.choices) if self.takes_choices else None,
            field_id=self.field_id or None,
        )
        if result.ok:
            self._reset()
        else:
            self._set_status(result.error.message, 3)
        return result

    def cancel(self):
        self._set_status("Action canceled", 3)
        self._reset()

    # ---------- internals ----------
    def _reset(self):
        self.label = ""
        self.field_id = ""
        self.column_type = TEXT
        self.choices: List[str] = []
