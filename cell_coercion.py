from datetime import date, datetime
from typing import Optional

import numpy as np
import pandas as pd

TEXT = "text"
NUMBER = "number"
BOOLEAN = "boolean"
DATE = "date"
DATETIME = "dateTime"
SINGLE_SELECT = "singleSelect"
DROPDOWN = "dropdown"
TAGS = "tags"
LINK = "link"
EMAIL = "email"

COLUMN_TYPES = (
    TEXT,
    NUMBER,
    BOOLEAN,
    DATE,
    DATETIME,
    SINGLE_SELECT,
    DROPDOWN,
    TAGS,
    LINK,
    EMAIL,
)

# closed enumerations; a column of these types needs at least one choice
SELECT_TYPES = frozenset({SINGLE_SELECT, DROPDOWN})
# types that keep a choices list on the column
CHOICE_TYPES = frozenset({SINGLE_SELECT, DROPDOWN, TAGS})

LINK_DEFAULT = "https://"

_TYPE_MAP = {
    "text": TEXT,
    "string": TEXT,
    "str": TEXT,
    "number": NUMBER,
    "numeric": NUMBER,
    "float": NUMBER,
    "int": NUMBER,
    "integer": NUMBER,
    "boolean": BOOLEAN,
    "bool": BOOLEAN,
    "check": BOOLEAN,
    "checkbox": BOOLEAN,
    "date": DATE,
    "datetime": DATETIME,
    "date time": DATETIME,
    "date_time": DATETIME,
    "singleselect": SINGLE_SELECT,
    "single select": SINGLE_SELECT,
    "select": SINGLE_SELECT,
    "dropdown": DROPDOWN,
    "tags": TAGS,
    "tag": TAGS,
    "link": LINK,
    "url": LINK,
    "email": EMAIL,
}

_TRUE_WORDS = {"1", "true", "t", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "f", "no", "n", "off"}


def normalize_column_type(text) -> Optional[str]:
    if text is None:
        return None
    return _TYPE_MAP.get(str(text).strip().lower())


def pandas_dtype(column_type: str):
    if column_type == NUMBER:
        return "float64"
    if column_type == BOOLEAN:
        return "bool"
    if column_type in (DATE, DATETIME):
        return "datetime64[ns]"
    return "object"


def default_value(column_type: str, choices=()):
    if column_type == NUMBER:
        return 0.0
    if column_type == BOOLEAN:
        return False
    if column_type in (DATE, DATETIME):
        return pd.Timestamp.now()
    if column_type in SELECT_TYPES:
        return choices[0] if choices else ""
    if column_type == TAGS:
        return []
    if column_type == LINK:
        return LINK_DEFAULT
    return ""


def split_tags(text) -> list:
    if text is None:
        return []
    if isinstance(text, str):
        parts = text.split(",")
    else:
        parts = list(text)
    tags = []
    for part in parts:
        label = str(part).strip()
        if label and label not in tags:
            tags.append(label)
    return tags


def coerce_cell_value(column, raw, case_insensitive: bool = False):
    """Convert a raw edit input into the stored value for ``column``.

    Raises ValueError when the input cannot be stored in the column.
    """
    column_type = column.type

    if column_type == NUMBER:
        if isinstance(raw, bool):
            raise ValueError(f"Cannot coerce {raw!r} to number")
        if isinstance(raw, (int, float, np.integer, np.floating)):
            source = raw
        else:
            source = "" if raw is None else str(raw).strip()
            if source == "":
                raise ValueError("Number required")
        try:
            value = float(source)
        except (ValueError, OverflowError):
            raise ValueError(f"Cannot coerce '{raw}' to number") from None
        if not np.isfinite(value):
            raise ValueError(f"Cannot coerce '{raw}' to a finite number")
        return value

    if column_type == BOOLEAN:
        if isinstance(raw, (bool, np.bool_)):
            return bool(raw)
        lowered = "" if raw is None else str(raw).strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ValueError(f"Cannot coerce '{raw}' to boolean")

    if column_type in (DATE, DATETIME):
        if isinstance(raw, (datetime, date)):
            stamp = pd.Timestamp(raw)
        else:
            stripped = "" if raw is None else str(raw).strip()
            if stripped == "":
                raise ValueError("Date required")
            try:
                stamp = pd.to_datetime(stripped, errors="raise")
            except (ValueError, TypeError, OverflowError):
                raise ValueError(f"Cannot coerce '{raw}' to date") from None
        if pd.isna(stamp):
            raise ValueError(f"Cannot coerce '{raw}' to date")
        if stamp.tzinfo is not None:
            # stored naive, in UTC
            stamp = stamp.tz_convert(None)
        try:
            return stamp.as_unit("ns")
        except (ValueError, OverflowError):
            raise ValueError(f"Date '{raw}' is out of range") from None

    if column_type in SELECT_TYPES:
        text = "" if raw is None else str(raw)
        if text in column.choices:
            return text
        if case_insensitive:
            lowered = text.casefold()
            for choice in column.choices:
                if choice.casefold() == lowered:
                    return choice
        raise ValueError(f"'{text}' is not one of: " + ", ".join(column.choices))

    if column_type == TAGS:
        return split_tags(raw)

    return "" if raw is None else str(raw)
