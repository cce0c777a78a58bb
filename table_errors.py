class TableError(ValueError):
    """Expected, recoverable failure of a table operation."""

    kind = "TableError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class DuplicateFieldError(TableError):
    kind = "DuplicateField"


class InvalidChoicesError(TableError):
    kind = "InvalidChoices"


class InvalidLabelError(TableError):
    kind = "InvalidLabel"


class UnknownRowError(TableError):
    kind = "UnknownRow"


class UnknownColumnError(TableError):
    kind = "UnknownColumn"


class InvalidValueError(TableError):
    kind = "InvalidValue"


class InvalidTypeError(TableError):
    kind = "InvalidType"
