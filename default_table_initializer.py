from typing import Optional

import config_paths
from table_engine import TableEngine
from table_state import TableState

DEPARTMENTS = ["Engineering", "Marketing", "Sales", "HR", "Finance"]

DROPDOWN_OPTIONS = [
    "Dropdown Option 1",
    "Dropdown Option 2",
    "Dropdown Option 3",
    "In Progress",
    "Completed",
    "Pending",
    "Cancelled",
]

TAG_SUGGESTIONS = [
    "Tag1",
    "Tag2",
    "Tag3",
    "Tag4",
    "Tag5",
    "Priority",
    "Bug",
    "Feature",
    "Enhancement",
    "Documentation",
]

PRESETS = ("datagrid", "clickup", "empty")


class DefaultTableInitializer:
    def __init__(
        self,
        dropdown_options: Optional[list] = None,
        tag_suggestions: Optional[list] = None,
        case_insensitive_choices: bool = False,
    ):
        self.dropdown_options = list(dropdown_options or DROPDOWN_OPTIONS)
        self.tag_suggestions = list(tag_suggestions or TAG_SUGGESTIONS)
        self.case_insensitive_choices = case_insensitive_choices

    def create(self, preset: str = "datagrid") -> TableState:
        if preset == "datagrid":
            return self._state(self._datagrid_columns(), self._datagrid_rows())
        if preset == "clickup":
            return self._state(self._clickup_columns(), self._clickup_rows())
        if preset == "empty":
            return self._state([], [])
        raise ValueError(f"Unknown preset '{preset}' (use one of: {', '.join(PRESETS)})")

    def _state(self, columns, rows) -> TableState:
        return TableState(
            columns, rows, case_insensitive_choices=self.case_insensitive_choices
        )

    def _datagrid_columns(self):
        return [
            {"label": "Name", "type": "text"},
            {"label": "Age", "type": "number"},
            {"label": "Email", "type": "email"},
            {"label": "Department", "type": "singleSelect", "choices": DEPARTMENTS},
            {"label": "Start Date", "type": "date"},
            {"label": "Active", "type": "boolean"},
        ]

    def _datagrid_rows(self):
        people = [
            ("John Doe", 30, "john.doe@company.com", "Engineering", "2022-01-15", True),
            ("Jane Smith", 28, "jane.smith@company.com", "Marketing", "2021-11-08", True),
            ("Bob Johnson", 35, "bob.johnson@company.com", "Sales", "2020-06-22", False),
            ("Alice Brown", 26, "alice.brown@company.com", "HR", "2023-03-10", True),
        ]
        rows = []
        for idx, (name, age, email, dept, start, active) in enumerate(people, start=1):
            rows.append(
                {
                    "id": str(idx),
                    "name": name,
                    "age": age,
                    "email": email,
                    "department": dept,
                    "start_date": start,
                    "active": active,
                }
            )
        return rows

    def _clickup_columns(self):
        return [
            {"label": "Name", "type": "text"},
            {"label": "Dropdown", "type": "dropdown", "choices": self.dropdown_options},
            {"label": "Tags", "type": "tags", "choices": self.tag_suggestions},
            {"label": "Links", "type": "link"},
            {"label": "Email", "type": "email"},
        ]

    def _clickup_rows(self):
        first = self.dropdown_options[0]
        entries = [
            ("Row 1 Name", "Dropdown Option 1", "Tag1, Tag2", "https://example.com"),
            ("Row 2 Name", "In Progress", "Tag3", "https://test.com"),
            ("Row 3 Name", "Completed", "Tag4, Tag5", "https://demo.com"),
        ]
        rows = []
        for idx, (name, option, tags, link) in enumerate(entries, start=1):
            rows.append(
                {
                    "id": str(idx),
                    "name": name,
                    # configured option lists may not carry the sample values
                    "dropdown": option if option in self.dropdown_options else first,
                    "tags": tags,
                    "links": link,
                    "email": f"row{idx}@example.com",
                }
            )
        return rows


def build_table(config=None, set_status_cb=None, listener=None) -> TableEngine:
    cfg = config if config is not None else config_paths.load_config()
    initializer = DefaultTableInitializer(
        dropdown_options=cfg.get("DROPDOWN_OPTIONS"),
        tag_suggestions=cfg.get("TAG_SUGGESTIONS"),
        case_insensitive_choices=bool(cfg.get("CASE_INSENSITIVE_CHOICES", False)),
    )
    state = initializer.create(cfg.get("PRESET") or "datagrid")
    return TableEngine(state, set_status_cb=set_status_cb, listener=listener)
