import unittest

from column_draft import ColumnDraft
from table_engine import TableEngine
from table_state import TableState


class ColumnDraftTests(unittest.TestCase):
    def _draft(self):
        state = TableState(
            columns=[{"label": "Name", "type": "text"}],
            rows=[{"id": "1", "name": "Ada"}],
        )
        messages = []
        engine = TableEngine(state)
        draft = ColumnDraft(engine, lambda m, _: messages.append(m))
        return draft, engine, messages

    def test_label_derives_field_id(self):
        draft, _, _ = self._draft()
        draft.set_label("Start Date")
        self.assertEqual(draft.field_id, "start_date")
        self.assertFalse(draft.is_field_taken)
        self.assertTrue(draft.can_submit)

    def test_taken_field_blocks_submit(self):
        draft, _, _ = self._draft()
        draft.set_label("name")
        self.assertTrue(draft.is_field_taken)
        self.assertFalse(draft.can_submit)

    def test_id_label_is_taken(self):
        draft, engine, _ = self._draft()
        draft.set_label("ID")
        self.assertEqual(draft.field_id, "id")
        self.assertTrue(draft.is_field_taken)
        self.assertFalse(draft.can_submit)
        self.assertEqual(draft.submit().error_kind, "DuplicateField")
        self.assertEqual(engine.state.schema.field_ids, ["name"])

    def test_punctuation_only_label_cannot_submit(self):
        draft, _, _ = self._draft()
        draft.set_label("!!!")
        self.assertFalse(draft.is_field_taken)
        self.assertFalse(draft.can_submit)

    def test_select_type_requires_choices(self):
        draft, engine, _ = self._draft()
        draft.set_label("Department")
        self.assertTrue(draft.set_type("Dropdown"))
        self.assertFalse(draft.can_submit)

        self.assertTrue(draft.add_choice(" Engineering "))
        self.assertFalse(draft.add_choice("Engineering"))
        self.assertFalse(draft.add_choice("   "))
        self.assertTrue(draft.add_choice("Sales"))
        self.assertTrue(draft.remove_choice("Sales"))
        self.assertEqual(draft.choices, ["Engineering"])
        self.assertTrue(draft.can_submit)

        result = draft.submit()
        self.assertTrue(result.ok)
        self.assertEqual(result.value.choices, ("Engineering",))
        self.assertEqual(engine.state.rows.value("1", "department"), "Engineering")
        self.assertEqual(draft.label, "")
        self.assertEqual(draft.choices, [])

    def test_changing_type_resets_choices(self):
        draft, _, _ = self._draft()
        draft.set_type("singleSelect")
        draft.add_choice("A")
        draft.set_type("text")
        self.assertEqual(draft.choices, [])

    def test_unknown_type_reports_status(self):
        draft, _, messages = self._draft()
        self.assertFalse(draft.set_type("currency"))
        self.assertEqual(draft.column_type, "text")
        self.assertTrue(messages[-1].startswith("Use one of:"))

    def test_failed_submit_keeps_draft(self):
        draft, engine, messages = self._draft()
        draft.set_label("Name")
        result = draft.submit()
        self.assertFalse(result.ok)
        self.assertEqual(result.error_kind, "DuplicateField")
        self.assertEqual(draft.label, "Name")
        self.assertEqual(len(engine.state.columns), 1)
        self.assertIn("already exists", messages[-1])

    def test_explicit_field_id(self):
        draft, engine, _ = self._draft()
        draft.set_label("Full Name")
        draft.set_field_id("display name")
        self.assertTrue(draft.submit().ok)
        self.assertEqual(engine.state.columns[-1].field_id, "display_name")
        self.assertEqual(engine.state.columns[-1].label, "Full Name")


if __name__ == "__main__":
    unittest.main()
