from row_store import APPEND_ROW_ID, RowStore
from schema_store import Column, SchemaStore
from selection_tracker import SelectionTracker


def _tracker():
    schema = SchemaStore([Column(field_id="name", label="Name", type="text")])
    rows = RowStore(schema, [("r1", {}), ("r2", {}), ("r3", {})])
    return SelectionTracker(rows), rows


def test_set_selection_filters_sentinel_and_unknown_ids():
    tracker, _ = _tracker()
    tracker.set_selection({APPEND_ROW_ID, "r1", "r3", "ghost"})
    assert tracker.selected == frozenset({"r1", "r3"})


def test_toggle_in_and_out():
    tracker, _ = _tracker()
    assert tracker.toggle("r2") is True
    assert "r2" in tracker
    assert tracker.toggle("r2") is False
    assert len(tracker) == 0


def test_sentinel_never_enters_selection():
    tracker, _ = _tracker()
    assert tracker.toggle(APPEND_ROW_ID) is False
    assert APPEND_ROW_ID not in tracker.selected


def test_prune_drops_deleted_rows():
    tracker, rows = _tracker()
    tracker.set_selection(["r1", "r2"])
    rows.delete_rows(["r1"])
    assert tracker.prune() == 1
    assert tracker.selected == frozenset({"r2"})


def test_clear():
    tracker, _ = _tracker()
    tracker.set_selection(["r1"])
    tracker.clear()
    assert tracker.selected == frozenset()
