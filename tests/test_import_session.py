import pytest

from src.academy_admin.services.import_schema import SchemaField
from src.academy_admin.services.import_session import ImportSession

FIELDS = (
    SchemaField("name", "Name", required=True),
    SchemaField("email", "Email", required=True),
    SchemaField("notes", "Notes"),
)


def make_session(count, page_size=10):
    records = [{"name": f"n{i}", "email": f"e{i}@school.org", "notes": ""} for i in range(count)]
    return ImportSession(records, FIELDS, page_size=page_size)


def test_all_rows_selected_initially():
    session = make_session(4)

    assert session.selected_indices() == [0, 1, 2, 3]


def test_double_toggle_restores_membership():
    session = make_session(3)

    assert session.toggle(1) is False
    assert not session.is_selected(1)
    assert session.toggle(1) is True
    assert session.is_selected(1)
    assert session.selected_indices() == [0, 1, 2]


def test_toggle_out_of_range():
    session = make_session(3)

    with pytest.raises(IndexError):
        session.toggle(3)
    with pytest.raises(IndexError):
        session.toggle(-1)


def test_select_none_and_all():
    session = make_session(3)

    session.select_none()
    assert session.selected_indices() == []
    session.select_all()
    assert session.selected_indices() == [0, 1, 2]


def test_edit_cell_only_touches_one_row():
    session = make_session(3)
    session.edit_cell(0, "notes", "first")

    session.edit_cell(2, "email", "")

    assert session.records[0]["notes"] == "first"
    assert session.records[1] == {"name": "n1", "email": "e1@school.org", "notes": ""}
    assert session.records[2]["email"] == ""
    assert session.missing_for(2) == ["Email"]
    assert session.invalid_selected() == [2]


def test_edit_cell_rejects_unknown_field():
    session = make_session(1)

    with pytest.raises(KeyError):
        session.edit_cell(0, "shoeSize", "9")


def test_edits_and_selection_changes_clear_validation_message():
    session = make_session(2)

    session.validation_message = "1 selected row(s) missing required fields"
    session.edit_cell(0, "notes", "x")
    assert session.validation_message is None

    session.validation_message = "Select at least one row to import"
    session.toggle(0)
    assert session.validation_message is None

    session.validation_message = "stale"
    session.select_all()
    assert session.validation_message is None


def test_records_are_copied_from_input():
    source = [{"name": "n0", "email": "e0@school.org", "notes": ""}]
    session = ImportSession(source, FIELDS)

    session.edit_cell(0, "name", "changed")

    assert source[0]["name"] == "n0"


def test_selected_records_are_copies_in_index_order():
    session = make_session(4)
    session.toggle(1)

    selected = session.selected_records()
    selected[0]["name"] = "mutated"

    assert [r["name"] for r in session.selected_records()] == ["n0", "n2", "n3"]


def test_paging_is_clamped_to_bounds():
    session = make_session(25)

    assert session.page_count == 3
    assert session.go_to_page(5) == 3
    assert [i for i, _ in session.page_rows()] == [20, 21, 22, 23, 24]
    assert session.go_to_page(0) == 1
    assert [i for i, _ in session.page_rows()] == list(range(10))


def test_paging_does_not_change_selection():
    session = make_session(15)
    session.toggle(12)

    session.go_to_page(2)

    assert 12 not in session.selected_indices()
    assert len(session.selected_indices()) == 14


def test_empty_session_has_one_page():
    session = make_session(0)

    assert session.page_count == 1
    assert session.page_rows() == []
    assert session.selected_records() == []


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        ImportSession([], FIELDS, page_size=0)
