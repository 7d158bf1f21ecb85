import io

import pytest
from openpyxl import Workbook

from src.academy_admin.services.spreadsheet import (
    SpreadsheetError,
    build_preview,
    decode_csv_content,
    read_spreadsheet,
)


def xlsx_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def test_csv_rows_keyed_by_trimmed_header():
    content = "\ufeff First Name ,Email,Year\nAda,ada@school.org,2024\n,,\nGrace,,2025\n".encode("utf-8")

    rows = read_spreadsheet("roster.csv", content)

    assert rows == [
        {"First Name": "Ada", "Email": "ada@school.org", "Year": "2024"},
        {"First Name": "Grace", "Email": "", "Year": "2025"},
    ]


def test_csv_trailing_commas_keep_values_under_their_headers():
    content = (
        b"First Name,Last Name,Email,Phone Number\n"
        b"Ada,Lovelace,ada@school.org,555-0100,\n"
        b"Grace,Hopper,grace@school.org,555-0101,\n"
    )

    rows = read_spreadsheet("roster.csv", content)

    assert rows == [
        {"First Name": "Ada", "Last Name": "Lovelace", "Email": "ada@school.org", "Phone Number": "555-0100"},
        {"First Name": "Grace", "Last Name": "Hopper", "Email": "grace@school.org", "Phone Number": "555-0101"},
    ]


def test_csv_only_first_row_overlong():
    rows = read_spreadsheet("ragged.csv", b"A,B\n1,2,3\n4,5\n")

    assert rows == [{"A": "1", "B": "2"}, {"A": "4", "B": "5"}]


def test_csv_in_windows_1252():
    content = "Parish\nSt. André\n".encode("cp1252")

    assert read_spreadsheet("roster.csv", content) == [{"Parish": "St. André"}]


def test_header_only_csv_has_no_rows():
    assert read_spreadsheet("roster.csv", b"First Name,Email\n") == []


def test_xlsx_first_sheet():
    content = xlsx_bytes([
        ["First Name", "Email", "Semester"],
        ["Ada", "ada@school.org", 2],
        ["Grace", None, 1],
    ])

    rows = read_spreadsheet("roster.xlsx", content)

    assert len(rows) == 2
    assert rows[0]["First Name"] == "Ada"
    assert rows[0]["Semester"] == "2"
    assert rows[1]["Email"] in ("", None)


def test_unsupported_extension():
    with pytest.raises(SpreadsheetError) as exc_info:
        read_spreadsheet("roster.pdf", b"%PDF-1.4")

    assert "Unsupported file type" in str(exc_info.value)


def test_empty_upload():
    with pytest.raises(SpreadsheetError):
        read_spreadsheet("roster.csv", b"")


def test_corrupt_workbook():
    with pytest.raises(SpreadsheetError):
        read_spreadsheet("roster.xlsx", b"not really a workbook")


def test_decode_csv_prefers_utf8():
    assert decode_csv_content("café".encode("utf-8")) == "café"


def test_build_preview_limits_preview_not_full_data():
    rows = [{"Email": f"p{i}@school.org"} for i in range(12)]

    result = build_preview("participant", rows, preview_limit=10)

    assert result.model == "participant"
    assert result.total_rows == 12
    assert len(result.preview) == 10
    assert result.full_data == rows
    assert result.preview == rows[:10]
