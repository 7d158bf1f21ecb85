"""Project parsed spreadsheet rows onto the target schema shape"""
from typing import List, Sequence

from src.academy_admin.schemas.imports import CellValue, EditableRecord, SourceRow
from src.academy_admin.services.header_matcher import HeaderMapping
from src.academy_admin.services.import_schema import SchemaField


def cell_to_text(value: CellValue) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def normalize_row(row: SourceRow, mapping: HeaderMapping, fields: Sequence[SchemaField]) -> EditableRecord:
    record: EditableRecord = {}
    for field in fields:
        header = mapping.get(field.key)
        if header is not None and header in row:
            record[field.key] = cell_to_text(row[header])
        else:
            record[field.key] = ""
    return record


def normalize_rows(
    rows: Sequence[SourceRow],
    mapping: HeaderMapping,
    fields: Sequence[SchemaField]
) -> List[EditableRecord]:
    """One editable record per source row, same order, exactly the schema keys."""
    return [normalize_row(row, mapping, fields) for row in rows]
