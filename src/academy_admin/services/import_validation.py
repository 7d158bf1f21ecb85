"""Required-field validation for editable import records"""
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence

from src.academy_admin.services.import_schema import SchemaField


def missing_fields(record: Mapping[str, Optional[str]], fields: Sequence[SchemaField]) -> List[str]:
    """Labels of required fields that are absent or blank, in schema order."""
    missing = []
    for f in fields:
        if not f.required:
            continue
        value = record.get(f.key)
        if value is None or not str(value).strip():
            missing.append(f.label)
    return missing


def is_valid(record: Mapping[str, Optional[str]], fields: Sequence[SchemaField]) -> bool:
    return not missing_fields(record, fields)


def invalid_indices(
    records: Sequence[Mapping[str, Optional[str]]],
    indices: Iterable[int],
    fields: Sequence[SchemaField]
) -> List[int]:
    return [i for i in sorted(indices) if not is_valid(records[i], fields)]


@dataclass
class ValidationReport:
    total: int
    invalid: List[int] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return self.total - len(self.invalid)

    @property
    def ok(self) -> bool:
        return not self.invalid


def validate_records(
    records: Sequence[Mapping[str, Optional[str]]],
    fields: Sequence[SchemaField]
) -> ValidationReport:
    return ValidationReport(
        total=len(records),
        invalid=invalid_indices(records, range(len(records)), fields),
    )
