"""Operator-editable state of one import attempt: records, selection and paging"""
import math
from typing import List, Optional, Sequence, Set, Tuple

from src.academy_admin.schemas.imports import EditableRecord
from src.academy_admin.services.import_schema import SchemaField
from src.academy_admin.services.import_validation import invalid_indices, missing_fields

DEFAULT_PAGE_SIZE = 10


class ImportSession:
    """
    Holds the normalized records of one preview.

    Records are copied on construction so edits never leak back into the
    preview payload. Every edit or selection change clears the pending
    validation message left by a rejected confirm.
    """

    def __init__(
        self,
        records: Sequence[EditableRecord],
        fields: Sequence[SchemaField],
        page_size: int = DEFAULT_PAGE_SIZE
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.fields: Tuple[SchemaField, ...] = tuple(fields)
        self.records: List[EditableRecord] = [dict(r) for r in records]
        self.page_size = page_size
        self.current_page = 1
        self.validation_message: Optional[str] = None
        self._selected: Set[int] = set(range(len(self.records)))
        self._keys = {f.key for f in self.fields}

    def __len__(self) -> int:
        return len(self.records)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.records):
            raise IndexError(f"row index {index} out of range (0..{len(self.records) - 1})")

    def clear_validation_message(self) -> None:
        self.validation_message = None

    def select_all(self) -> None:
        self._selected = set(range(len(self.records)))
        self.clear_validation_message()

    def select_none(self) -> None:
        self._selected = set()
        self.clear_validation_message()

    def toggle(self, index: int) -> bool:
        """Flip one row's membership; returns whether it is now selected."""
        self._check_index(index)
        if index in self._selected:
            self._selected.discard(index)
        else:
            self._selected.add(index)
        self.clear_validation_message()
        return index in self._selected

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def edit_cell(self, index: int, key: str, value: str) -> None:
        self._check_index(index)
        if key not in self._keys:
            raise KeyError(key)
        self.records[index][key] = "" if value is None else str(value)
        self.clear_validation_message()

    def selected_indices(self) -> List[int]:
        return sorted(self._selected)

    def selected_records(self) -> List[EditableRecord]:
        return [dict(self.records[i]) for i in self.selected_indices()]

    def missing_for(self, index: int) -> List[str]:
        self._check_index(index)
        return missing_fields(self.records[index], self.fields)

    def invalid_selected(self) -> List[int]:
        return invalid_indices(self.records, self._selected, self.fields)

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.records) / self.page_size))

    def go_to_page(self, page: int) -> int:
        self.current_page = min(max(1, page), self.page_count)
        return self.current_page

    def page_rows(self) -> List[Tuple[int, EditableRecord]]:
        start = (self.current_page - 1) * self.page_size
        end = start + self.page_size
        return [(i, self.records[i]) for i in range(start, min(end, len(self.records)))]
