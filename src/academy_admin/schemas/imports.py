"""Spreadsheet import schemas shared by the preview/confirm endpoints and the client"""
from typing import Optional, List, Dict, Union
from pydantic import BaseModel, ConfigDict, Field

CellValue = Union[str, int, float, None]
SourceRow = Dict[str, CellValue]
EditableRecord = Dict[str, str]


class PreviewResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    model: str
    total_rows: int = Field(alias="totalRows")
    preview: List[SourceRow]
    full_data: List[SourceRow] = Field(alias="fullData")

    @property
    def headers(self) -> List[str]:
        if not self.full_data:
            return []
        return list(self.full_data[0].keys())


class FileDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_name: str = Field(default="Imported File", alias="originalName")
    size: int = 0
    type: str = "unknown"


class ConfirmRequest(FileDetails):
    data: List[EditableRecord]


class ConfirmResult(BaseModel):
    imported: int = 0


class RowError(BaseModel):
    row_number: int
    errors: List[str]


class ErrorResponse(BaseModel):
    message: str
    detail: Optional[Union[str, List[RowError]]] = None
