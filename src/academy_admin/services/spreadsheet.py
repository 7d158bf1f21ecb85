"""Spreadsheet parsing for import previews (CSV, Excel, OpenDocument)"""
import io
import logging
import warnings
from pathlib import PurePath
from typing import List, Optional

import pandas as pd

from src.academy_admin.schemas.imports import CellValue, PreviewResult, SourceRow

logger = logging.getLogger(__name__)

EXCEL_ENGINES = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".ods": "odf",
}
SUPPORTED_EXTENSIONS = [".csv", *EXCEL_ENGINES.keys()]


class SpreadsheetError(ValueError):
    pass


def decode_csv_content(content: bytes) -> str:
    encodings = ["utf-8-sig", "utf-8", "cp1252"]
    for encoding in encodings:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue
    raise SpreadsheetError("Unable to decode CSV file. Supported encodings: UTF-8, Windows-1252")


def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _read_frame(filename: str, content: bytes) -> pd.DataFrame:
    ext = file_extension(filename)
    if ext == ".csv":
        text = decode_csv_content(content)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            # rows longer than the header must not turn the first column into an index
            frame = pd.read_csv(
                io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True, index_col=False
            )
        for warning in caught:
            if not issubclass(warning.category, pd.errors.ParserWarning):
                continue
            logger.info(f"Dropped extra trailing fields in {filename}: {warning.message}")
        return frame
    engine = EXCEL_ENGINES.get(ext)
    if engine is None:
        raise SpreadsheetError(
            f"Unsupported file type '{ext or filename}'. Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return pd.read_excel(io.BytesIO(content), engine=engine, dtype=str, keep_default_na=False)


def _cell(value) -> CellValue:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return str(value)


def _is_blank(row: SourceRow) -> bool:
    return all(v is None or not str(v).strip() for v in row.values())


def read_spreadsheet(filename: str, content: bytes) -> List[SourceRow]:
    """
    Parse an uploaded file into rows keyed by the original header text.

    The first sheet is used for workbooks. Header whitespace is trimmed,
    cell values are kept as text and fully blank rows are dropped.
    """
    if not content:
        raise SpreadsheetError("The uploaded file is empty")
    try:
        frame = _read_frame(filename, content)
    except SpreadsheetError:
        raise
    except pd.errors.EmptyDataError:
        raise SpreadsheetError("The uploaded file has no header row")
    except Exception as e:
        logger.warning(f"Failed to parse {filename}: {e}")
        raise SpreadsheetError(f"Could not read the file: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]
    frame = frame.astype(object).where(pd.notna(frame), None)

    rows: List[SourceRow] = []
    for raw in frame.to_dict(orient="records"):
        row = {str(k): _cell(v) for k, v in raw.items()}
        if not _is_blank(row):
            rows.append(row)
    return rows


def build_preview(entity_type: str, rows: List[SourceRow], preview_limit: Optional[int] = 10) -> PreviewResult:
    preview = rows if preview_limit is None else rows[:preview_limit]
    return PreviewResult(
        model=entity_type,
        total_rows=len(rows),
        preview=preview,
        full_data=rows,
    )
