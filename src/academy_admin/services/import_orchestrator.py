"""Import workflow state machine: preview, local review, confirm

States:
  idle -> previewing -> preview_ready -> confirming -> succeeded
  idle/previewing/preview_ready/confirming -> failed
  any -> idle via reset()

The orchestrator has no rendering dependency; a UI binds to `state`,
`status`, `preview_data`, `session` and `validation_error` and calls the
operations below. Network calls go through an injected ImportApi.
"""
import enum
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from src.academy_admin.config import settings
from src.academy_admin.schemas.imports import ConfirmRequest, EditableRecord, FileDetails, PreviewResult
from src.academy_admin.services.header_matcher import HeaderMapping, match_headers
from src.academy_admin.services.import_client import HttpImportApi, ImportApi, ImportApiError
from src.academy_admin.services.import_schema import SchemaField, fields_for
from src.academy_admin.services.import_session import ImportSession
from src.academy_admin.services.import_validation import missing_fields, validate_records
from src.academy_admin.services.preferences import PreferenceStore
from src.academy_admin.services.row_normalizer import normalize_rows

logger = logging.getLogger(__name__)

PREVIEW_FALLBACK_ERROR = "Failed to preview file"
CONFIRM_FALLBACK_ERROR = "Failed to confirm import"
NO_ROWS_SELECTED = "Select at least one row to import"


class ImportState(str, enum.Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    PREVIEW_READY = "preview_ready"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportStatus:
    loading: bool = False
    error: Optional[str] = None
    success: bool = False
    imported_count: int = 0


class ImportStateError(Exception):
    pass


class ImportBusyError(ImportStateError):
    pass


def invalid_rows_message(count: int) -> str:
    return f"{count} selected row(s) missing required fields"


class ImportOrchestrator:
    def __init__(
        self,
        entity_type: str,
        api: Optional[ImportApi] = None,
        preferences: Optional[PreferenceStore] = None,
        page_size: Optional[int] = None
    ):
        self.entity_type = entity_type
        self.fields: Sequence[SchemaField] = fields_for(entity_type)
        self.api = api or HttpImportApi(preferences=preferences)
        self.page_size = page_size or settings.IMPORT_PAGE_SIZE

        self.state = ImportState.IDLE
        self.status = ImportStatus()
        self.preview_data: Optional[PreviewResult] = None
        self.mapping: HeaderMapping = {}
        self.session: Optional[ImportSession] = None
        self.file_details: Optional[FileDetails] = None
        self._generation = 0

    @property
    def validation_error(self) -> Optional[str]:
        if self.session is None:
            return None
        return self.session.validation_message

    def set_file_details(self, original_name: str, size: int = 0, content_type: str = "unknown") -> None:
        self.file_details = FileDetails(original_name=original_name, size=size, type=content_type)

    def reset(self) -> None:
        """Back to idle from any state; a response still in flight is discarded."""
        self._generation += 1
        self.state = ImportState.IDLE
        self.status = ImportStatus()
        self.preview_data = None
        self.mapping = {}
        self.session = None
        self.file_details = None
        logger.info(f"Import session reset for {self.entity_type}")

    def _begin(self, state: ImportState) -> int:
        if self.status.loading:
            raise ImportBusyError(f"An import request is already in progress ({self.state.value})")
        self.state = state
        return self._generation

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(f"Discarding stale {self.entity_type} import response")
            return True
        return False

    def _fail(self, message: str) -> None:
        self.state = ImportState.FAILED
        self.status = replace(self.status, loading=False, error=message)

    async def preview_file(
        self,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None
    ) -> None:
        self._begin(ImportState.PREVIEWING)
        self._generation += 1
        generation = self._generation
        self.preview_data = None
        self.mapping = {}
        self.session = None
        self.status = ImportStatus(loading=True)
        self.set_file_details(filename, len(content), content_type or "unknown")

        try:
            result = await self.api.preview(self.entity_type, filename, content, content_type)
        except ImportApiError as e:
            if self._is_stale(generation):
                return
            logger.warning(f"Preview failed for {filename}: {e.message}")
            self._fail(e.message or PREVIEW_FALLBACK_ERROR)
            return
        except Exception:
            if not self._is_stale(generation):
                logger.exception(f"Unexpected error previewing {filename}")
                self._fail(PREVIEW_FALLBACK_ERROR)
            raise

        if self._is_stale(generation):
            return

        headers = result.headers
        self.mapping = match_headers(headers, self.fields)
        records = normalize_rows(result.full_data, self.mapping, self.fields)
        self.preview_data = result
        self.session = ImportSession(records, self.fields, page_size=self.page_size)
        self.state = ImportState.PREVIEW_READY
        self.status = replace(self.status, loading=False)
        report = validate_records(records, self.fields)
        logger.info(
            f"Preview ready for {filename}: {report.total} row(s), {len(report.invalid)} incomplete, "
            f"{len(self.mapping)}/{len(self.fields)} field(s) matched"
        )

    def _rows_to_send(self, edited_subset: Optional[Sequence[EditableRecord]]) -> List[EditableRecord]:
        if edited_subset is not None:
            return [dict(r) for r in edited_subset]
        return self.session.selected_records()

    def _gate(self, rows: Sequence[EditableRecord]) -> Optional[str]:
        if not rows:
            return NO_ROWS_SELECTED
        invalid = sum(1 for r in rows if missing_fields(r, self.fields))
        if invalid:
            return invalid_rows_message(invalid)
        return None

    async def confirm_import(self, edited_subset: Optional[Sequence[EditableRecord]] = None) -> bool:
        """
        Send the selected rows for commit.

        Returns False when the local gate rejects the rows (no network call is
        made and `validation_error` explains why) or the commit fails, True
        when the service accepted the rows.
        """
        if self.status.loading:
            raise ImportBusyError(f"An import request is already in progress ({self.state.value})")
        if self.session is None:
            raise ImportStateError("There is no previewed file to confirm")

        rows = self._rows_to_send(edited_subset)
        message = self._gate(rows)
        if message:
            self.session.validation_message = message
            logger.info(f"Confirm rejected locally: {message}")
            return False

        generation = self._begin(ImportState.CONFIRMING)
        self.status = replace(self.status, loading=True, error=None)
        details = self.file_details or FileDetails()
        request = ConfirmRequest(
            data=rows,
            original_name=details.original_name or "Imported File",
            size=details.size or 0,
            type=details.type or "unknown",
        )

        try:
            result = await self.api.confirm(self.entity_type, request)
        except ImportApiError as e:
            if self._is_stale(generation):
                return False
            logger.warning(f"Confirm failed for {details.original_name}: {e.message}")
            self._fail(e.message or CONFIRM_FALLBACK_ERROR)
            return False
        except Exception:
            if not self._is_stale(generation):
                logger.exception(f"Unexpected error confirming {details.original_name}")
                self._fail(CONFIRM_FALLBACK_ERROR)
            raise

        if self._is_stale(generation):
            return False

        self.status = ImportStatus(
            loading=False,
            error=None,
            success=True,
            imported_count=result.imported or 0,
        )
        self.state = ImportState.SUCCEEDED
        self.preview_data = None
        self.mapping = {}
        self.session = None
        self.file_details = None
        logger.info(f"Imported {self.status.imported_count} {self.entity_type} record(s)")
        return True
