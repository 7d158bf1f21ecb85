"""Spreadsheet import endpoints with preview and confirmation workflow"""
from fastapi import APIRouter, UploadFile, File, HTTPException
from fastapi.responses import Response

from src.academy_admin.api.deps import DbSession
from src.academy_admin.config import settings
from src.academy_admin.schemas.imports import (
    ConfirmRequest,
    ConfirmResult,
    ErrorResponse,
    PreviewResult,
)
from src.academy_admin.services.import_commit import CommitError, commit_import
from src.academy_admin.services.import_schema import SchemaField, UnknownEntityTypeError, fields_for
from src.academy_admin.services.participant_export import export_participants_csv, template_csv
from src.academy_admin.services.spreadsheet import SpreadsheetError, build_preview, read_spreadsheet

router = APIRouter()


def _fields_or_404(entity_type: str) -> tuple[SchemaField, ...]:
    try:
        return fields_for(entity_type)
    except UnknownEntityTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/import/preview/{entity_type}", response_model=PreviewResult)
async def preview_import(
    entity_type: str,
    file: UploadFile = File(...)
):
    """
    Parse an uploaded CSV/Excel/ODS file.
    Returns every row keyed by its original header plus the first rows as a preview.
    """
    _fields_or_404(entity_type)

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File is too large (limit: {settings.IMPORT_MAX_UPLOAD_MB}MB)"
        )

    try:
        rows = read_spreadsheet(file.filename or "", content)
    except SpreadsheetError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return build_preview(entity_type.lower(), rows, settings.IMPORT_PREVIEW_ROWS)


@router.post("/import/confirm/{entity_type}", response_model=ConfirmResult)
def confirm_import(
    entity_type: str,
    request: ConfirmRequest,
    db: DbSession
):
    """
    Commit the reviewed rows. Existing records with the same key are updated.
    Rejects the whole request when any row is invalid.
    """
    _fields_or_404(entity_type)

    try:
        return commit_import(db, entity_type, request)
    except CommitError as e:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponse(message=e.message, detail=e.row_errors or None).model_dump()
        )


@router.get("/import/template/{entity_type}", response_class=Response)
def download_template(entity_type: str):
    fields = _fields_or_404(entity_type)
    return Response(
        content=template_csv(fields),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{entity_type.lower()}_import_template.csv"'
        }
    )


@router.get("/export/participants", response_class=Response)
def export_participants(db: DbSession):
    return Response(
        content=export_participants_csv(db),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": 'attachment; filename="participants_export.csv"'
        }
    )
