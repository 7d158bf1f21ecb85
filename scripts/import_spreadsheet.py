#!/usr/bin/env python3
"""
Import a spreadsheet through the preview/confirm API without the web console.

Usage (from the project root):
  .venv/bin/python scripts/import_spreadsheet.py participant participants.csv --dry-run
  .venv/bin/python scripts/import_spreadsheet.py participant participants.xlsx --skip-invalid

The bearer token is read from the preferences file (PREFERENCES_PATH); pass
--token to store a new one first. API_BASE_URL selects the server.
"""
import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from src.academy_admin.config import get_settings
from src.academy_admin.services.import_client import HttpImportApi
from src.academy_admin.services.import_orchestrator import ImportOrchestrator, ImportState
from src.academy_admin.services.import_schema import entity_types
from src.academy_admin.services.preferences import AUTH_TOKEN_KEY, JsonFilePreferenceStore


def print_preview(orchestrator: ImportOrchestrator) -> None:
    session = orchestrator.session
    print(f"Rows: {len(session)}")
    for field in orchestrator.fields:
        header = orchestrator.mapping.get(field.key)
        marker = "*" if field.required else " "
        print(f"  {marker} {field.label:<14} <- {header if header else '(not matched)'}")
    for index in range(len(session)):
        missing = session.missing_for(index)
        if missing:
            print(f"  row {index + 1}: missing {', '.join(missing)}")


async def run(args) -> int:
    preferences = JsonFilePreferenceStore(get_settings().PREFERENCES_PATH)
    if args.token:
        preferences.set(AUTH_TOKEN_KEY, args.token)

    api = HttpImportApi(preferences=preferences, base_url=args.api_url)
    orchestrator = ImportOrchestrator(args.entity_type, api=api)

    path = Path(args.path)
    content = path.read_bytes()
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    await orchestrator.preview_file(path.name, content, content_type)
    if orchestrator.state != ImportState.PREVIEW_READY:
        print(f"Error: {orchestrator.status.error}", file=sys.stderr)
        return 1

    print_preview(orchestrator)
    if args.dry_run:
        return 0

    if args.skip_invalid:
        for index in orchestrator.session.invalid_selected():
            orchestrator.session.toggle(index)

    await orchestrator.confirm_import()
    if orchestrator.validation_error:
        print(f"Error: {orchestrator.validation_error}", file=sys.stderr)
        return 1
    if not orchestrator.status.success:
        print(f"Error: {orchestrator.status.error}", file=sys.stderr)
        return 1

    print(f"Done: imported {orchestrator.status.imported_count} record(s)")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Preview and import a spreadsheet")
    parser.add_argument("entity_type", choices=entity_types(), help="Record type to import")
    parser.add_argument("path", help="CSV, XLSX or ODS file")
    parser.add_argument("--dry-run", action="store_true", help="Preview only, do not import")
    parser.add_argument("--skip-invalid", action="store_true", help="Deselect rows missing required fields")
    parser.add_argument("--api-url", default=None, help="API base URL (defaults to API_BASE_URL)")
    parser.add_argument("--token", default=None, help="Store this bearer token before importing")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
