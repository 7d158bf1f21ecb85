"""Commit confirmed import rows as new or updated records"""
import logging
from typing import Callable, Dict, List, Optional

from email_validator import validate_email, EmailNotValidError
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from src.academy_admin.models.import_batch import ImportBatch
from src.academy_admin.models.module import Module
from src.academy_admin.models.participant import Participant
from src.academy_admin.models.program import Program
from src.academy_admin.schemas.imports import ConfirmRequest, ConfirmResult, EditableRecord, RowError
from src.academy_admin.services.import_schema import fields_for
from src.academy_admin.services.import_validation import missing_fields
from src.academy_admin.services.password import default_password, hash_password

logger = logging.getLogger(__name__)


class CommitError(Exception):
    def __init__(self, message: str, row_errors: Optional[List[RowError]] = None):
        super().__init__(message)
        self.message = message
        self.row_errors = row_errors or []


def _text(record: EditableRecord, key: str) -> str:
    return (record.get(key) or "").strip()


def _optional(record: EditableRecord, key: str) -> Optional[str]:
    return _text(record, key) or None


def _parse_int(value: str, label: str, errors: List[str]) -> Optional[int]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        errors.append(f"{label} must be a whole number: '{value}'")
        return None
    if not number.is_integer():
        errors.append(f"{label} must be a whole number: '{value}'")
        return None
    return int(number)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_program(db: Session, title: str) -> Optional[Program]:
    return db.execute(
        select(Program).where(func.lower(Program.title) == title.strip().lower())
    ).scalar_one_or_none()


def upsert_participant(db: Session, record: EditableRecord) -> List[str]:
    try:
        email = validate_email(normalize_email(_text(record, "email")), check_deliverability=False).normalized
    except EmailNotValidError as e:
        return [f"invalid email format: {str(e)}"]

    program = None
    program_title = _text(record, "program")
    if program_title:
        program = find_program(db, program_title)
        if program is None:
            return [f"unknown program: '{program_title}'"]

    participant = db.execute(
        select(Participant).where(Participant.email == email)
    ).scalar_one_or_none()
    if participant is None:
        participant = Participant(email=email)
        db.add(participant)

    participant.first_name = _text(record, "firstName")
    participant.last_name = _text(record, "lastName")
    participant.phone_number = _text(record, "phoneNumber")
    for key, attr in (("division", "division"), ("deanery", "deanery"),
                      ("parish", "parish"), ("semester", "semester")):
        value = _optional(record, key)
        if value is not None:
            setattr(participant, attr, value)
    if program is not None:
        participant.program_id = program.id
    db.flush()

    if participant.reg_no is None:
        participant.reg_no = f"P-{participant.id:05d}"

    password = _text(record, "password")
    if password:
        participant.password_hash = hash_password(password)
    elif participant.password_hash is None:
        participant.password_hash = hash_password(default_password(participant.first_name, participant.reg_no))
    db.flush()
    return []


def upsert_program(db: Session, record: EditableRecord) -> List[str]:
    errors: List[str] = []
    title = _text(record, "title")
    semester = _parse_int(_text(record, "semester"), "Semester", errors)
    duration = _parse_int(_text(record, "duration"), "Duration", errors)
    credits = _parse_int(_text(record, "credits"), "Credits", errors)
    if duration is not None and duration <= 0:
        errors.append("Duration must be positive")
    if errors:
        return errors

    program = find_program(db, title)
    if program is None:
        program = Program(title=title)
        db.add(program)
    program.semester = semester
    program.duration = duration
    if credits is not None:
        program.credits = credits
    code = _optional(record, "code")
    if code is not None:
        program.code = code
    db.flush()
    return []


def upsert_module(db: Session, record: EditableRecord) -> List[str]:
    errors: List[str] = []
    title = _text(record, "title")
    credits = _parse_int(_text(record, "credits"), "Credits", errors)
    program_title = _text(record, "program")
    program = find_program(db, program_title)
    if program is None:
        errors.append(f"unknown program: '{program_title}'")
    if errors:
        return errors

    module = db.execute(
        select(Module).where(
            Module.program_id == program.id,
            func.lower(Module.title) == title.lower()
        )
    ).scalar_one_or_none()
    if module is None:
        module = Module(title=title, program_id=program.id)
        db.add(module)
    module.credits = credits
    code = _optional(record, "code")
    if code is not None:
        module.code = code
    db.flush()
    return []


COMMITTERS: Dict[str, Callable[[Session, EditableRecord], List[str]]] = {
    "participant": upsert_participant,
    "program": upsert_program,
    "module": upsert_module,
}


def commit_import(db: Session, entity_type: str, request: ConfirmRequest) -> ConfirmResult:
    """
    Validate and upsert every row in one transaction.

    Any row error rolls back the whole request and raises CommitError with
    the per-row messages (1-based row numbers within the request).
    """
    fields = fields_for(entity_type)
    committer = COMMITTERS[entity_type.lower()]
    if not request.data:
        raise CommitError("No rows to import")

    row_errors: List[RowError] = []
    imported = 0
    for idx, record in enumerate(request.data):
        row_num = idx + 1
        errors = [f"{label} is required" for label in missing_fields(record, fields)]
        if not errors:
            errors = committer(db, record)
        if errors:
            row_errors.append(RowError(row_number=row_num, errors=errors))
        else:
            imported += 1

    if row_errors:
        db.rollback()
        logger.warning(f"Rejected {entity_type} import '{request.original_name}': {len(row_errors)} invalid row(s)")
        raise CommitError(f"{len(row_errors)} row(s) could not be imported", row_errors)

    db.add(ImportBatch(
        entity_type=entity_type.lower(),
        original_name=request.original_name,
        size=request.size,
        content_type=request.type,
        imported_count=imported,
    ))
    db.commit()
    logger.info(f"Imported {imported} {entity_type} record(s) from '{request.original_name}'")
    return ConfirmResult(imported=imported)
