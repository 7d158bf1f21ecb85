"""CSV export of participants and blank import templates"""
import csv
import io
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from src.academy_admin.models.participant import Participant
from src.academy_admin.services.import_schema import SchemaField

EXPORT_HEADERS = [
    "ID",
    "First Name",
    "Last Name",
    "Email",
    "Phone Number",
    "Division",
    "Deanery",
    "Parish",
    "Program",
    "Modules Count",
]


def export_participants_csv(db: Session) -> str:
    participants = db.execute(
        select(Participant)
        .options(selectinload(Participant.program), selectinload(Participant.enrollments))
        .order_by(Participant.id)
    ).scalars().all()

    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerow(EXPORT_HEADERS)
    for p in participants:
        writer.writerow([
            p.reg_no or p.id,
            p.first_name,
            p.last_name,
            p.email,
            p.phone_number,
            p.division or "",
            p.deanery or "",
            p.parish or "",
            p.program.title if p.program else "",
            len(p.enrollments),
        ])
    return output.getvalue()


def template_csv(fields: Sequence[SchemaField]) -> bytes:
    """Header-only CSV using field labels; UTF-8 with BOM so Excel opens it cleanly."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([f.label for f in fields])
    return output.getvalue().encode("utf-8-sig")
