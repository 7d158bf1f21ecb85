import pytest
from sqlalchemy import select, func

from src.academy_admin.models import ImportBatch, Module, Participant, Program
from src.academy_admin.schemas.imports import ConfirmRequest
from src.academy_admin.services.import_commit import CommitError, commit_import
from src.academy_admin.services.password import default_password, verify_password


def participant_row(**overrides):
    row = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "Ada@School.org",
        "phoneNumber": "555-0100",
        "password": "",
        "division": "North",
        "deanery": "",
        "parish": "St. Mary",
        "program": "",
        "semester": "",
    }
    row.update(overrides)
    return row


def count(db, model):
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def test_participant_insert_assigns_reg_no_and_default_password(db):
    result = commit_import(db, "participant", ConfirmRequest(data=[participant_row()], original_name="roster.csv"))

    assert result.imported == 1
    participant = db.execute(select(Participant)).scalar_one()
    assert participant.email == "ada@school.org"
    assert participant.reg_no == "P-00001"
    assert verify_password("ada001", participant.password_hash)
    assert participant.deanery is None
    assert participant.parish == "St. Mary"


def test_default_password_uses_first_word_of_first_name():
    assert default_password("Mary Ann", "P-00042") == "mary042"


def test_same_email_updates_existing_participant(db):
    commit_import(db, "participant", ConfirmRequest(data=[participant_row(password="s3cret")]))

    commit_import(db, "participant", ConfirmRequest(data=[
        participant_row(email="ada@school.org", lastName="King", division="", phoneNumber="555-0199"),
    ]))

    assert count(db, Participant) == 1
    participant = db.execute(select(Participant)).scalar_one()
    assert participant.last_name == "King"
    assert participant.phone_number == "555-0199"
    assert participant.division == "North"
    assert verify_password("s3cret", participant.password_hash)


def test_participant_linked_to_program_by_title(db):
    db.add(Program(title="Catechist Formation", semester=1, duration=2))
    db.commit()

    commit_import(db, "participant", ConfirmRequest(data=[participant_row(program="catechist formation")]))

    participant = db.execute(select(Participant)).scalar_one()
    assert participant.program.title == "Catechist Formation"


def test_invalid_rows_reject_the_whole_request(db):
    rows = [
        participant_row(email="grace@school.org", firstName="Grace"),
        participant_row(email="not-an-email"),
        participant_row(email="alan@school.org", program="Unknown Program"),
        participant_row(email="kat@school.org", phoneNumber=""),
    ]

    with pytest.raises(CommitError) as exc_info:
        commit_import(db, "participant", ConfirmRequest(data=rows))

    error = exc_info.value
    assert error.message == "3 row(s) could not be imported"
    assert [e.row_number for e in error.row_errors] == [2, 3, 4]
    assert error.row_errors[0].errors[0].startswith("invalid email format")
    assert error.row_errors[1].errors == ["unknown program: 'Unknown Program'"]
    assert error.row_errors[2].errors == ["Phone Number is required"]
    assert count(db, Participant) == 0
    assert count(db, ImportBatch) == 0


def test_empty_request_is_rejected(db):
    with pytest.raises(CommitError) as exc_info:
        commit_import(db, "participant", ConfirmRequest(data=[]))

    assert exc_info.value.message == "No rows to import"


def test_program_import_upserts_by_title(db):
    commit_import(db, "program", ConfirmRequest(data=[
        {"title": "Bible Studies", "code": "BS", "semester": "1", "duration": "2.0", "credits": ""},
    ]))
    commit_import(db, "program", ConfirmRequest(data=[
        {"title": "bible studies", "code": "", "semester": "2", "duration": "3", "credits": "12"},
    ]))

    program = db.execute(select(Program)).scalar_one()
    assert program.title == "Bible Studies"
    assert program.code == "BS"
    assert (program.semester, program.duration, program.credits) == (2, 3, 12)


def test_program_numbers_must_be_whole(db):
    with pytest.raises(CommitError) as exc_info:
        commit_import(db, "program", ConfirmRequest(data=[
            {"title": "Liturgy", "semester": "one", "duration": "0"},
        ]))

    errors = exc_info.value.row_errors[0].errors
    assert "Semester must be a whole number: 'one'" in errors
    assert "Duration must be positive" in errors


def test_module_import_requires_known_program(db):
    db.add(Program(title="Bible Studies", semester=1, duration=2))
    db.commit()

    result = commit_import(db, "module", ConfirmRequest(data=[
        {"title": "Old Testament", "code": "OT1", "credits": "3", "program": "Bible Studies"},
        {"title": "New Testament", "code": "", "credits": "4", "program": "BIBLE STUDIES"},
    ]))

    assert result.imported == 2
    assert count(db, Module) == 2

    with pytest.raises(CommitError):
        commit_import(db, "module", ConfirmRequest(data=[
            {"title": "Psalms", "credits": "2", "program": "Missing"},
        ]))


def test_import_batch_is_recorded(db):
    commit_import(db, "participant", ConfirmRequest(
        data=[participant_row()],
        original_name="roster.xlsx",
        size=2048,
        type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ))

    batch = db.execute(select(ImportBatch)).scalar_one()
    assert batch.entity_type == "participant"
    assert batch.original_name == "roster.xlsx"
    assert batch.size == 2048
    assert batch.imported_count == 1
