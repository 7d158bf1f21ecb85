"""Target record fields for each importable entity type"""
from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class SchemaField:
    key: str
    label: str
    required: bool = False


class UnknownEntityTypeError(KeyError):
    def __init__(self, entity_type: str):
        super().__init__(entity_type)
        self.entity_type = entity_type

    def __str__(self) -> str:
        return f"Unknown import type: '{self.entity_type}'"


PARTICIPANT_FIELDS: Tuple[SchemaField, ...] = (
    SchemaField("firstName", "First Name", required=True),
    SchemaField("lastName", "Last Name", required=True),
    SchemaField("email", "Email", required=True),
    SchemaField("phoneNumber", "Phone Number", required=True),
    SchemaField("password", "Password"),
    SchemaField("division", "Division"),
    SchemaField("deanery", "Deanery"),
    SchemaField("parish", "Parish"),
    SchemaField("program", "Program"),
    SchemaField("semester", "Semester"),
)

PROGRAM_FIELDS: Tuple[SchemaField, ...] = (
    SchemaField("title", "Program Name", required=True),
    SchemaField("code", "Program Code"),
    SchemaField("semester", "Semester", required=True),
    SchemaField("duration", "Duration", required=True),
    SchemaField("credits", "Credits"),
)

MODULE_FIELDS: Tuple[SchemaField, ...] = (
    SchemaField("title", "Module Name", required=True),
    SchemaField("code", "Module Code"),
    SchemaField("credits", "Credits", required=True),
    SchemaField("program", "Program", required=True),
)

SCHEMAS: Dict[str, Tuple[SchemaField, ...]] = {
    "participant": PARTICIPANT_FIELDS,
    "program": PROGRAM_FIELDS,
    "module": MODULE_FIELDS,
}


def fields_for(entity_type: str) -> Tuple[SchemaField, ...]:
    """Ordered fields for an entity type; the order is the table column order."""
    try:
        return SCHEMAS[entity_type.lower()]
    except KeyError:
        raise UnknownEntityTypeError(entity_type) from None


def entity_types() -> List[str]:
    return list(SCHEMAS.keys())


def required_labels(fields: Tuple[SchemaField, ...]) -> List[str]:
    return [f.label for f in fields if f.required]
