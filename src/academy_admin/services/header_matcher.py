"""Match arbitrary spreadsheet headers onto schema fields"""
import re
from typing import Dict, Iterable, List, Optional, Sequence

from src.academy_admin.services.import_schema import SchemaField

HeaderMapping = Dict[str, str]


def normalize_header(name: str) -> str:
    """Lowercase and strip everything that is not a letter or digit."""
    return re.sub(r"[^a-z0-9]", "", str(name).lower())


def _label_match(field: SchemaField, headers: Iterable[str], claimed: set) -> Optional[str]:
    target = normalize_header(field.label)
    if not target:
        return None
    for header in headers:
        if header in claimed:
            continue
        if normalize_header(header) == target:
            return header
    return None


def _key_match(field: SchemaField, headers: Iterable[str], claimed: set) -> Optional[str]:
    key = field.key.lower()
    for header in headers:
        if header in claimed:
            continue
        if key in normalize_header(header):
            return header
    return None


def match_headers(headers: Sequence[str], fields: Sequence[SchemaField]) -> HeaderMapping:
    """
    Build a field key -> source header mapping.

    Fields are visited in schema order. Each tries an exact label match, then
    key containment, over the headers not yet claimed by an earlier field.
    """
    ordered: List[str] = [h for h in headers if h is not None]
    mapping: HeaderMapping = {}
    claimed: set = set()

    for field in fields:
        header = _label_match(field, ordered, claimed)
        if header is None:
            header = _key_match(field, ordered, claimed)
        if header is not None:
            mapping[field.key] = header
            claimed.add(header)

    return mapping


def unmatched_fields(mapping: HeaderMapping, fields: Sequence[SchemaField]) -> List[SchemaField]:
    return [f for f in fields if f.key not in mapping]


def unmapped_headers(mapping: HeaderMapping, headers: Sequence[str]) -> List[str]:
    used = set(mapping.values())
    return [h for h in headers if h not in used]
