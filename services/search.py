from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence, TypeVar, Union

from models.company_record import CompanyRecord
from models.contact_record import ContactRecord


T = TypeVar("T")

# Display name for a contact whose owner_id resolves to no company
UNKNOWN_COMPANY_LABEL = "Unknown"

# Attribute name or a callable rendering the searchable text of a record
FieldSelector = Union[str, Callable[[T], object]]


def _field_text(record: object, selector: FieldSelector) -> str:
    value = selector(record) if callable(selector) else getattr(record, selector, None)
    if value is None:
        return ""
    return str(value)


def filter_records(records: List[T], query: str, fields: Sequence[FieldSelector]) -> List[T]:
    """Case-insensitive substring search across the selected fields.

    An empty query returns ``records`` itself. A record matches when any
    selected field contains the query.
    """
    if not query:
        return records
    needle = query.lower()
    return [
        record
        for record in records
        if any(needle in _field_text(record, field).lower() for field in fields)
    ]


def company_search_fields() -> List[FieldSelector]:
    return ["name", "industry", "location"]


def company_names_by_id(companies: Iterable[CompanyRecord]) -> Dict[str, str]:
    return {c.id: c.name for c in companies}


def contact_search_fields(companies: Iterable[CompanyRecord]) -> List[FieldSelector]:
    """Contact text fields plus the owning company's name (joined by id)."""
    names = company_names_by_id(companies)

    def company_name(contact: ContactRecord) -> str:
        return names.get(contact.owner_id, "")

    return ["name", "position", "email", "phone", company_name]
