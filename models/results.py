from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from .company_record import CompanyRecord
from .contact_record import ContactRecord


EntityKind = Literal["company", "contact"]


@dataclass(frozen=True)
class ValidationFailed:
    """A draft field was rejected; nothing was written."""

    field: str
    reason: str


@dataclass(frozen=True)
class NotFound:
    """No record of the given kind carries the requested id."""

    kind: EntityKind
    id: str

    @property
    def reason(self) -> str:
        return f"{self.kind.capitalize()} not found"


@dataclass(frozen=True)
class Submitted:
    record: Union[CompanyRecord, ContactRecord]
    created: bool


@dataclass(frozen=True)
class DeleteOutcome:
    removed_company: bool
    removed_contacts: int = 0


SubmitResult = Union[Submitted, ValidationFailed, NotFound]
