from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional, Union

from models.company_record import CompanyDraft, CompanyRecord
from models.contact_record import ContactDraft, ContactRecord
from models.results import NotFound, SubmitResult, Submitted, ValidationFailed
from ports.storage import DocumentStorePort


logger = logging.getLogger(__name__)


def new_record_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_company_draft(draft: CompanyDraft) -> Optional[ValidationFailed]:
    if not (draft.name or "").strip():
        return ValidationFailed("name", "Company name is required")
    if draft.employees < 0:
        return ValidationFailed("employees", "Employees must be a non-negative integer")
    return None


def validate_contact_draft(draft: ContactDraft) -> Optional[ValidationFailed]:
    if not (draft.name or "").strip():
        return ValidationFailed("name", "Contact name is required")
    if not (draft.owner_id or "").strip():
        return ValidationFailed("owner_id", "Please select a company")
    return None


def submit_company(
    store: DocumentStorePort,
    draft: CompanyDraft,
    existing: Optional[CompanyRecord] = None,
) -> SubmitResult:
    """Insert (no ``existing``) or update a company with one load and one save."""
    failure = validate_company_draft(draft)
    if failure:
        return failure

    document = store.load()
    fields = draft.model_dump()
    if existing is None:
        record = CompanyRecord(id=new_record_id(), created_at=utc_timestamp(), **fields)
        document.companies.append(record)
        created = True
    else:
        for index, current in enumerate(document.companies):
            if current.id == existing.id:
                record = CompanyRecord(id=current.id, created_at=current.created_at, **fields)
                document.companies[index] = record
                break
        else:
            return NotFound("company", existing.id)
        created = False

    store.save(document)
    logger.info(
        "Company saved",
        extra={"op": "create" if created else "update", "entity": "company", "record_id": record.id},
    )
    return Submitted(record=record, created=created)


def submit_contact(
    store: DocumentStorePort,
    draft: ContactDraft,
    existing: Optional[ContactRecord] = None,
) -> SubmitResult:
    """Insert or update a contact; the owning company must exist at write time."""
    failure = validate_contact_draft(draft)
    if failure:
        return failure

    document = store.load()
    if document.find_company(draft.owner_id) is None:
        return ValidationFailed("owner_id", "Selected company does not exist")

    fields = draft.model_dump()
    if existing is None:
        record = ContactRecord(id=new_record_id(), created_at=utc_timestamp(), **fields)
        document.contacts.append(record)
        created = True
    else:
        for index, current in enumerate(document.contacts):
            if current.id == existing.id:
                record = ContactRecord(id=current.id, created_at=current.created_at, **fields)
                document.contacts[index] = record
                break
        else:
            return NotFound("contact", existing.id)
        created = False

    store.save(document)
    logger.info(
        "Contact saved",
        extra={"op": "create" if created else "update", "entity": "contact", "record_id": record.id},
    )
    return Submitted(record=record, created=created)


class _RecordForm(ABC):
    draft: Union[CompanyDraft, ContactDraft]
    existing: Any

    def __init__(self, store: DocumentStorePort):
        self.store = store
        self.existing = None

    @property
    def is_edit(self) -> bool:
        return self.existing is not None

    def set_field(self, name: str, value: Any) -> None:
        """Update one draft field.

        Raises KeyError for a field the draft does not have and ValueError
        when the value cannot be coerced (e.g. non-numeric employees).
        """
        if name not in type(self.draft).model_fields:
            raise KeyError(name)
        setattr(self.draft, name, value)

    def update(self, **values: Any) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    @abstractmethod
    def submit(self) -> SubmitResult:
        ...


class CompanyForm(_RecordForm):
    def __init__(self, store: DocumentStorePort, company: Optional[CompanyRecord] = None):
        super().__init__(store)
        self.draft = CompanyDraft()
        if company is not None:
            self.mirror(company)

    def mirror(self, company: CompanyRecord) -> None:
        self.existing = company
        self.draft = company.to_draft()

    def submit(self) -> SubmitResult:
        result = submit_company(self.store, self.draft, self.existing)
        if isinstance(result, Submitted):
            self.existing = result.record
        return result


class ContactForm(_RecordForm):
    def __init__(
        self,
        store: DocumentStorePort,
        contact: Optional[ContactRecord] = None,
        preselected_owner_id: Optional[str] = None,
    ):
        super().__init__(store)
        self.draft = ContactDraft()
        if contact is not None:
            self.mirror(contact)
        elif preselected_owner_id:
            self.draft.owner_id = preselected_owner_id

    def mirror(self, contact: ContactRecord) -> None:
        self.existing = contact
        self.draft = contact.to_draft()

    def submit(self) -> SubmitResult:
        result = submit_contact(self.store, self.draft, self.existing)
        if isinstance(result, Submitted):
            self.existing = result.record
        return result
