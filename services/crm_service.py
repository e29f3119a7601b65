from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from models.company_record import CompanyRecord
from models.contact_record import ContactRecord
from models.results import DeleteOutcome, NotFound
from ports.storage import DocumentStorePort
from services.search import (
    UNKNOWN_COMPANY_LABEL,
    company_names_by_id,
    company_search_fields,
    contact_search_fields,
    filter_records,
)


logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 5


@dataclass(frozen=True)
class ContactView:
    """A contact joined with its owning company's display name."""

    contact: ContactRecord
    company_name: str


@dataclass(frozen=True)
class ContactDetail:
    contact: ContactRecord
    # None when owner_id no longer resolves to a company
    company: Optional[CompanyRecord]


@dataclass(frozen=True)
class CompanyDetail:
    company: CompanyRecord
    contacts: List[ContactRecord] = field(default_factory=list)


class CrmService:
    """Read-side queries and delete intents over the CRM document."""

    def __init__(self, store: DocumentStorePort, recent_limit: int = DEFAULT_RECENT_LIMIT):
        self.store = store
        self.recent_limit = recent_limit

    # --- Companies ---
    def list_companies(self, query: str = "") -> List[CompanyRecord]:
        document = self.store.load()
        return filter_records(document.companies, query, company_search_fields())

    def get_company(self, company_id: str) -> Union[CompanyRecord, NotFound]:
        company = self.store.load().find_company(company_id)
        if company is None:
            return NotFound("company", company_id)
        return company

    def get_company_detail(self, company_id: str) -> Union[CompanyDetail, NotFound]:
        document = self.store.load()
        company = document.find_company(company_id)
        if company is None:
            return NotFound("company", company_id)
        contacts = [c for c in document.contacts if c.owner_id == company_id]
        return CompanyDetail(company=company, contacts=contacts)

    def list_contacts_for_company(self, company_id: str, query: str = "") -> List[ContactRecord]:
        document = self.store.load()
        contacts = [c for c in document.contacts if c.owner_id == company_id]
        return filter_records(contacts, query, contact_search_fields(document.companies))

    # --- Contacts ---
    def list_contacts(self, query: str = "") -> List[ContactView]:
        document = self.store.load()
        matches = filter_records(document.contacts, query, contact_search_fields(document.companies))
        names = company_names_by_id(document.companies)
        return [ContactView(contact=c, company_name=names.get(c.owner_id, UNKNOWN_COMPANY_LABEL)) for c in matches]

    def get_contact(self, contact_id: str) -> Union[ContactDetail, NotFound]:
        document = self.store.load()
        contact = document.find_contact(contact_id)
        if contact is None:
            return NotFound("contact", contact_id)
        return ContactDetail(contact=contact, company=document.find_company(contact.owner_id))

    # --- Dashboard slices ---
    def recent_companies(self, limit: Optional[int] = None) -> List[CompanyRecord]:
        limit = self.recent_limit if limit is None else limit
        return self.store.load().companies[:limit]

    def recent_contacts(self, limit: Optional[int] = None) -> List[ContactView]:
        limit = self.recent_limit if limit is None else limit
        return self.list_contacts()[:limit]

    # --- Delete intents ---
    def delete_contact(self, contact_id: str) -> bool:
        """Remove one contact. Returns False (and writes nothing) when absent."""
        document = self.store.load()
        remaining = [c for c in document.contacts if c.id != contact_id]
        if len(remaining) == len(document.contacts):
            return False
        document.contacts = remaining
        self.store.save(document)
        logger.info("Contact deleted", extra={"op": "delete", "entity": "contact", "record_id": contact_id})
        return True

    def delete_company(self, company_id: str) -> DeleteOutcome:
        """Remove a company and every contact it owns in a single save."""
        document = self.store.load()
        if document.find_company(company_id) is None:
            return DeleteOutcome(removed_company=False)
        document.companies = [c for c in document.companies if c.id != company_id]
        kept = [c for c in document.contacts if c.owner_id != company_id]
        removed_contacts = len(document.contacts) - len(kept)
        document.contacts = kept
        self.store.save(document)
        logger.info(
            "Company deleted",
            extra={
                "op": "delete",
                "entity": "company",
                "record_id": company_id,
                "status": f"contacts_removed={removed_contacts}",
            },
        )
        return DeleteOutcome(removed_company=True, removed_contacts=removed_contacts)
