from __future__ import annotations

from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .company_record import CompanyRecord
from .contact_record import ContactRecord


class CrmDocument(BaseModel):
    """The single persisted document holding both collections."""

    companies: list[CompanyRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("companies", "clients"),
    )
    contacts: list[ContactRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("companies", "contacts", mode="before")
    @classmethod
    def _null_collection_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def empty(cls) -> "CrmDocument":
        return cls(companies=[], contacts=[])

    def to_payload(self) -> Dict[str, Any]:
        """Serialise to the stored JSON layout (camelCase record keys)."""
        return self.model_dump(mode="json", by_alias=True)

    def find_company(self, company_id: str) -> CompanyRecord | None:
        for company in self.companies:
            if company.id == company_id:
                return company
        return None

    def find_contact(self, contact_id: str) -> ContactRecord | None:
        for contact in self.contacts:
            if contact.id == contact_id:
                return contact
        return None
