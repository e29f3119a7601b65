from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ContactDraft(BaseModel):
    """Editable contact fields: what the contact form holds before submit."""

    owner_id: str = ""
    name: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    notes: str = ""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class ContactRecord(ContactDraft):
    """Stored contact shape. owner_id references CompanyRecord.id."""

    id: str
    # Older documents spell the foreign key clientId
    owner_id: str = Field(
        default="",
        validation_alias=AliasChoices("ownerId", "clientId", "owner_id"),
        serialization_alias="ownerId",
    )
    created_at: str = Field(default="", alias="createdAt")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_draft(self) -> ContactDraft:
        return ContactDraft(**self.model_dump(include=set(ContactDraft.model_fields)))
