from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CompanyDraft(BaseModel):
    """Editable company fields: what the company form holds before submit."""

    name: str = ""
    industry: str = ""
    location: str = ""
    website: str = ""
    revenue: str = ""
    employees: int = 0
    notes: str = ""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class CompanyRecord(CompanyDraft):
    """Stored company shape; id and created_at are fixed at creation."""

    id: str
    employees: int = Field(default=0, ge=0)
    created_at: str = Field(default="", alias="createdAt")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_draft(self) -> CompanyDraft:
        return CompanyDraft(**self.model_dump(include=set(CompanyDraft.model_fields)))
