from .company_record import CompanyDraft, CompanyRecord
from .contact_record import ContactDraft, ContactRecord
from .crm_document import CrmDocument
from .results import DeleteOutcome, NotFound, SubmitResult, Submitted, ValidationFailed

__all__ = [
    "CompanyDraft",
    "CompanyRecord",
    "ContactDraft",
    "ContactRecord",
    "CrmDocument",
    "DeleteOutcome",
    "NotFound",
    "SubmitResult",
    "Submitted",
    "ValidationFailed",
]
