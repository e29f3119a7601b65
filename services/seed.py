from __future__ import annotations

from typing import List

from models.company_record import CompanyRecord
from models.contact_record import ContactRecord
from models.crm_document import CrmDocument
from ports.storage import DocumentStorePort


DEMO_COMPANIES: List[dict] = [
    {
        "id": "1",
        "name": "Acme Industries",
        "industry": "Manufacturing",
        "location": "Chicago, IL",
        "website": "acme.com",
        "revenue": "$5M-$10M",
        "employees": 120,
        "notes": "Key account with long history",
        "createdAt": "2022-03-15T08:00:00Z",
    },
    {
        "id": "2",
        "name": "TechSolutions Inc",
        "industry": "Technology",
        "location": "San Francisco, CA",
        "website": "techsolutions.com",
        "revenue": "$1M-$5M",
        "employees": 45,
        "notes": "Rapidly growing startup",
        "createdAt": "2023-01-10T10:15:00Z",
    },
]

DEMO_CONTACTS: List[dict] = [
    {
        "id": "1",
        "ownerId": "1",
        "name": "John Smith",
        "position": "Operations Director",
        "email": "john@acme.com",
        "phone": "312-555-1234",
        "notes": "Primary decision maker",
        "createdAt": "2022-05-20T14:30:00Z",
    },
    {
        "id": "2",
        "ownerId": "1",
        "name": "Sarah Johnson",
        "position": "Procurement Manager",
        "email": "sarah@acme.com",
        "phone": "312-555-5678",
        "notes": "Handles all purchasing",
        "createdAt": "2022-06-12T11:45:00Z",
    },
    {
        "id": "3",
        "ownerId": "2",
        "name": "Michael Chen",
        "position": "CEO",
        "email": "michael@techsolutions.com",
        "phone": "415-555-9876",
        "notes": "Prefers email communication",
        "createdAt": "2023-01-15T09:20:00Z",
    },
]


def demo_document() -> CrmDocument:
    return CrmDocument(
        companies=[CompanyRecord.model_validate(c) for c in DEMO_COMPANIES],
        contacts=[ContactRecord.model_validate(c) for c in DEMO_CONTACTS],
    )


def seed_demo(store: DocumentStorePort, force: bool = False) -> bool:
    """Write the demo data set. Refuses (returns False) if companies exist, unless forced."""
    if not force and store.load().companies:
        return False
    store.save(demo_document())
    return True
