from __future__ import annotations

from models.company_record import CompanyDraft
from models.contact_record import ContactDraft, ContactRecord
from models.results import DeleteOutcome, NotFound
from services.crm_service import CrmService
from services.forms import submit_company, submit_contact


def test_get_unknown_ids_are_not_found(demo_store):
    service = CrmService(demo_store)
    assert service.get_company("missing") == NotFound("company", "missing")
    assert service.get_contact("missing") == NotFound("contact", "missing")
    assert isinstance(service.get_company_detail("missing"), NotFound)


def test_company_detail_and_contacts_for_company(demo_store):
    service = CrmService(demo_store)
    detail = service.get_company_detail("1")
    assert detail.company.name == "Acme Industries"
    assert [c.name for c in detail.contacts] == ["John Smith", "Sarah Johnson"]
    assert [c.id for c in service.list_contacts_for_company("2")] == ["3"]
    assert service.list_contacts_for_company("nope") == []


def test_list_contacts_joins_company_name(demo_store):
    service = CrmService(demo_store)
    views = service.list_contacts()
    assert [(v.contact.name, v.company_name) for v in views] == [
        ("John Smith", "Acme Industries"),
        ("Sarah Johnson", "Acme Industries"),
        ("Michael Chen", "TechSolutions Inc"),
    ]
    assert [v.contact.id for v in service.list_contacts("techsol")] == ["3"]


def test_contact_detail_tolerates_dangling_owner(demo_store):
    doc = demo_store.inner.load()
    doc.contacts.append(ContactRecord(id="orphan", owner_id="ghost", name="Lost"))
    demo_store.inner.save(doc)
    service = CrmService(demo_store)
    detail = service.get_contact("orphan")
    assert detail.contact.name == "Lost"
    assert detail.company is None
    assert service.list_contacts("lost")[0].company_name == "Unknown"


def test_delete_contact_and_idempotence(demo_store):
    service = CrmService(demo_store)
    assert service.delete_contact("2") is True
    assert [c.id for c in demo_store.inner.load().contacts] == ["1", "3"]
    saves = demo_store.saves
    before = demo_store.inner.storage.get_item("crm-data")
    assert service.delete_contact("2") is False
    assert demo_store.saves == saves
    assert demo_store.inner.storage.get_item("crm-data") == before


def test_delete_company_cascades_in_one_save(demo_store):
    service = CrmService(demo_store)
    outcome = service.delete_company("1")
    assert outcome == DeleteOutcome(removed_company=True, removed_contacts=2)
    assert demo_store.saves == 1
    doc = demo_store.inner.load()
    assert [c.id for c in doc.companies] == ["2"]
    assert all(c.owner_id != "1" for c in doc.contacts)
    assert [c.id for c in doc.contacts] == ["3"]


def test_delete_unknown_company_is_noop(demo_store):
    before = demo_store.inner.storage.get_item("crm-data")
    outcome = CrmService(demo_store).delete_company("missing")
    assert outcome == DeleteOutcome(removed_company=False, removed_contacts=0)
    assert demo_store.saves == 0
    assert demo_store.inner.storage.get_item("crm-data") == before


def test_recent_slices(demo_store):
    service = CrmService(demo_store)
    assert [c.id for c in service.recent_companies(1)] == ["1"]
    assert len(service.recent_contacts()) == 3


def test_end_to_end_create_then_cascade_delete(store):
    acme = submit_company(store, CompanyDraft(name="Acme", employees=10)).record
    bob = submit_contact(store, ContactDraft(name="Bob", owner_id=acme.id)).record
    service = CrmService(store)
    assert [v.contact.id for v in service.list_contacts()] == [bob.id]
    service.delete_company(acme.id)
    doc = store.inner.load()
    assert doc.companies == []
    assert all(c.id != bob.id for c in doc.contacts)


def test_queries_do_not_depend_on_settings(demo_store, monkeypatch):
    monkeypatch.setenv("CRM_STORAGE_BACKEND", "not-a-backend")
    service = CrmService(demo_store, recent_limit=2)
    assert len(service.list_contacts()) == 3
    assert [c.id for c in service.recent_companies()] == ["1", "2"]
    assert len(service.recent_contacts()) == 2


def test_contacts_for_company_honour_query(demo_store):
    service = CrmService(demo_store)
    assert [c.id for c in service.list_contacts_for_company("1", "sarah")] == ["2"]
    assert [c.id for c in service.list_contacts_for_company("1", "")] == ["1", "2"]
    assert service.list_contacts_for_company("2", "sarah") == []
