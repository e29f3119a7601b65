from __future__ import annotations

import json

from models.company_record import CompanyDraft, CompanyRecord
from models.crm_document import CrmDocument
from models.results import Submitted
from services.forms import submit_company
from storage.document_store import DocumentStore
from storage.media import FileStorage, MemoryStorage


def test_load_missing_entry_returns_empty_document():
    doc = DocumentStore(MemoryStorage()).load()
    assert doc.companies == [] and doc.contacts == []


def test_load_malformed_json_returns_empty_document():
    storage = MemoryStorage({"crm-data": "{not json"})
    doc = DocumentStore(storage).load()
    assert doc == CrmDocument.empty()


def test_load_non_object_and_bad_collection_types_return_empty():
    assert DocumentStore(MemoryStorage({"crm-data": "[1, 2]"})).load() == CrmDocument.empty()
    bad = json.dumps({"companies": "not a list"})
    assert DocumentStore(MemoryStorage({"crm-data": bad})).load() == CrmDocument.empty()


def test_load_undecodable_file_returns_empty_document(tmp_path):
    (tmp_path / "crm-data.json").write_bytes(b'{"companies": [\xff\xfe]}')
    doc = DocumentStore(FileStorage(tmp_path)).load()
    assert doc == CrmDocument.empty()


def test_null_collection_loads_as_empty_and_keeps_the_other():
    stored = {"companies": None, "contacts": [{"id": "9", "ownerId": "1", "name": "Bob"}]}
    storage = MemoryStorage({"crm-data": json.dumps(stored)})
    store = DocumentStore(storage)
    assert [c.name for c in store.load().contacts] == ["Bob"]

    result = submit_company(store, CompanyDraft(name="Acme"))
    assert isinstance(result, Submitted)
    doc = store.load()
    assert [c.name for c in doc.contacts] == ["Bob"]
    assert [c.name for c in doc.companies] == ["Acme"]


def test_invalid_records_are_skipped_not_the_whole_document():
    stored = {
        "companies": [{"name": "No id"}, {"id": "1", "name": "Acme", "employees": 3}],
        "contacts": [{"ownerId": "1", "name": "No id"}, {"id": "9", "ownerId": "1", "name": "Bob"}],
    }
    doc = DocumentStore(MemoryStorage({"crm-data": json.dumps(stored)})).load()
    assert [c.id for c in doc.companies] == ["1"]
    assert [c.id for c in doc.contacts] == ["9"]


def test_missing_collections_default_to_empty():
    storage = MemoryStorage({"crm-data": json.dumps({"contacts": [{"id": "c1", "ownerId": "x", "name": "Bob"}]})})
    doc = DocumentStore(storage).load()
    assert doc.companies == []
    assert [c.name for c in doc.contacts] == ["Bob"]


def test_legacy_clients_layout_is_read():
    legacy = {
        "clients": [{"id": "1", "name": "Acme", "employees": 3, "createdAt": "2022-03-15T08:00:00Z"}],
        "contacts": [{"id": "9", "clientId": "1", "name": "Bob"}],
    }
    doc = DocumentStore(MemoryStorage({"crm-data": json.dumps(legacy)})).load()
    assert doc.companies[0].name == "Acme"
    assert doc.companies[0].created_at == "2022-03-15T08:00:00Z"
    assert doc.contacts[0].owner_id == "1"


def test_save_writes_camel_case_layout():
    storage = MemoryStorage()
    store = DocumentStore(storage)
    doc = CrmDocument.empty()
    doc.companies.append(CompanyRecord(id="1", name="Acme", employees=10, created_at="2024-01-01T00:00:00+00:00"))
    store.save(doc)
    payload = json.loads(storage.get_item("crm-data"))
    assert set(payload) == {"companies", "contacts"}
    assert payload["companies"][0]["createdAt"] == "2024-01-01T00:00:00+00:00"
    assert payload["companies"][0]["employees"] == 10
    assert "created_at" not in payload["companies"][0]


def test_file_storage_round_trip_and_atomic_replace(tmp_path):
    store = DocumentStore(FileStorage(tmp_path / "data"), key="crm-data")
    assert store.load() == CrmDocument.empty()
    doc = CrmDocument.empty()
    doc.companies.append(CompanyRecord(id="1", name="Acme"))
    store.save(doc)
    store.save(doc)
    files = sorted(p.name for p in (tmp_path / "data").iterdir())
    # no temp files left behind
    assert files == ["crm-data.json"]
    assert store.load().companies[0].name == "Acme"


def test_file_storage_rejects_path_like_keys(tmp_path):
    import pytest
    with pytest.raises(ValueError):
        FileStorage(tmp_path).get_item("../escape")
