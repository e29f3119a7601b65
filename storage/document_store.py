from __future__ import annotations

import json
import logging
from typing import Any, List, Type

from pydantic import BaseModel, ValidationError

from config.settings import Settings, get_settings
from models.company_record import CompanyRecord
from models.contact_record import ContactRecord
from models.crm_document import CrmDocument
from ports.storage import StoragePort
from storage.media import FileStorage, MemoryStorage


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "crm-data"


class DocumentStore:
    """Sole gateway to the persisted CRM document.

    Reads are forgiving: an absent or undecodable entry, unparsable JSON, or a
    top-level value that is not an object all load as the empty document.
    Individual records that fail validation are dropped with a warning; the
    rest of the document survives. Writes always replace the whole entry;
    callers read, modify and save.
    """

    def __init__(self, storage: StoragePort, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> CrmDocument:
        try:
            raw = self.storage.get_item(self.key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "Failed to read stored data; using empty document",
                extra={"op": "load", "status": "corrupt", "error": str(exc)},
            )
            return CrmDocument.empty()
        if raw is None:
            return CrmDocument.empty()
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning(
                "Failed to parse stored data; using empty document",
                extra={"op": "load", "status": "corrupt", "error": str(exc)},
            )
            return CrmDocument.empty()
        if not isinstance(data, dict):
            logger.warning(
                "Stored data is not an object; using empty document",
                extra={"op": "load", "status": "corrupt"},
            )
            return CrmDocument.empty()
        for collection, model, entity in (
            ("companies", CompanyRecord, "company"),
            ("clients", CompanyRecord, "company"),
            ("contacts", ContactRecord, "contact"),
        ):
            if isinstance(data.get(collection), list):
                data[collection] = _valid_records(data[collection], model, entity)
        try:
            return CrmDocument.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "Stored data does not match the record schema; using empty document",
                extra={"op": "load", "status": "corrupt", "error": str(exc)},
            )
            return CrmDocument.empty()

    def save(self, document: CrmDocument) -> None:
        payload = json.dumps(document.to_payload(), indent=2, ensure_ascii=False)
        self.storage.set_item(self.key, payload)
        logger.debug(
            "Document saved",
            extra={
                "op": "save",
                "status": f"companies={len(document.companies)} contacts={len(document.contacts)}",
            },
        )


def build_store(settings: Settings | None = None) -> DocumentStore:
    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        storage: StoragePort = MemoryStorage()
    else:
        storage = FileStorage(settings.data_dir)
    return DocumentStore(storage, key=settings.storage_key)


def _valid_records(records: List[Any], model: Type[BaseModel], entity: str) -> List[BaseModel]:
    """Validate stored records one by one, dropping (and logging) the ones that fail."""
    kept: List[BaseModel] = []
    for raw in records:
        try:
            kept.append(model.model_validate(raw))
        except ValidationError as exc:
            record_id = raw.get("id", "-") if isinstance(raw, dict) else "-"
            logger.warning(
                "Skipping invalid stored record",
                extra={"op": "load", "entity": entity, "record_id": record_id, "status": "skipped", "error": str(exc)},
            )
    return kept
