from __future__ import annotations

from typing import Optional, Protocol

from models.crm_document import CrmDocument


class StoragePort(Protocol):
    """Named-entry string storage (the local key-value medium)."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class DocumentStorePort(Protocol):
    def load(self) -> CrmDocument:
        ...

    def save(self, document: CrmDocument) -> None:
        ...
