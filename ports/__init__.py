from .storage import DocumentStorePort, StoragePort

__all__ = [
    "DocumentStorePort",
    "StoragePort",
]
