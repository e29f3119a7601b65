from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


STORAGE_BACKENDS = ("file", "memory")


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Storage
    storage_backend: str
    data_dir: str
    storage_key: str

    log_level: str

    # Core/runtime
    run_env: str

    # Presentation
    recent_limit: int = 5


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    backend = os.getenv("CRM_STORAGE_BACKEND", "file").lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"CRM_STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)} (got {backend!r})"
        )
    return Settings(
        storage_backend=backend,
        data_dir=os.getenv("CRM_DATA_DIR", "data"),
        storage_key=os.getenv("CRM_STORAGE_KEY", "crm-data"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        recent_limit=int(os.getenv("CRM_RECENT_LIMIT", "5")),
    )
