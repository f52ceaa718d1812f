"""
Purpose: Pick where records live, once, at startup.
What it does:

Backend = CloudBackend | LocalBackend

- CloudBackend: Supabase tables, each mirrored to a local JSON file.
  Reads fall back to the mirror when Supabase is unreachable.
  Writes go to Supabase first, then to the mirror.
- LocalBackend: JSON files only.

Both hand out KeyValueStore objects per table, so the repository never
checks which mode it is in before reading or writing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from .config import StorageSettings
from .local_store import JsonFileStore
from .supabase_client import SupabaseError, SupabaseTable

logger = logging.getLogger(__name__)

# table name -> key column
TABLES: Dict[str, str] = {
    "shipments": "code",
    "drivers": "id",
    "users": "username",
}


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def put(self, key: str, value: Dict[str, Any]) -> None: ...

    def delete(self, key: str) -> None: ...

    def all(self) -> Dict[str, Dict[str, Any]]: ...


class MirroredCloudStore:
    """
    A Supabase table with a local JSON mirror for offline reads.
    """

    def __init__(self, cloud: SupabaseTable, mirror: JsonFileStore):
        self.cloud = cloud
        self.mirror = mirror

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            row = self.cloud.select_key(key)
        except SupabaseError as exc:
            logger.warning("Cloud read of %s/%s failed, using local copy: %s", self.cloud.table, key, exc)
            return self.mirror.get(key)
        if row is None:
            # a record saved while offline may only exist locally
            return self.mirror.get(key)
        return row.get("data")

    def put(self, key: str, value: Dict[str, Any]) -> None:
        self.cloud.upsert(key, value)
        self.mirror.put(key, value)

    def delete(self, key: str) -> None:
        self.cloud.delete_key(key)
        self.mirror.delete(key)

    def all(self) -> Dict[str, Dict[str, Any]]:
        try:
            rows = self.cloud.select_all()
        except SupabaseError as exc:
            logger.warning("Cloud listing of %s failed, using local copy: %s", self.cloud.table, exc)
            return self.mirror.all()
        return {str(row[self.cloud.key_column]): row.get("data") or {} for row in rows}


@dataclass(frozen=True)
class LocalBackend:
    stores: Dict[str, JsonFileStore]
    mode: str = "local"

    def table(self, name: str) -> KeyValueStore:
        return self.stores[name]


@dataclass(frozen=True)
class CloudBackend:
    stores: Dict[str, MirroredCloudStore]
    mode: str = "cloud"

    def table(self, name: str) -> KeyValueStore:
        return self.stores[name]


Backend = Union[CloudBackend, LocalBackend]


def local_backend(directory: str) -> LocalBackend:
    return LocalBackend(stores={name: JsonFileStore(directory, name) for name in TABLES})


def cloud_backend(settings: StorageSettings, session: Any = None) -> CloudBackend:
    stores = {}
    for name, key_column in TABLES.items():
        table = SupabaseTable(
            settings.supabase_url,
            settings.supabase_key,
            name,
            key_column,
            timeout=settings.supabase_timeout,
            session=session,
        )
        stores[name] = MirroredCloudStore(table, JsonFileStore(settings.local_store_path, name))
    return CloudBackend(stores=stores)


def resolve_backend(settings: Optional[StorageSettings] = None, session: Any = None) -> Backend:
    """
    Cloud when Supabase credentials are configured, local otherwise.
    Call once at startup and pass the result around.
    """
    settings = settings or StorageSettings.from_env()
    settings.validate()

    if settings.cloud_configured:
        logger.info("Storage: connected to Supabase at %s", settings.supabase_url)
        return cloud_backend(settings, session=session)

    logger.info("Storage: offline mode, JSON files in %s", settings.local_store_path)
    return local_backend(settings.local_store_path)
