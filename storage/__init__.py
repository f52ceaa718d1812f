"""
Storage package.

Public API:
- StorageSettings (env-driven configuration)
- resolve_backend -> CloudBackend | LocalBackend
- TrackingRepository (records in, records out)
"""

from .config import StorageSettings
from .backends import Backend, CloudBackend, KeyValueStore, LocalBackend, resolve_backend
from .local_store import JsonFileStore
from .supabase_client import SupabaseError, SupabaseTable
from .repository import DuplicateDriverError, TrackingRepository

__all__ = [
    "StorageSettings",
    "Backend",
    "CloudBackend",
    "LocalBackend",
    "KeyValueStore",
    "resolve_backend",
    "JsonFileStore",
    "SupabaseTable",
    "SupabaseError",
    "TrackingRepository",
    "DuplicateDriverError",
]
