"""
Purpose: Storage configuration (single source of truth).
What it does:

Reads from the environment (.env supported):

SUPABASE_URL / SUPABASE_ANON_KEY -> cloud mode when both are set
LOCAL_STORE_PATH                 -> directory for the JSON files (default: tracking_data)
SUPABASE_TIMEOUT                 -> seconds per REST call (default: 10)

Rule: No logic here, just parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class StorageSettings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    local_store_path: str = "tracking_data"
    supabase_timeout: int = 10

    @property
    def cloud_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def validate(self) -> None:
        if not self.local_store_path:
            raise ValueError("local_store_path must not be empty")

        if self.supabase_timeout <= 0:
            raise ValueError("supabase_timeout must be > 0")

        if bool(self.supabase_url) != bool(self.supabase_key):
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set together")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> StorageSettings:
        environ = os.environ if environ is None else environ
        settings = cls(
            supabase_url=environ.get("SUPABASE_URL") or None,
            supabase_key=environ.get("SUPABASE_ANON_KEY") or None,
            local_store_path=environ.get("LOCAL_STORE_PATH") or "tracking_data",
            supabase_timeout=int(environ.get("SUPABASE_TIMEOUT") or 10),
        )
        settings.validate()
        return settings
