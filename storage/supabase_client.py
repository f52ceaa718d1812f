#Purpose: The Supabase "adapter/client".
#Sole responsibility: talk to the Supabase REST API (PostgREST) via HTTP.
#Encapsulates Supabase-specific details:
#auth headers (apikey + bearer)
#URL construction (/rest/v1/<table>) and eq. filters
#upsert semantics (Prefer: resolution=merge-duplicates)
#error handling
#Every table used by the app has the same shape: a key column + a JSON "data" column.
#It should not contain tracking rules.

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests


class SupabaseError(Exception):
    """Raised when Supabase cannot be reached or rejects a request."""
    pass


class SupabaseTable:
    """
    Supabase Adapter for one `<key_column>, data` table.
    """

    def __init__(self, base_url: str, api_key: str, table: str, key_column: str,
                 timeout: int = 10, session: Any = None):
        if not base_url or not api_key:
            raise ValueError("Supabase URL and key are required for cloud storage.")

        self.url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.table = table
        self.key_column = key_column
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    #----------------
    # Internal helpers
    #----------------
    def _request(self, method: str, params: Dict[str, str], json_body: Any = None,
                 extra_headers: Optional[Dict[str, str]] = None) -> Any:
        headers = dict(self.headers)
        if extra_headers:
            headers.update(extra_headers)

        try:
            response = self.session.request(
                method,
                self.url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SupabaseError(f"Supabase {method} {self.table} failed: {exc}") from exc

        if response.status_code >= 400:
            raise SupabaseError(f"Supabase {method} {self.table} returned {response.status_code}: {response.text}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise SupabaseError(f"Supabase {method} {self.table} returned a non-JSON body: {exc}") from exc

    #----------------
    # Public methods
    #----------------
    def select_all(self) -> List[Dict[str, Any]]:
        return self._request("GET", {"select": "*"}) or []

    def select_key(self, key: str) -> Optional[Dict[str, Any]]:
        rows = self._request("GET", {"select": "*", self.key_column: f"eq.{key}"}) or []
        return rows[0] if rows else None

    def upsert(self, key: str, data: Dict[str, Any]) -> None:
        self._request(
            "POST",
            {"on_conflict": self.key_column},
            json_body={self.key_column: key, "data": data},
            extra_headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )

    def delete_key(self, key: str) -> None:
        self._request("DELETE", {self.key_column: f"eq.{key}"})
