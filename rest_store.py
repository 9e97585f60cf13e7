from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import requests

from data_store import DataStore, DataStoreError

logger = logging.getLogger(__name__)


class RestDataStore(DataStore):
    """Data store reached over a PostgREST-compatible HTTP API (e.g. Supabase)."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 5.0, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    def json_request(
        self,
        method: str,
        table: str,
        params: Dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        url = self.table_url(table)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self.headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise DataStoreError(f"Data store is unavailable: {exc}") from exc

        if response.status_code >= 400:
            try:
                body: Any = response.json()
            except ValueError:
                body = {"raw": response.text}
            message = body.get("message") if isinstance(body, dict) else None
            raise DataStoreError(
                f"Data store returned {response.status_code} for {method} {table}: {message or body}"
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DataStoreError(f"Data store returned an unreadable body for {method} {table}") from exc

    def select(self, table: str, order: str) -> List[Dict[str, Any]]:
        rows = self.json_request("GET", table, params={"select": "*", "order": order})
        if not isinstance(rows, list):
            raise DataStoreError(f"Expected a list of rows from {table}")
        return rows

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self.select("tasks", "created_at.asc")

    def list_people(self) -> List[Dict[str, Any]]:
        return self.select("people", "name.asc")

    def update_task_status(self, task_id: str, status: str) -> None:
        self.json_request(
            "PATCH",
            "tasks",
            params={"id": f"eq.{task_id}"},
            payload={"status": status, "updated_at": datetime.now(timezone.utc).isoformat()},
        )

    def insert_task(self, row: Dict[str, Any]) -> None:
        self.json_request("POST", "tasks", payload=[row])

    def ping(self) -> bool:
        try:
            self.json_request("GET", "people", params={"select": "id", "limit": "1"})
        except DataStoreError:
            logger.exception("Data store health check failed")
            return False
        return True
