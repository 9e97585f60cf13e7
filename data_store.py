"""Data store seam for the `tasks` and `people` tables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from settings import Settings


class DataStoreError(Exception):
    """A remote data store call failed."""


class DataStore(ABC):
    """Remote tabular store holding the `tasks` and `people` tables."""

    @abstractmethod
    def list_tasks(self) -> List[Dict[str, Any]]:
        """All task rows, oldest first."""

    @abstractmethod
    def list_people(self) -> List[Dict[str, Any]]:
        """All person rows, ordered by name."""

    @abstractmethod
    def update_task_status(self, task_id: str, status: str) -> None:
        """Set status and updated_at on one task row."""

    @abstractmethod
    def insert_task(self, row: Dict[str, Any]) -> None:
        """Insert one task row."""

    @abstractmethod
    def ping(self) -> bool:
        """Cheap connectivity check."""


def create_data_store(settings: Settings) -> DataStore:
    if settings.database_url:
        from postgres_store import PostgresDataStore

        return PostgresDataStore(settings.database_url)

    from rest_store import RestDataStore

    return RestDataStore(
        base_url=settings.supabase_url or "",
        api_key=settings.supabase_key or "",
        timeout=settings.timeout_seconds,
    )
