from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

from data_store import DataStore, DataStoreError

logger = logging.getLogger(__name__)

TASK_COLUMNS = [
    "id",
    "title",
    "priority",
    "details",
    "executor",
    "target",
    "expected_result",
    "due_date",
    "category",
    "risks",
    "status",
]

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        priority INTEGER NOT NULL DEFAULT 1,
        details TEXT,
        executor TEXT[] NOT NULL DEFAULT '{}',
        target TEXT[] NOT NULL DEFAULT '{}',
        expected_result TEXT,
        due_date TEXT,
        category TEXT,
        risks TEXT,
        status TEXT NOT NULL DEFAULT 'pending',
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS people (
        id BIGSERIAL PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
]


def rollback_quietly(db: Any) -> None:
    # Rollback on a dropped connection raises InterfaceError.
    try:
        db.rollback()
    except psycopg2.Error:
        logger.warning("Rollback failed on a broken connection", exc_info=True)


class PostgresDataStore(DataStore):
    """Data store backed by a Postgres database through a connection pool."""

    def __init__(self, dsn: str, minconn: int = 1, maxconn: int = 10) -> None:
        self.dsn = dsn
        self.minconn = minconn
        self.maxconn = maxconn
        self._pool: pool.ThreadedConnectionPool | None = None

    def get_pool(self) -> pool.ThreadedConnectionPool:
        if self._pool is None:
            try:
                self._pool = pool.ThreadedConnectionPool(
                    minconn=self.minconn, maxconn=self.maxconn, dsn=self.dsn
                )
            except psycopg2.Error as exc:
                raise DataStoreError(f"Could not connect to database: {exc}") from exc
        return self._pool

    @contextmanager
    def connection(self) -> Iterator[Any]:
        db_pool = self.get_pool()
        try:
            db = db_pool.getconn()
        except psycopg2.Error as exc:
            raise DataStoreError(f"Could not connect to database: {exc}") from exc
        try:
            yield db
            db.commit()
        except psycopg2.Error as exc:
            rollback_quietly(db)
            raise DataStoreError(str(exc).strip() or exc.__class__.__name__) from exc
        except Exception:
            rollback_quietly(db)
            raise
        finally:
            db_pool.putconn(db)

    def fetch_all_rows(self, query: str, params: tuple[Any, ...] | None = None) -> List[Dict[str, Any]]:
        with self.connection() as db:
            with db.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                return [dict(row) for row in cursor.fetchall()]

    def execute_sql(self, query: str, params: List[Any] | tuple[Any, ...] | None = None) -> int:
        with self.connection() as db:
            with db.cursor() as cursor:
                cursor.execute(query, params)
                return cursor.rowcount

    def init_schema(self) -> None:
        with self.connection() as db:
            with db.cursor() as cursor:
                for statement in SCHEMA_STATEMENTS:
                    cursor.execute(statement)
        logger.info("Database schema ready")

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self.fetch_all_rows("SELECT * FROM tasks ORDER BY created_at ASC")

    def list_people(self) -> List[Dict[str, Any]]:
        return self.fetch_all_rows("SELECT * FROM people ORDER BY name ASC")

    def update_task_status(self, task_id: str, status: str) -> None:
        self.execute_sql(
            "UPDATE tasks SET status = %s, updated_at = now() WHERE id = %s",
            (status, task_id),
        )

    def insert_task(self, row: Dict[str, Any]) -> None:
        data = {column: row.get(column) for column in TASK_COLUMNS}
        columns = ", ".join(data.keys())
        placeholders = ", ".join("%s" for _ in data)
        self.execute_sql(
            f"INSERT INTO tasks ({columns}) VALUES ({placeholders})",
            list(data.values()),
        )

    def ping(self) -> bool:
        try:
            rows = self.fetch_all_rows("SELECT 1 AS ok")
        except DataStoreError:
            logger.exception("Database health check failed")
            return False
        return bool(rows and rows[0].get("ok") == 1)
