from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from task_models import split_names

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Project"
DEFAULT_PROJECT_DATES = ("August 4", "August 5", "August 6", "August 7", "August 8")


def load_dotenv(path: str = ".env") -> None:
    if not os.path.exists(path):
        return

    try:
        with open(path, "r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip("'").strip('"')
                if key:
                    os.environ.setdefault(key, value)
    except OSError:
        logger.exception("Failed to read %s", path)


def required_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise RuntimeError(f"{name} is not configured")
    return value


@dataclass(frozen=True)
class Settings:
    database_url: str | None
    supabase_url: str | None
    supabase_key: str | None
    timeout_seconds: float
    project_name: str
    project_dates: tuple[str, ...]
    run_db_init: bool = False
    port: int = 5001
    debug: bool = False

    @property
    def first_date(self) -> str:
        return self.project_dates[0]


def load_settings() -> Settings:
    """Build settings from the environment.

    DATABASE_URL selects the Postgres store. Without it, SUPABASE_URL and
    SUPABASE_KEY select the REST store. One of the two is required.
    """
    database_url = os.environ.get("DATABASE_URL") or None
    supabase_url = os.environ.get("SUPABASE_URL") or None
    supabase_key = None
    if database_url is None:
        if supabase_url is None:
            raise RuntimeError("DATABASE_URL or SUPABASE_URL environment variable is required")
        supabase_key = required_env("SUPABASE_KEY")

    dates = tuple(split_names(os.environ.get("PROJECT_DATES") or "")) or DEFAULT_PROJECT_DATES

    return Settings(
        database_url=database_url,
        supabase_url=supabase_url.rstrip("/") if supabase_url else None,
        supabase_key=supabase_key,
        timeout_seconds=float(os.environ.get("DATA_STORE_TIMEOUT_SECONDS", "5")),
        project_name=os.environ.get("PROJECT_NAME", "").strip() or DEFAULT_PROJECT_NAME,
        project_dates=dates,
        run_db_init=os.environ.get("RUN_DB_INIT", "0") == "1",
        port=int(os.environ.get("PORT", "5001")),
        debug=os.environ.get("FLASK_DEBUG", "0") == "1",
    )
