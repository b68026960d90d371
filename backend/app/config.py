from __future__ import annotations

import os
from typing import Optional


def database_url() -> Optional[str]:
    return os.getenv("DATABASE_URL") or os.getenv("SQLALCHEMY_DATABASE_URL")


def table_prefix() -> str:
    return (os.getenv("DB_TABLE_PREFIX") or "").strip()


def prefixed(table_name: str) -> str:
    return f"{table_prefix()}{table_name}"
