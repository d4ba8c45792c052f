"""
Persistence gateway: every account and personnel operation goes through here.

Each public method runs its statements on the injected `Database` handle and
either returns plain dicts or raises a `GatewayError` subclass. SQLite errors are
logged once and re-raised as `StorageError`, for reads and writes alike.
"""
from __future__ import annotations

import logging
import math
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator

from ..db import Database, InitResult
from ..errors import RecordNotFound, StorageError
from ..repository import account_repo, personnel_repo
from .utils import today_iso

logger = logging.getLogger(__name__)


class PersistenceGateway:
    def __init__(self, db: Database):
        self.db = db

    @contextmanager
    def _conn(self, operation: str) -> Iterator[sqlite3.Connection]:
        with self.db.connection(operation) as conn:
            try:
                yield conn
            except sqlite3.Error as e:
                logger.exception("%s failed", operation)
                raise StorageError(str(e), operation) from e

    def initialize(self) -> InitResult:
        if self.db.is_open:
            return InitResult(ok=True, path=self.db.path)
        return self.db.open()

    def shutdown(self):
        self.db.close()

    # ---------------- accounts ----------------

    def list_accounts(self) -> list[dict[str, Any]]:
        with self._conn("list_accounts") as conn:
            return [dict(r) for r in account_repo.list_all(conn)]

    def create_account(self, username: str, password: str, role: str | None) -> dict[str, Any]:
        with self._conn("create_account") as conn:
            new_id = account_repo.insert(conn, username, password, role)
        return {"id": new_id, "username": username, "role": role}

    def update_account(self, account_id: int, username: str, password: str, role: str | None) -> dict[str, Any]:
        with self._conn("update_account") as conn:
            changed = account_repo.update(conn, account_id, username, password, role)
        if not changed:
            raise RecordNotFound(f"account {account_id} not found", "update_account")
        return {"id": account_id, "username": username, "role": role}

    def delete_account(self, account_id: int) -> dict[str, bool]:
        with self._conn("delete_account") as conn:
            changed = account_repo.delete(conn, account_id)
        if not changed:
            raise RecordNotFound(f"account {account_id} not found", "delete_account")
        return {"success": True}

    # ---------------- personnel ----------------

    def create_personnel(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert a record; `created_at` is always today's local date, whatever `fields` holds."""
        created_at = today_iso()
        values = {k: fields.get(k) for k in personnel_repo.MUTABLE_FIELDS}
        with self._conn("create_personnel") as conn:
            new_id = personnel_repo.insert(conn, values, created_at)
        return {"id": new_id, **values, "created_at": created_at}

    def update_personnel(self, record_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace all mutable fields. The returned record is built from the input, not re-read."""
        values = {k: fields.get(k) for k in personnel_repo.MUTABLE_FIELDS}
        with self._conn("update_personnel") as conn:
            changed = personnel_repo.update(conn, record_id, values)
        if not changed:
            raise RecordNotFound(f"personnel record {record_id} not found", "update_personnel")
        return {"id": record_id, **values}

    def delete_personnel(self, record_id: int) -> dict[str, bool]:
        with self._conn("delete_personnel") as conn:
            changed = personnel_repo.delete(conn, record_id)
        if not changed:
            raise RecordNotFound(f"personnel record {record_id} not found", "delete_personnel")
        return {"success": True}

    def get_personnel(self, record_id: int) -> dict[str, Any] | None:
        with self._conn("get_personnel") as conn:
            row = personnel_repo.get_one(conn, record_id)
        return dict(row) if row else None

    def list_personnel(
        self,
        search: str | None = None,
        page_size: int | None = None,
        page_offset: int | None = None,
    ) -> dict[str, Any]:
        """
        Search by name or badge number, newest first.

        Counting and fetching are two statements; rows changing in between may
        make `total_records` disagree with the page.
        """
        with self._conn("list_personnel") as conn:
            total = personnel_repo.count_matching(conn, search)
        total_pages = math.ceil(total / page_size) if page_size else 1
        with self._conn("list_personnel") as conn:
            rows = personnel_repo.list_page(conn, search, page_size, page_offset or 0)
        return {
            "rows": [dict(r) for r in rows],
            "pagination": {"total_records": total, "total_pages": total_pages},
        }
