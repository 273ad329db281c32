"""Repository backed by Supabase tables through the PostgREST client."""

from __future__ import annotations

from typing import Any, List, Optional

from ..utils.logging import get_logger
from .base import Repository, Row
from .errors import RecordNotFound, handle_db_error

LOGGER = get_logger("db.supabase")

# PostgREST refuses an unfiltered DELETE; no row carries the nil uuid.
NIL_UUID = "00000000-0000-0000-0000-000000000000"


class SupabaseRepository(Repository):
    mode = "supabase"
    remote = True

    def __init__(self, client) -> None:
        super().__init__()
        self.client = client

    def _execute(self, table: str, query) -> List[Row]:
        try:
            response = query.execute()
        except Exception as exc:
            LOGGER.error("supabase_error table=%s error=%s", table, exc)
            raise handle_db_error(exc, table) from exc
        return list(response.data or [])

    # ------------------------------------------------------------------
    def _fetch(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Row]:
        query = self.client.table(table).select("*")
        if order_by:
            query = query.order(order_by, desc=descending)
        return self._execute(table, query)

    def _get(self, table: str, record_id: Any) -> Optional[Row]:
        rows = self._execute(table, self.client.table(table).select("*").eq("id", record_id).limit(1))
        return rows[0] if rows else None

    def _insert(self, table: str, row: Row) -> Row:
        rows = self._execute(table, self.client.table(table).insert(row))
        if not rows:
            raise handle_db_error("insert returned no rows", table)
        return rows[0]

    def _update(self, table: str, record_id: Any, patch: Row) -> Row:
        rows = self._execute(table, self.client.table(table).update(patch).eq("id", record_id))
        if not rows:
            raise RecordNotFound(table, str(record_id))
        return rows[0]

    def _delete(self, table: str, record_id: Any) -> None:
        rows = self._execute(table, self.client.table(table).delete().eq("id", record_id))
        if not rows:
            raise RecordNotFound(table, str(record_id))

    def _upsert(self, table: str, row: Row) -> Row:
        rows = self._execute(table, self.client.table(table).upsert(row))
        if not rows:
            raise handle_db_error("upsert returned no rows", table)
        return rows[0]

    def _replace_all(self, table: str, rows: List[Row]) -> List[Row]:
        self._execute(table, self.client.table(table).delete().neq("id", NIL_UUID))
        if not rows:
            return []
        inserted = self._execute(table, self.client.table(table).insert(rows))
        LOGGER.info("replace_all table=%s count=%d", table, len(inserted))
        return inserted
