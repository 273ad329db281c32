"""In-process repository seeded from the demo CSVs.

This is the fallback store used when no hosted database is configured. Rows
live in memory; when ``store_path`` is given the whole store is mirrored to a
JSON file after each write so a restart keeps admin edits.
"""

from __future__ import annotations

import copy
import json
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..utils.logging import get_logger
from . import seed
from .base import T_LEADS, T_LISTINGS, T_REVIEWS, T_SERVICES, T_SETTINGS, Repository, Row
from .errors import RecordNotFound, StorageError
from .mappers import listing_to_row, review_to_row, service_to_row

LOGGER = get_logger("db.local")

TABLES = (T_LISTINGS, T_LEADS, T_REVIEWS, T_SERVICES, T_SETTINGS)


class LocalRepository(Repository):
    mode = "local"
    remote = False

    def __init__(self, store_path: Optional[str] = None) -> None:
        super().__init__()
        self.store_path = store_path
        self._lock = threading.RLock()
        self._tables: Dict[str, List[Row]] = self._load()

    # ------------------------------------------------------------------
    def _load(self) -> Dict[str, List[Row]]:
        if self.store_path and os.path.exists(self.store_path):
            try:
                with open(self.store_path, "r", encoding="utf-8") as infile:
                    data = json.load(infile)
                if not isinstance(data, dict):
                    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                LOGGER.info("Loaded local store path=%s", self.store_path)
                return {table: list(data.get(table) or []) for table in TABLES}
            except (OSError, ValueError) as exc:
                LOGGER.warning("Failed to read local store path=%s (%s); reseeding", self.store_path, exc)
        return self._seed_tables()

    @staticmethod
    def _seed_tables() -> Dict[str, List[Row]]:
        created = _now()
        listings = []
        for listing in seed.seed_listings():
            listings.append({"id": listing.id, "created_at": created, **listing_to_row(listing)})
        reviews = [{"id": r.id, "created_at": created, **review_to_row(r)} for r in seed.seed_reviews()]
        services = [{"id": s.id, "created_at": created, **service_to_row(s)} for s in seed.seed_services()]
        return {
            T_LISTINGS: listings,
            T_LEADS: [],
            T_REVIEWS: reviews,
            T_SERVICES: services,
            T_SETTINGS: [],
        }

    def _persist(self, tables: Dict[str, List[Row]]) -> None:
        if not self.store_path:
            return
        tmp_path = f"{self.store_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as outfile:
                json.dump(tables, outfile, indent=2, default=str)
            os.replace(tmp_path, self.store_path)
        except OSError as exc:
            raise StorageError(f"Could not write local store: {exc}", table="local") from exc

    def _commit(self, table: str, rows: List[Row]) -> None:
        # Memory only moves once the file mirror has been written.
        tables = {**self._tables, table: rows}
        self._persist(tables)
        self._tables = tables

    def _rows(self, table: str) -> List[Row]:
        if table not in self._tables:
            raise StorageError(f"Unknown table: {table}", table=table)
        return self._tables[table]

    # ------------------------------------------------------------------
    # Primitives
    def _fetch(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Row]:
        with self._lock:
            rows = copy.deepcopy(self._rows(table))
        if order_by:
            if descending:
                # Later inserts win ties when newest-first is requested.
                rows.reverse()
            rows.sort(key=lambda row: _sort_value(row.get(order_by)), reverse=descending)
        return rows

    def _get(self, table: str, record_id: Any) -> Optional[Row]:
        with self._lock:
            for row in self._rows(table):
                if str(row.get("id")) == str(record_id):
                    return copy.deepcopy(row)
        return None

    def _insert(self, table: str, row: Row) -> Row:
        record = dict(row)
        record.setdefault("created_at", _now())
        record["id"] = str(uuid.uuid4())
        with self._lock:
            self._commit(table, self._rows(table) + [record])
        LOGGER.debug("insert table=%s id=%s", table, record["id"])
        return copy.deepcopy(record)

    def _update(self, table: str, record_id: Any, patch: Row) -> Row:
        with self._lock:
            rows = self._rows(table)
            for index, row in enumerate(rows):
                if str(row.get("id")) == str(record_id):
                    updated = {**row, **{k: v for k, v in patch.items() if k != "id"}}
                    self._commit(table, rows[:index] + [updated] + rows[index + 1 :])
                    return copy.deepcopy(updated)
        raise RecordNotFound(table, str(record_id))

    def _delete(self, table: str, record_id: Any) -> None:
        with self._lock:
            rows = self._rows(table)
            remaining = [row for row in rows if str(row.get("id")) != str(record_id)]
            if len(remaining) == len(rows):
                raise RecordNotFound(table, str(record_id))
            self._commit(table, remaining)

    def _upsert(self, table: str, row: Row) -> Row:
        with self._lock:
            rows = self._rows(table)
            for index, existing in enumerate(rows):
                if str(existing.get("id")) == str(row.get("id")):
                    merged = {**existing, **row}
                    self._commit(table, rows[:index] + [merged] + rows[index + 1 :])
                    return copy.deepcopy(merged)
            record = dict(row)
            self._commit(table, rows + [record])
            return copy.deepcopy(record)

    def _replace_all(self, table: str, rows: List[Row]) -> List[Row]:
        created = _now()
        records = [{**row, "id": str(uuid.uuid4()), "created_at": created} for row in rows]
        with self._lock:
            self._rows(table)
            self._commit(table, records)
        LOGGER.info("replace_all table=%s count=%d", table, len(records))
        return copy.deepcopy(records)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _sort_value(value: Any):
    # None sorts first; mixed types compare by their text form.
    return (value is not None, str(value).lower() if isinstance(value, str) else str(value))
