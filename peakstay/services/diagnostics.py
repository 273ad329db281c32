"""Health checks for the configured storage backend."""

from __future__ import annotations

import time
from typing import List

from ..db.base import T_LISTINGS, T_SETTINGS, Repository
from ..db.errors import StorageError
from ..models.content import DiagnosticResult
from ..utils.logging import get_logger

LOGGER = get_logger("services.diagnostics")

HEALTHY = "healthy"
DEGRADED = "degraded"
OFFLINE = "offline"


def run_diagnostics(repository: Repository) -> List[DiagnosticResult]:
    results = [_client_check(repository), _table_check(repository, "db_listings", "Database: Listings", T_LISTINGS)]
    results.append(_table_check(repository, "db_settings", "Database: Site Settings", T_SETTINGS))
    for result in results:
        LOGGER.debug("diagnostic id=%s status=%s", result.id, result.status)
    return results


def _client_check(repository: Repository) -> DiagnosticResult:
    if repository.remote:
        return DiagnosticResult(
            id="storage_client",
            name="Storage Initialization",
            status=HEALTHY,
            message="Supabase client initialized with valid credentials.",
        )
    return DiagnosticResult(
        id="storage_client",
        name="Storage Initialization",
        status=OFFLINE,
        message="Using the local sandbox store (Supabase URL/key missing).",
    )


def _table_check(repository: Repository, check_id: str, name: str, table: str) -> DiagnosticResult:
    start = time.perf_counter()
    try:
        rows = repository.probe(table)
    except StorageError as exc:
        return DiagnosticResult(id=check_id, name=name, status=OFFLINE, message=str(exc))
    latency_ms = round((time.perf_counter() - start) * 1000, 2)
    if not repository.remote:
        return DiagnosticResult(
            id=check_id,
            name=name,
            status=DEGRADED,
            message=f"Running in local store mode ({rows} rows).",
            latency_ms=latency_ms,
        )
    return DiagnosticResult(
        id=check_id,
        name=name,
        status=HEALTHY,
        message=f"Connected. Response time: {latency_ms}ms",
        latency_ms=latency_ms,
    )
