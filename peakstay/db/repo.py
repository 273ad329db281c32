"""Repository selection: Supabase when configured, the local store otherwise."""

from __future__ import annotations

import os
from typing import Optional

from ..utils.logging import get_logger
from .base import Repository
from .local_repo import LocalRepository
from .supabase_client import create_supabase_client
from .supabase_repo import SupabaseRepository

LOGGER = get_logger("db.repo")

DB_MODE = os.getenv("DB_MODE", "local").lower()


def create_repository(mode: Optional[str] = None) -> Repository:
    mode = (mode or DB_MODE).lower()
    if mode == "supabase":
        client = create_supabase_client()
        if client is not None:
            LOGGER.info("Repository running in Supabase mode")
            return SupabaseRepository(client)
        LOGGER.warning("Supabase unavailable; falling back to local store")
    store_path = os.getenv("LOCAL_STORE_PATH") or None
    LOGGER.info("Repository running in local mode store_path=%s", store_path)
    return LocalRepository(store_path=store_path)


_repo_singleton: Repository | None = None


def get_repository() -> Repository:
    global _repo_singleton
    if _repo_singleton is None:
        _repo_singleton = create_repository()
    return _repo_singleton


def reset_repository() -> None:
    global _repo_singleton
    _repo_singleton = None
