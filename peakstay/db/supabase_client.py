"""Helper to create a Supabase client when credentials are provided."""

from __future__ import annotations

import os
from typing import Optional

from ..utils.logging import get_logger

LOGGER = get_logger("db.supabase")


def supabase_credentials() -> tuple[Optional[str], Optional[str]]:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")
    return url, key


def supabase_configured() -> bool:
    """True when the URL and key look like a live project rather than a template."""

    url, key = supabase_credentials()
    return bool(url) and "your-project-id" not in url and bool(key)


def create_supabase_client():
    if not supabase_configured():
        LOGGER.info("Supabase credentials not configured; skipping client creation")
        return None
    url, key = supabase_credentials()
    try:
        from supabase import create_client

        return create_client(url, key)
    except Exception as exc:
        LOGGER.error("Failed to create Supabase client: %s", exc)
        return None
