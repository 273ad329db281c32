"""Storage error types and translation of raw PostgREST failures."""

from __future__ import annotations

from typing import Any

BOOTSTRAP_SQL = """-- Run in the Supabase SQL editor to create the expected tables.
CREATE TABLE IF NOT EXISTS villas (id uuid DEFAULT gen_random_uuid() PRIMARY KEY, name text, location text, price_per_night numeric, bedrooms int, bathrooms int, capacity int, description text, long_description text, image_urls text[], video_urls text[], amenities text[], included_services text[], is_featured boolean DEFAULT false, num_rooms int, meals_available boolean DEFAULT false, pet_friendly boolean DEFAULT false, refund_policy text, rating numeric DEFAULT 5, rating_count int DEFAULT 0, created_at timestamptz DEFAULT now());
CREATE TABLE IF NOT EXISTS testimonials (id uuid DEFAULT gen_random_uuid() PRIMARY KEY, name text, content text, rating int, avatar text, created_at timestamptz DEFAULT now());
CREATE TABLE IF NOT EXISTS services (id uuid DEFAULT gen_random_uuid() PRIMARY KEY, title text, description text, icon text, created_at timestamptz DEFAULT now());
CREATE TABLE IF NOT EXISTS leads (id uuid DEFAULT gen_random_uuid() PRIMARY KEY, villa_id text, villa_name text, customer_name text, user_id text, source text, status text DEFAULT 'new', check_in date, check_out date, created_at timestamptz DEFAULT now());
CREATE TABLE IF NOT EXISTS site_settings (id int PRIMARY KEY, active_theme text, promo_text text, whatsapp_number text);
ALTER TABLE villas ENABLE ROW LEVEL SECURITY;
ALTER TABLE testimonials ENABLE ROW LEVEL SECURITY;
ALTER TABLE services ENABLE ROW LEVEL SECURITY;
ALTER TABLE leads ENABLE ROW LEVEL SECURITY;
ALTER TABLE site_settings ENABLE ROW LEVEL SECURITY;
DROP POLICY IF EXISTS "v_all" ON villas; CREATE POLICY "v_all" ON villas FOR ALL TO anon USING (true) WITH CHECK (true);
DROP POLICY IF EXISTS "t_all" ON testimonials; CREATE POLICY "t_all" ON testimonials FOR ALL TO anon USING (true) WITH CHECK (true);
DROP POLICY IF EXISTS "s_all" ON services; CREATE POLICY "s_all" ON services FOR ALL TO anon USING (true) WITH CHECK (true);
DROP POLICY IF EXISTS "l_all" ON leads; CREATE POLICY "l_all" ON leads FOR ALL TO anon USING (true) WITH CHECK (true);
DROP POLICY IF EXISTS "ss_all" ON site_settings; CREATE POLICY "ss_all" ON site_settings FOR ALL TO anon USING (true) WITH CHECK (true);"""

SETUP_HINTS = ("relation", "policy", "access denied", "column")


class StorageError(RuntimeError):
    """A read or write against the configured store failed."""

    def __init__(self, message: str, table: str = "", setup_hint: str = "") -> None:
        super().__init__(message)
        self.table = table
        self.setup_hint = setup_hint


class RecordNotFound(LookupError):
    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"{table} record not found: {record_id}")
        self.table = table
        self.record_id = record_id


def handle_db_error(error: Any, table: str) -> StorageError:
    """Turn a raw client error into a ``StorageError``.

    Missing tables, columns or row-level-security policies carry the bootstrap
    SQL as ``setup_hint`` so the admin surface can show it.
    """

    if isinstance(error, str):
        raw = error
    else:
        raw = getattr(error, "message", None) or str(error)
    lowered = raw.lower()
    if any(marker in lowered for marker in SETUP_HINTS):
        return StorageError(f"{table}: {raw}. Run the bootstrap SQL to initialise the schema.", table, BOOTSTRAP_SQL)
    return StorageError(f"{table}: {raw or 'A database error occurred'}", table)


__all__ = ["BOOTSTRAP_SQL", "RecordNotFound", "StorageError", "handle_db_error"]
