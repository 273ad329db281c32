from types import SimpleNamespace

import pytest

from peakstay.db.errors import RecordNotFound, StorageError
from peakstay.db.supabase_repo import NIL_UUID, SupabaseRepository
from peakstay.models.content import SiteSettingsUpdate
from peakstay.models.listing import ListingDraft


class _FakeQuery:
    """Just enough of the PostgREST builder chain for the repository."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.action = "select"
        self.payload = None
        self.filters = []
        self.ordering = None
        self.row_limit = None

    def select(self, *columns):
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def upsert(self, payload):
        self.action, self.payload = "upsert", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def execute(self):
        self.client.calls.append((self.table, self.action))
        if self.client.failure:
            raise self.client.failure
        rows = self.client.tables.setdefault(self.table, [])
        matched = [row for row in rows if all(f(row) for f in self.filters)]
        if self.action == "select":
            if self.ordering:
                column, desc = self.ordering
                matched.sort(key=lambda row: row.get(column) or "", reverse=desc)
            return SimpleNamespace(data=matched[: self.row_limit] if self.row_limit else matched)
        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for row in payload:
                self.client.next_id += 1
                created.append({**row, "id": f"row-{self.client.next_id}"})
            rows.extend(created)
            return SimpleNamespace(data=created)
        if self.action in ("update", "upsert"):
            if self.action == "upsert":
                matched = [row for row in rows if row.get("id") == self.payload.get("id")]
                if not matched:
                    rows.append(dict(self.payload))
                    return SimpleNamespace(data=[dict(self.payload)])
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=matched)
        self.client.tables[self.table] = [row for row in rows if row not in matched]
        return SimpleNamespace(data=matched)


class _FakeClient:
    def __init__(self, failure=None):
        self.tables = {}
        self.calls = []
        self.failure = failure
        self.next_id = 0

    def table(self, name):
        return _FakeQuery(self, name)


def _draft(name: str) -> ListingDraft:
    return ListingDraft(name=name, location="Karjat, MH", price_per_night=9000)


def test_listing_crud_round_trip():
    client = _FakeClient()
    repo = SupabaseRepository(client)
    created = repo.create_listing(_draft("Zeta Villa"))
    repo.create_listing(_draft("Alpha Villa"))
    assert [l.name for l in repo.list_listings()] == ["Alpha Villa", "Zeta Villa"]
    assert repo.update_listing(created.id, _draft("Zeta Villa II")).name == "Zeta Villa II"
    repo.delete_listing(created.id)
    assert [l.name for l in repo.list_listings()] == ["Alpha Villa"]


def test_missing_rows_raise_not_found():
    repo = SupabaseRepository(_FakeClient())
    with pytest.raises(RecordNotFound):
        repo.get_listing("missing")
    with pytest.raises(RecordNotFound):
        repo.delete_listing("missing")


def test_replace_all_deletes_with_a_filter_then_inserts():
    client = _FakeClient()
    repo = SupabaseRepository(client)
    repo.create_listing(_draft("Old"))
    replaced = repo.replace_listings([_draft("New A"), _draft("New B")])
    assert [l.name for l in replaced] == ["New A", "New B"]
    assert ("villas", "delete") in client.calls
    assert all(row["id"] != NIL_UUID for row in client.tables["villas"])


def test_settings_upsert_creates_singleton_row():
    client = _FakeClient()
    repo = SupabaseRepository(client)
    updated = repo.update_settings(SiteSettingsUpdate(promo_text="HOLI SALE"))
    assert updated.promo_text == "HOLI SALE"
    assert client.tables["site_settings"][0]["id"] == 1


def test_client_errors_become_storage_errors():
    repo = SupabaseRepository(_FakeClient(failure=RuntimeError('relation "public.villas" does not exist')))
    with pytest.raises(StorageError) as excinfo:
        repo.list_listings()
    assert excinfo.value.setup_hint


def test_content_reads_fall_back_when_remote_fails():
    repo = SupabaseRepository(_FakeClient(failure=RuntimeError("connection refused")))
    assert len(repo.list_reviews()) == 5
    assert [s.title for s in repo.list_services()][0] == "Private Chef"
    assert repo.get_settings().promo_text.startswith("CELEBRATING 2025")


def test_template_credentials_are_not_configured(monkeypatch):
    from peakstay.db.supabase_client import supabase_configured

    monkeypatch.setenv("SUPABASE_URL", "https://your-project-id.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    assert not supabase_configured()
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
    assert supabase_configured()


def test_supabase_mode_falls_back_to_local_without_credentials(monkeypatch):
    from peakstay.db.local_repo import LocalRepository
    from peakstay.db.repo import create_repository

    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    repo = create_repository("supabase")
    assert isinstance(repo, LocalRepository)
    assert repo.mode == "local"


def test_diagnostics_report_remote_health():
    from peakstay.services.diagnostics import run_diagnostics

    results = run_diagnostics(SupabaseRepository(_FakeClient()))
    assert [r.status for r in results] == ["healthy", "healthy", "healthy"]
    failing = run_diagnostics(SupabaseRepository(_FakeClient(failure=RuntimeError("timeout"))))
    assert [r.status for r in failing] == ["healthy", "offline", "offline"]
