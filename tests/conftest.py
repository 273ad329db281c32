import pytest

from peakstay.db import repo as repo_module
from peakstay.db.repo import reset_repository
from peakstay.services.catalog_service import reset_catalog


@pytest.fixture(autouse=True)
def _local_store(monkeypatch):
    monkeypatch.setattr(repo_module, "DB_MODE", "local")
    monkeypatch.delenv("LOCAL_STORE_PATH", raising=False)
    reset_catalog()
    reset_repository()
    yield
    reset_catalog()
    reset_repository()
