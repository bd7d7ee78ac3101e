"""
Pytest fixtures for API integration tests.

Provides FastAPI test client bound to the in-memory test database.
"""
import pytest
from fastapi.testclient import TestClient

from credential_export.main import app
from credential_export.core.config import settings
from credential_export.core.database import get_db


@pytest.fixture(scope="function")
def client(db_session, tmp_path, monkeypatch):
    """
    FastAPI test client with database dependency override.

    Exports are staged under tmp_path.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    monkeypatch.setattr(settings, "EXPORT_ROOT", str(tmp_path))
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
