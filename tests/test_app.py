import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from app.core.config import settings
from app.main import create_app
from app.services.appointment_service import AppointmentLedger

def test_startup_requires_database_url(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    app = create_app()

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass

def test_startup_opens_configured_database(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite:///{tmp_path / 'booking.db'}")
    app = create_app()

    with TestClient(app) as client:
        assert app.state.database is not None
        response = client.post("/api/register", json={"username": "alice", "password": "pw"})
        assert response.status_code == 201

    assert app.state.database is None
    assert (tmp_path / "booking.db").exists()

def test_process_time_header(client):
    response = client.get("/api/test")
    assert "X-Process-Time" in response.headers

def test_static_files_served_next_to_api(database, tmp_path):
    (tmp_path / "index.html").write_text("<h1>Book an appointment</h1>")
    app = create_app(database=database, static_dir=str(tmp_path))

    with TestClient(app) as client:
        page = client.get("/")
        assert page.status_code == 200
        assert "Book an appointment" in page.text

        api = client.get("/api/test")
        assert api.json() == {"message": "API working"}

        missing = client.get("/missing.css")
        assert missing.status_code == 404

def test_storage_failure_returns_500_message(client, monkeypatch):
    def broken_all(self):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(Query, "all", broken_all)

    response = client.get("/api/appointments")
    assert response.status_code == 500
    assert response.json() == {"message": "Server error while fetching"}

def test_unexpected_error_returns_500_message(database, monkeypatch):
    def explode(self, username=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(AppointmentLedger, "list_appointments", explode)
    app = create_app(database=database)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/appointments")

    assert response.status_code == 500
    assert response.json() == {"message": "An unexpected error occurred"}

def test_distribution_includes_subpackages():
    tomllib = pytest.importorskip("tomllib")
    from pathlib import Path
    from setuptools import find_namespace_packages, find_packages

    root = Path(__file__).parent.parent
    with open(root / "pyproject.toml", "rb") as f:
        find = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

    finder = find_namespace_packages if find.get("namespaces") else find_packages
    packages = finder(where=str(root), include=find["include"])
    for package in ("app.core", "app.models", "app.services", "app.api.routes", "app.schemas"):
        assert package in packages
