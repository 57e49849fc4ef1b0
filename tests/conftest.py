import os

os.environ["TESTING"] = "1"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.database import Database
from app.main import create_app

@pytest.fixture
def database():
    # In-memory SQLite shared by every session of the test
    db = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()

@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()

@pytest.fixture
def client(database):
    app = create_app(database=database)
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
