"""
Fixtures compartidas.

El entorno se fija antes de importar coop_api: la configuración y el engine
se construyen al importar el paquete.
"""

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="coop_api_tests_")
os.environ["URL_DATABASE_SQL"] = f"sqlite:///{_TMP_DIR}/app.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["URL_DATABASE_REDIS"] = ""
os.environ["DISCORD_WEBHOOK_URL"] = ""
os.environ["LOG_DIR"] = _TMP_DIR

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from coop_api.core import create_token
from coop_api.database import Base, get_db
from coop_api.main import app
from coop_api.models import CoopMember

USER_ID = "0b9a3f0e-5c0e-4b4e-9a61-2f4f6c0d7a11"
COOP_ID = "6f1c2d3e-8a7b-4c5d-9e0f-1a2b3c4d5e6f"


class SequenceGenerator:
    """Generador de códigos determinista para provocar colisiones."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'coop.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def coop_member(db):
    member = CoopMember(user_id=USER_ID, coop_id=COOP_ID)
    db.add(member)
    db.commit()
    return member


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_token({"sub": USER_ID})
    return {"Authorization": f"Bearer {token}"}
