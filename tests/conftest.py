from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.core.security import create_access_token
from app.db.base import Base
from app.db.sql_store import SqlRecordStore
from app.db.store import new_id, utcnow
from app.main import app
from app.models.pilot import Pilot  # noqa: F401
from app.models.registration_settings import RegistrationSettings
from app.models.staff import TeamStaff  # noqa: F401
from app.models.team import Team  # noqa: F401


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    async def override_store():
        store = SqlRecordStore(session_factory())
        try:
            yield store
        finally:
            await store.close()

    app.dependency_overrides[deps.get_store] = override_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def registration(session_factory):
    """Cria a linha de configuração. Padrão: inscrições abertas, sem limites."""
    def _configure(**fields):
        values = {"registration_open": True}
        values.update(fields)
        db = session_factory()
        try:
            now = utcnow()
            db.add(RegistrationSettings(id=new_id(), created_at=now, updated_at=now, **values))
            db.commit()
        finally:
            db.close()
    return _configure


@pytest.fixture
def auth_headers():
    def _headers(user_id="user-1", email=None, admin=False, expires=timedelta(minutes=30)):
        token = create_access_token(
            subject=user_id,
            expires_delta=expires,
            email=email,
            app_metadata={"roles": ["admin"]} if admin else None,
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def team_payload():
    def _payload(**overrides):
        body = {
            "name": "Los Tandemos",
            "number_of_pilots": 4,
            "representative_name": "Ana",
            "representative_surname": "García",
            "representative_dni": "12345678Z",
            "representative_phone": "600000000",
            "representative_email": "ana@example.com",
            "engine_capacity": "125cc_4t",
            "gdpr_consent": True,
        }
        body.update(overrides)
        return body
    return _payload


@pytest.fixture
def create_team(client, registration, auth_headers, team_payload):
    """Abre as inscrições (uma vez) e cria a equipe do usuário informado."""
    registration()

    def _create(user_id="user-1", **overrides):
        response = client.post("/api/teams", json=team_payload(**overrides), headers=auth_headers(user_id))
        assert response.status_code == 201, response.text
        return response.json()["team"]
    return _create


@pytest.fixture
def pilot_payload():
    def _payload(**overrides):
        body = {
            "name": "Carlos",
            "surname": "Pérez",
            "dni": "87654321X",
            "email": "carlos@example.com",
            "motorcycle_experience": "rutero",
            "driving_level": "intermediate",
        }
        body.update(overrides)
        return body
    return _payload
