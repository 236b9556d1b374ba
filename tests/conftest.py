import pytest
from fastapi.testclient import TestClient

from quizroom.core.config import Settings
from quizroom.core.database import Database
from quizroom.main import create_app
from quizroom.models.orm import Role, User

OWNER_PASSWORD = "owner-pass"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ENVIRONMENT="testing",
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256",
        BCRYPT_ROUNDS=4,
        OWNER_USERNAME="xasan",
        OWNER_PASSWORD=OWNER_PASSWORD,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def login(client, username, password):
    r = client.post("/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def owner_headers(client):
    return login(client, "xasan", OWNER_PASSWORD)


@pytest.fixture
def make_user(client, owner_headers):
    """Create an account through the owner and return its auth headers."""
    def _make(username, role="pupil", password="secret"):
        r = client.post("/users", headers=owner_headers,
                        json={"username": username, "password": password, "role": role})
        assert r.status_code == 201, r.text
        return login(client, username, password)
    return _make


@pytest.fixture
def make_question(client, owner_headers):
    def _make(correct="A", text="Question?"):
        r = client.post("/questions", headers=owner_headers, json={
            "text": text, "option_a": "a", "option_b": "b", "option_c": "c", "option_d": "d",
            "correct_answer": correct,
        })
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _make


@pytest.fixture
def db(settings):
    database = Database(settings)
    database.create_all()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.dispose()


@pytest.fixture
def add_user(db):
    def _add(username, role=Role.PUPIL):
        user = User(username=username, password_hash="x", role=role)
        db.add(user)
        db.commit()
        return user
    return _add
