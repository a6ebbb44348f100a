# File: tests/conftest.py

import itertools
import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.main import app
from app.models.base import Base
from app.models.user import User

# In-memory database shared by every thread through a single connection
SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

_sequence = itertools.count(1)


def build_user_payload(**overrides) -> dict:
    """Request body for POST /users with unique name and email."""
    n = next(_sequence)
    payload = {
        "name": f"Tom Engels {n}",
        "email": f"tom.engels{n}@records.io",
        "password": f"Secret{n:04d}pw",
        "type": "regular",
        "birth_date": "1996-05-04",
        "country": "Argentina",
        "state": "Buenos Aires",
        "city": "Lomas de Zamora",
        "address": "Calle Falsa 1234",
        "email_subscription": True,
        "number_of_languages": 5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def build_payload():
    return build_user_payload


@pytest.fixture
def make_users(db_session):
    """
    Insert users straight into the database, bypassing the API.

        make_users(5)
        make_users(2, type="admin")
    """

    def _make(n: int = 1, **overrides) -> list[User]:
        users = []
        for _ in range(n):
            payload = build_user_payload(**overrides)
            payload["password"] = bcrypt.hashpw(
                payload["password"].encode("utf-8"), bcrypt.gensalt(rounds=4)
            ).decode("utf-8")
            payload["birth_date"] = None
            users.append(User(**payload))
        db_session.add_all(users)
        db_session.commit()
        for user in users:
            db_session.refresh(user)
        return users

    return _make
