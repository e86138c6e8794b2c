"""Shared test fixtures: in-memory SQLite, seeded lookup tables, API client."""

import os

# Settings are read at import time; point them at a throwaway database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["SESSION_SECRET"] = "test-session-secret"

import pytest
from fastapi.testclient import TestClient

from app.core.db import Base, SessionLocal, engine
from app.main import app
from app.models.user import Role, User
from app.seed import seed_products, seed_reference_data, seed_users
from app.services.auth import create_user_jwt_token


@pytest.fixture(autouse=True)
def reset_schema():
    """Recreate every table and the brand/category/color/effect rows per test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_reference_data(db)
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    """Products 101-104 from the development seed."""
    seed_products(db)
    db.commit()
    return db


@pytest.fixture
def users(db):
    seed_users(db)
    db.commit()
    return db


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _headers_for(db, role: Role) -> dict:
    """Bearer headers for a stored account; the role is checked against this row."""
    user = User(email=f"{role.value.lower()}@tests.local", hashed_password="not-a-real-hash", role=role)
    db.add(user)
    db.commit()
    return {"Authorization": f"Bearer {create_user_jwt_token(user)}"}


@pytest.fixture
def admin_headers(db):
    return _headers_for(db, Role.ADMIN)


@pytest.fixture
def employee_headers(db):
    return _headers_for(db, Role.EMPLOYEE)


@pytest.fixture
def member_headers(db):
    return _headers_for(db, Role.MEMBER)
