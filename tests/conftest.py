"""
Test configuration and fixtures for the HUMG Share API tests.
"""
import os
import sqlite3
from typing import Dict, Generator

# must be set before the app modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import get_db
from app.db.base import Base
from app.main import app
from app.models.badge import Badge, BadgeType
from app.models.document import Document, DocumentStatus
from app.models.profile import Profile, UserRole
from app.models.shop_item import ShopItem
from app.domain.ledger.service import get_or_create_profile, set_role
from app.security import create_access_token

TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False,
)

@event.listens_for(Engine, "connect")
def enable_sqlite_fks(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_badge(db, name, badge_type: BadgeType, requirement=0, icon="Award", color="#f59e0b") -> Badge:
    badge = Badge(name=name, description=f"{name} badge", icon=icon, color=color,
                  type=badge_type.value, requirement=requirement)
    db.add(badge)
    db.commit()
    db.refresh(badge)
    return badge


def make_item(db, name="Template Excel", cost=30, is_active=True) -> ShopItem:
    item = ShopItem(name=name, description=f"{name} item", cost=cost, type="template",
                    icon="FileSpreadsheet", is_active=is_active)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def make_document(db, uploader_id, title="Giao trinh Surpac", status=DocumentStatus.pending, **extra) -> Document:
    doc = Document(
        title=title,
        faculty=extra.pop("faculty", "Khoa Mo"),
        category=extra.pop("category", "Giao trinh"),
        uploader_id=uploader_id,
        status=status,
        tags=extra.pop("tags", []),
        **extra,
    )
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return doc


def set_points(db, user_id, points) -> Profile:
    profile = db.get(Profile, user_id)
    profile.points = points
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def student(db_session) -> Profile:
    """A student profile created the same way the first request would."""
    return get_or_create_profile(db_session, "student-1", name="Nguyen Van A", email="a@humg.edu.vn")


@pytest.fixture
def other_student(db_session) -> Profile:
    return get_or_create_profile(db_session, "student-2", name="Tran Thi B")


@pytest.fixture
def admin(db_session) -> Profile:
    get_or_create_profile(db_session, "admin-1", name="Admin")
    return set_role(db_session, "admin-1", UserRole.admin)


@pytest.fixture
def moderator(db_session) -> Profile:
    get_or_create_profile(db_session, "mod-1", name="Moderator")
    return set_role(db_session, "mod-1", UserRole.moderator)


def headers_for(user_id: str, **claims) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, **claims)}"}


@pytest.fixture
def auth_headers(student) -> Dict[str, str]:
    """Authentication headers for the student profile."""
    return headers_for(student.user_id)


@pytest.fixture
def admin_headers(admin) -> Dict[str, str]:
    """Authentication headers for an admin profile."""
    return headers_for(admin.user_id)


@pytest.fixture
def moderator_headers(moderator) -> Dict[str, str]:
    return headers_for(moderator.user_id)
