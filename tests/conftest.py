import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

# Force an in-memory database and a known signing key before the app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

from staffhub.db import Base, SessionLocal, get_db, get_engine  # noqa: E402
from staffhub.dependencies.authz import get_current_actor  # noqa: E402
from staffhub.main import app  # noqa: E402
from staffhub.models.menu import Menu, generate_menu_key  # noqa: E402
from staffhub.models.role import Role  # noqa: E402
from staffhub.schemas.auth_schemas import Actor  # noqa: E402

ADMIN_EMAIL = "admin@test.com"


@pytest.fixture
def db_session():
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def actor():
    return Actor(email=ADMIN_EMAIL, role_id=None)


@pytest.fixture
def client(db_session, actor):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_current_actor] = lambda: actor
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_menu(db_session):
    """Insert a menu row directly, deriving its level from the parent."""

    def _make(name: str, parent: Menu | None = None, order: int = 0, created_at: datetime | None = None, **fields) -> Menu:
        menu = Menu(
            key=generate_menu_key(name),
            name=name,
            parent_id=parent.id if parent is not None else None,
            level=(parent.level + 1) if parent is not None else 0,
            order=order,
            created_at=created_at or datetime.now(UTC),
            **fields,
        )
        db_session.add(menu)
        db_session.commit()
        db_session.refresh(menu)
        return menu

    return _make


@pytest.fixture
def make_role(db_session):
    def _make(name: str = "staff", **fields) -> Role:
        role = Role(name=name, **fields)
        db_session.add(role)
        db_session.commit()
        db_session.refresh(role)
        return role

    return _make
