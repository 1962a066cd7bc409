import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from eventuraa.database import get_db
from eventuraa.auth.dependencies import get_current_session, get_optional_session
from eventuraa.auth.session import (
    AuthSession,
    AdminActor,
    OrganizerActor,
    VenueHostActor,
    UserActor,
)
from eventuraa.models import Base, Permission


def make_session(actor):
    return AuthSession(
        actor=actor,
        token_id="test-token",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def mock_db():
    """Mock database session"""
    db = MagicMock()
    db.query.return_value = db
    db.filter.return_value = db
    db.first.return_value = None
    db.all.return_value = []
    db.count.return_value = 0
    return db


@pytest.fixture
def admin_session():
    """Admin allowed to moderate both resource types"""
    return make_session(AdminActor(
        id=1,
        permissions=frozenset({
            Permission.MANAGE_EVENTS,
            Permission.MANAGE_VENUES,
            Permission.MANAGE_USERS,
            Permission.VIEW_REPORTS,
        }),
    ))


@pytest.fixture
def support_admin_session():
    """Admin without any moderation permission"""
    return make_session(AdminActor(id=2, permissions=frozenset({Permission.VIEW_REPORTS})))


@pytest.fixture
def organizer_session():
    return make_session(OrganizerActor(id=10))


@pytest.fixture
def venue_host_session():
    return make_session(VenueHostActor(id=20))


@pytest.fixture
def customer_session():
    return make_session(UserActor(id=30))


def _client(mock_db, session):
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_session] = lambda: session
    app.dependency_overrides[get_optional_session] = lambda: session
    return TestClient(app)


@pytest.fixture
def client_with_admin(mock_db, admin_session):
    """TestClient with admin auth and mocked DB"""
    client = _client(mock_db, admin_session)
    yield client, mock_db, admin_session
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_support_admin(mock_db, support_admin_session):
    client = _client(mock_db, support_admin_session)
    yield client, mock_db, support_admin_session
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_organizer(mock_db, organizer_session):
    """TestClient with organizer auth and mocked DB"""
    client = _client(mock_db, organizer_session)
    yield client, mock_db, organizer_session
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_venue_host(mock_db, venue_host_session):
    client = _client(mock_db, venue_host_session)
    yield client, mock_db, venue_host_session
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_customer(mock_db, customer_session):
    client = _client(mock_db, customer_session)
    yield client, mock_db, customer_session
    app.dependency_overrides.clear()


@pytest.fixture
def unauthenticated_client(mock_db):
    """TestClient with mocked DB but no auth"""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_optional_session] = lambda: None
    client = TestClient(app)
    yield client, mock_db
    app.dependency_overrides.clear()


@pytest.fixture
def sqlite_db():
    """Real session on an in-memory SQLite database"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield db
    db.close()
    Base.metadata.drop_all(engine)
    engine.dispose()
