"""
Test infrastructure: in-memory SQLite fixtures and a FastAPI TestClient.
"""
import os

# Must be set BEFORE importing vecdoc
os.environ["API_KEY"] = "test-api-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALERT_SCHEDULER_ENABLED"] = "false"
os.environ["NOTIFICATION_QUEUE_URL"] = ""

from datetime import date, datetime

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from vecdoc.core.database import Base, get_db
from vecdoc.main import app as fastapi_app
from vecdoc.models.alert import AlertStatus, AlertType, DocumentAlert
from vecdoc.models.bike import Bike
from vecdoc.models.document import Document
from vecdoc.models.notification import NotificationSettings

# Import all models so Base.metadata knows every table
import vecdoc.models  # noqa: F401


# In-memory SQLite with StaticPool: one database for all connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enforce foreign keys in SQLite
@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(bind=engine)

USER_ID = "user-0001"


@pytest.fixture(autouse=True)
def setup_database():
    """Creates all tables before each test and drops them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def db_session() -> Session:
    """Test database session."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client_no_auth(db_session: Session) -> TestClient:
    """FastAPI TestClient WITHOUT an API key (security tests)."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app, raise_server_exceptions=False) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(db_session: Session) -> TestClient:
    """FastAPI TestClient with the test database and API key."""
    def override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(
        fastapi_app,
        raise_server_exceptions=False,
        headers={"X-API-Key": "test-api-key"},
    ) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


# --- Test data helpers ---

@pytest.fixture
def bike(db_session: Session) -> Bike:
    bike = Bike(user_id=USER_ID, brand="Royal Enfield", model="Classic 350")
    db_session.add(bike)
    db_session.commit()
    db_session.refresh(bike)
    return bike


@pytest.fixture
def make_document(db_session: Session, bike: Bike):
    """Factory for documents owned by the test bike."""
    def _make(expiry_date: date | None = None, title: str = "Insurance", **kwargs) -> Document:
        document = Document(
            bike_id=bike.id,
            user_id=bike.user_id,
            title=title,
            expiry_date=expiry_date,
            **kwargs,
        )
        db_session.add(document)
        db_session.commit()
        db_session.refresh(document)
        return document
    return _make


@pytest.fixture
def make_alert(db_session: Session):
    """Factory for alert rows with explicit state."""
    def _make(
        document: Document,
        scheduled_at: datetime,
        alert_type: AlertType = AlertType.SEVEN_DAY,
        status: AlertStatus = AlertStatus.PENDING,
        retry_count: int = 0,
    ) -> DocumentAlert:
        alert = DocumentAlert(
            document_id=document.id,
            user_id=document.user_id,
            alert_type=alert_type,
            scheduled_at=scheduled_at,
            status=status,
            retry_count=retry_count,
        )
        db_session.add(alert)
        db_session.commit()
        db_session.refresh(alert)
        return alert
    return _make


@pytest.fixture
def set_notification_settings(db_session: Session):
    def _set(user_id: str = USER_ID, **values) -> NotificationSettings:
        settings = NotificationSettings.defaults(user_id)
        for field, value in values.items():
            setattr(settings, field, value)
        db_session.add(settings)
        db_session.commit()
        return settings
    return _set
