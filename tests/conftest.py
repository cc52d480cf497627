import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.locks import ClientLockRegistry
from app.database import create_db_engine, get_db, init_db
from app.dependencies import get_onboarding_service
from app.schemas.client import ClientCreate
from app.services.client import client_service
from app.services.notifications import RecordingNotifier
from app.services.onboarding import OnboardingService
from main import app


@pytest.fixture
def engine(tmp_path):
    # A fresh database file per test keeps every test isolated
    engine = create_db_engine(f"sqlite:///{tmp_path / 'onboarding.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
        future=True,
    )


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def onboarding_service(notifier):
    return OnboardingService(notifier=notifier, locks=ClientLockRegistry())


@pytest.fixture
def api(session_factory, onboarding_service):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_onboarding_service] = lambda: onboarding_service
    # No context manager: the lifespan (schema setup on the default
    # database, webhook notifier) is not wanted under test
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(db):
    def _make(**overrides):
        data = {
            "name": "Acme Health Systems",
            "industry": "Healthcare Technology",
            "primary_contact_name": "Taylor Morgan",
            "primary_contact_email": "taylor@acmehealth.com",
        }
        data.update(overrides)
        return client_service.create_client(db=db, client_data=ClientCreate(**data))
    return _make
