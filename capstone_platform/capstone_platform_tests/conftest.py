import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from capstone_platform.capstone_platform.accounts_service.main import create_app as create_accounts_app
from capstone_platform.capstone_platform.auth_service.main import create_app as create_auth_app
from capstone_platform.capstone_platform.common.config import AuthSettings, ServiceSettings
from capstone_platform.capstone_platform.common.db import create_db_engine, init_db
from capstone_platform.capstone_platform.records_service.main import create_app as create_records_app

TEST_SECRET = "test-secret-key-for-signing-tokens"


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def service_settings(database_url):
    return ServiceSettings(DATABASE_URL=database_url)


@pytest.fixture
def auth_settings(database_url):
    return AuthSettings(DATABASE_URL=database_url, SECRET_KEY=TEST_SECRET)


@pytest.fixture
def accounts_client(service_settings):
    with TestClient(create_accounts_app(service_settings)) as c:
        yield c


@pytest.fixture
def records_client(service_settings):
    with TestClient(create_records_app(service_settings)) as c:
        yield c


@pytest.fixture
def auth_client(auth_settings):
    with TestClient(create_auth_app(auth_settings)) as c:
        yield c


@pytest.fixture
def db_session(database_url):
    """Direct session on the test store, for seeding and inspecting rows."""
    engine = create_db_engine(database_url)
    init_db(engine)
    session = Session(bind=engine)
    yield session
    session.close()
    engine.dispose()
