import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.session import create_db_engine
from app.main import create_application


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "environment": "test",
        "static_dir": "no-such-static-dir",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, i.e. the database bootstrap
    with TestClient(app) as client:
        yield client


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings)
    yield engine
    engine.dispose()


@pytest.fixture
def unreachable_settings(tmp_path):
    return make_settings(database_url=f"sqlite:///{tmp_path}/missing/app.db")


@pytest.fixture
def unreachable_client(unreachable_settings):
    # No lifespan: bootstrap would fail and the app would never serve
    app = create_application(unreachable_settings)
    return TestClient(app)


@pytest.fixture
def settings_factory():
    return make_settings
