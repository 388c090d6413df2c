import pytest
from fastapi.testclient import TestClient

from alumni_normalizer.main import app, get_current_year
from alumni_normalizer.settings import Settings, get_settings

YEAR = 2025


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_current_year] = lambda: YEAR
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
