# tests/conftest.py

import os
import datetime

import pytest

os.environ.setdefault('PRAYER_ENGINE_ENV', 'testing')

from prayer_engine import resolve_config

MECCA = (21.4225, 39.8262)
CINCINNATI = (39.1455, -84.4127)
ISTANBUL = (41.0082, 28.9784)


@pytest.fixture
def summer_day():
    return datetime.date(2024, 6, 1)


@pytest.fixture
def north_america():
    """NorthAmerica / Shafi in Eastern Daylight Time."""
    return resolve_config(method="NorthAmerica", madhab="Shafi", utc_offset=-4)


@pytest.fixture(scope='session')
def test_client():
    from fastapi.testclient import TestClient
    from index import app
    return TestClient(app)
