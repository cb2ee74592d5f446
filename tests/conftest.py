# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasks_api.api.main import create_app

from .fakes import FakeDatabase


@pytest.fixture()
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def client(db: FakeDatabase):
    with TestClient(create_app(db)) as c:
        yield c
