"""
pytest fixtures shared by the API and storage tests.
"""

import pytest
from fastapi.testclient import TestClient

from apps.api.config import Settings
from apps.api.main import create_app
from packages.storage.db import ComponentStore


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory SQLite database."""
    return Settings(database_url="sqlite://", expose_errors=True)


@pytest.fixture
def store(settings):
    """Fresh, empty component store."""
    s = ComponentStore(settings.database_url)
    s.init_schema()
    yield s
    s.dispose()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_components():
    """A small catalog spanning CPUs, boards and PSUs."""
    return [
        {"name": "Ryzen 7 7800X3D", "type": "cpu", "price": 449,
         "specs": {"socket": "AM5", "wattage": 120}},
        {"name": "Core i7-14700K", "type": "cpu", "price": 409,
         "specs": {"socket": "LGA1700", "wattage": 125}},
        {"name": "B650 Tomahawk", "type": "motherboard", "price": 219,
         "specs": {"socket": "AM5", "memoryType": "DDR5"}},
        {"name": "Z690-P D4", "type": "motherboard", "price": 169,
         "specs": {"socket": "LGA1700", "memoryType": "DDR4"}},
        {"name": "RM500", "type": "psu", "price": 69, "specs": {"wattage": 500}},
        {"name": "CX499", "type": "psu", "price": 59, "specs": {"wattage": 499}},
        {"name": "RM850x", "type": "psu", "price": 139, "specs": {"wattage": 850}},
    ]


@pytest.fixture
def seeded(client, sample_components):
    """Create the sample catalog through the API and return the stored records."""
    created = []
    for payload in sample_components:
        r = client.post("/components", json=payload)
        assert r.status_code == 201
        created.append(r.json())
    return created
