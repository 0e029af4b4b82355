import io
import random

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.api.deps import get_measurer, get_scan_settings
from app.api.main import app
from app.config import ScanSettings
from app.db import session as db_session
from app.growth.measurement import MockPoseMeasurer


@pytest.fixture
def db():
    """Fresh in-memory database bound to the shared SessionLocal."""
    db_session.configure_engine("sqlite://")
    db_session.init_db()
    yield db_session.engine
    db_session.engine.dispose()


@pytest.fixture
def scan_settings() -> ScanSettings:
    return ScanSettings(delay_s=0.0, timeout_s=5.0)


@pytest.fixture
def client(db, scan_settings):
    app.dependency_overrides[get_scan_settings] = lambda: scan_settings
    app.dependency_overrides[get_measurer] = lambda: MockPoseMeasurer(delay_s=0.0, rng=random.Random(7))
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def jpeg_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 48), (200, 180, 160)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def baby(client):
    r = client.post(
        "/babies",
        json={"name": "Ada", "birth_date": "2023-01-01", "sex": "male", "parent_name": "Sam"},
    )
    assert r.status_code == 201
    return r.json()
