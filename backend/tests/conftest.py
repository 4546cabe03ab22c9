import os
import sys
import tempfile
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# main.py builds a module-level app from the environment on import;
# keep that instance away from backend/data.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="item-list-test-"))

from fastapi.testclient import TestClient  # noqa: E402

from main import create_app  # noqa: E402
from services.dataset import build_services  # noqa: E402
from utils.settings import Settings  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def services(data_dir):
    return build_services(data_dir)


@pytest.fixture
def settings(tmp_path, data_dir):
    return Settings(data_dir=data_dir, public_dir=tmp_path / "public")


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def upload(client):
    def _upload(filename: str, content: bytes):
        return client.post("/upload", files={"csv": (filename, content)})
    return _upload
