"""
pytest configuration and fixtures for Quote Me tests
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storage import QuoteStore, JsonFileAdapter


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def store_path(temp_dir):
    """Path of the persisted quote file used by the store under test"""
    return temp_dir / "data" / "quotes.json"


@pytest.fixture
def store(store_path):
    """Empty quote store backed by a temporary file"""
    return QuoteStore(JsonFileAdapter(store_path))


@pytest.fixture
def sample_quotes():
    """Sample quote records in the persisted format"""
    return [
        {
            "id": "a",
            "quote": "Be water.",
            "author": "Bruce Lee",
            "createdAt": "2024-01-01T10:00:00.000Z"
        },
        {
            "id": "b",
            "quote": "Simplicity is the ultimate sophistication.",
            "author": "Leonardo da Vinci",
            "createdAt": "2024-01-02T11:30:00.000Z"
        }
    ]


@pytest.fixture
def populated_store(store_path, sample_quotes):
    """Quote store whose file already holds the sample quotes"""
    store_path.parent.mkdir(parents=True, exist_ok=True)
    store_path.write_text(json.dumps({"quotes": sample_quotes}), encoding="utf-8")
    return QuoteStore(JsonFileAdapter(store_path))


@pytest.fixture
def write_json(temp_dir):
    """Factory writing a JSON document into the temporary directory"""
    def _write_json(name, data):
        path = temp_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write_json


@pytest.fixture
def cli_env(temp_dir, monkeypatch):
    """Isolated environment for running the command-line interface"""
    data_dir = temp_dir / "appdata"
    config_dir = temp_dir / "config"
    work_dir = temp_dir / "work"
    config_dir.mkdir()
    work_dir.mkdir()

    monkeypatch.setenv("QUOTES_DATA_DIR", str(data_dir))
    monkeypatch.setenv("QUOTES_CONFIG_DIR", str(config_dir))
    for name in ("PORT", "QUOTES_ENV", "QUOTES_DEV_SERVER", "QUOTES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(work_dir)

    return {"data_dir": data_dir, "config_dir": config_dir, "work_dir": work_dir}


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
