"""Shared fixtures"""
import pytest
from fastapi.testclient import TestClient

from typeflip.api.routes.preview import reset_preview_state
from typeflip.main import app
from typeflip.services.translator import TernaryTranslator


@pytest.fixture
def translator():
    return TernaryTranslator()


@pytest.fixture
def client():
    reset_preview_state()
    with TestClient(app) as test_client:
        yield test_client
    reset_preview_state()


@pytest.fixture
def write_source(tmp_path):
    """Write ``text`` to a file under tmp_path and return its path"""
    def write(text: str, name: str = "source.ts") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write
