import os
import tempfile

# Must be set before autolister.config is imported anywhere
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="autolister-uploads-"))
os.environ.setdefault("VIN_API_KEY", "")

import pytest

from autolister.main import app
from autolister.services.ollama_service import build_analysis_result, get_ollama_service
from autolister.storage import MemStorage, get_storage


class FakeOllamaService:
    """Stands in for the vision endpoint. ``replies`` are consumed in order;
    an exception instance is raised instead of returned."""

    def __init__(self, replies=None, healthy=True, models=None):
        self.replies = list(replies or [])
        self.healthy = healthy
        self.models = models if models is not None else ["llava:latest"]
        self.calls = []

    async def analyze_vehicle_image(self, image_base64):
        self.calls.append(image_base64)
        reply = self.replies.pop(0) if self.replies else '{"exterior": "good"}'
        if isinstance(reply, Exception):
            raise reply
        return build_analysis_result(reply)

    async def check_health(self):
        return self.healthy

    async def list_models(self):
        return self.models if self.healthy else []


@pytest.fixture
def upload_dir():
    from autolister.config import settings
    return settings.upload_dir


@pytest.fixture
def store():
    return MemStorage()


@pytest.fixture
def fake_ollama():
    return FakeOllamaService()


@pytest.fixture(autouse=True)
def _override_dependencies(store, fake_ollama):
    app.dependency_overrides[get_storage] = lambda: store
    app.dependency_overrides[get_ollama_service] = lambda: fake_ollama
    yield
    app.dependency_overrides.clear()

