import base64
import io
from datetime import date

import pytest
from PIL import Image

from llm.llm_client import VisionClient
from llm.schemas import BackendConfig


class FakeProvider:
    """Answers each generate() call with the next scripted response."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls = []

    def generate(self, *, system, user, model=None, max_tokens=500, temperature=0.3) -> str:
        self.calls.append(
            {"system": system, "user": user, "model": model, "max_tokens": max_tokens, "temperature": temperature}
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def backend_config():
    return BackendConfig(api_key="test-key")


@pytest.fixture
def fake_provider_factory():
    def _make(*responses):
        return FakeProvider(*responses)
    return _make


@pytest.fixture
def fake_client_factory(backend_config):
    def _make(*responses):
        provider = FakeProvider(*responses)
        return VisionClient(backend_config, provider=provider), provider
    return _make


@pytest.fixture
def today():
    return date(2026, 10, 19)


@pytest.fixture
def png_data_url():
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
