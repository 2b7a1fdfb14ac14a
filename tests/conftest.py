"""
Shared fixtures for DocuCraft API tests.

The Azure OpenAI client is replaced by a scripted fake so no network calls are
made. Each queued response is either a string (returned as the message
content) or an exception (raised from the create call).
"""
from __future__ import annotations

import json
from types import SimpleNamespace
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app


class FakeCompletions:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: List[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.responses:
            raise AssertionError("Unexpected chat completion call")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        message = SimpleNamespace(content=item)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, responses):
        self.chat = SimpleNamespace(completions=FakeCompletions(responses))


def as_json(payload: dict) -> str:
    return json.dumps(payload)


@pytest.fixture
def fake_llm(monkeypatch):
    """
    Install a fake client returning the given responses in order.
    Returns the FakeCompletions so tests can inspect the recorded calls.
    """

    def install(*responses):
        fake = FakeOpenAI(responses)
        monkeypatch.setattr("services.flows.runner.get_client", lambda: fake)
        monkeypatch.setattr("services.image_analyzer.get_client", lambda: fake)
        return fake.chat.completions

    return install


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient wired to the FastAPI app"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SAMPLE_HTML = (
    "<h1>The Future of Space Exploration</h1>"
    "<p>Gravity follows \\( F = G \\frac{m_1 m_2}{r^2} \\) between two bodies.</p>"
    "<h2>Missions</h2>"
    "<ul><li>Artemis <b>returns</b> to the Moon</li><li>Mars sample return</li></ul>"
    "<p>Energy: \\[ E = mc^2 \\]</p>"
    "<blockquote>The Earth is the cradle of humanity.</blockquote>"
    "<p>See <a href=\"https://www.nasa.gov\">NASA</a> for details.</p>"
)
