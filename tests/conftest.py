import json
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.backend.translate_fn.main import app
from src.backend.translate_fn.core.config import Settings, get_settings
from src.backend.translate_fn.core.deps import TRANSLATOR_KEY, get_translator
from src.backend.translate_fn.services.deepseek import DeepSeekTranslator


def make_settings(**overrides) -> Settings:
    values = {
        "app_name": "zh-translate",
        "log_level": "INFO",
        "app_env": "production",
        "deepseek_api_key": "sk-test",
        "deepseek_base_url": "https://api.deepseek.com",
        "deepseek_model": "deepseek-chat",
        "request_timeout_seconds": 15.0,
        "message_locale": "en",
    }
    values.update(overrides)
    return Settings(**values)


def completion(content, status_code=200):
    body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return httpx.Response(status_code, json=body)


class FakeUpstream:
    """Records outbound calls and replies with a scripted response or error."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.reply = completion("你好，世界")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        # Fresh copy so the same scripted reply can be served repeatedly.
        return httpx.Response(self.reply.status_code, headers=self.reply.headers, content=self.reply.content)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return make_settings()


@pytest_asyncio.fixture
async def client(upstream, settings):
    upstream_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    translator = DeepSeekTranslator(settings, client=upstream_client)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_translator] = lambda: translator
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        if getattr(app.state, TRANSLATOR_KEY, None) is not None:
            delattr(app.state, TRANSLATOR_KEY)
        await upstream_client.aclose()
