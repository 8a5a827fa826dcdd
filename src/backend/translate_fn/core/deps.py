from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Request

from .config import Settings, get_settings
from ..services.deepseek import DeepSeekTranslator

TRANSLATOR_KEY = "translator"


def resolve_settings(request: Request) -> Settings:
    """Settings for code paths outside Depends(), honouring dependency overrides."""
    provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return provider()


async def init_translator(app: FastAPI, settings: Settings) -> None:
    app.state.__setattr__(TRANSLATOR_KEY, DeepSeekTranslator(settings))


async def close_translator(app: FastAPI) -> None:
    translator: Optional[DeepSeekTranslator] = getattr(app.state, TRANSLATOR_KEY, None)
    if translator is not None:
        try:
            await translator.aclose()
        finally:
            delattr(app.state, TRANSLATOR_KEY)


def get_translator(request: Request, settings: Settings = Depends(get_settings)) -> DeepSeekTranslator:
    translator: Optional[DeepSeekTranslator] = getattr(request.app.state, TRANSLATOR_KEY, None)
    if translator is None:
        # Lifespan was skipped (e.g. a bare ASGI transport); build one on first use.
        translator = DeepSeekTranslator(settings)
        request.app.state.__setattr__(TRANSLATOR_KEY, translator)
    return translator
