import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .core.config import get_settings
from .core.cors import CORS_HEADERS
from .core.deps import init_translator, close_translator
from .core.errors import register_exception_handlers
from .api.translate import translate_route

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    if not settings.deepseek_api_key:
        logger.warning("DEEPSEEK_API_KEY is not set; translation requests will fail")
    await init_translator(app, settings)
    try:
        yield
    finally:
        # Shutdown
        await close_translator(app)


# Unknown slash variants must 404 as JSON rather than redirect.
app = FastAPI(title="zh-translate", lifespan=lifespan, redirect_slashes=False)
register_exception_handlers(app)


@app.middleware("http")
async def cors_headers(request, call_next):
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        if name.lower() == "content-type":
            continue
        response.headers.setdefault(name, value)
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(translate_route)


def run() -> None:
    uvicorn.run(
        "src.backend.translate_fn.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=get_settings().log_level.lower(),
    )


if __name__ == "__main__":
    run()
