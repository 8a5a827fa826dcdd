from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cors import CORS_HEADERS
from .deps import resolve_settings
from ..schemas.translate import ErrorResponse
from ..services.deepseek import FailureKind, TranslationFailure

logger = logging.getLogger(__name__)

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "method_not_allowed": "Method Not Allowed",
        "text_required": "text is required",
        "key_invalid": "API key invalid or expired",
        "rate_limited": "Too many requests, please retry later",
        "upstream_status": "Translation API error: {status}",
        "network": "Network connection failed, please check network settings",
        "key_missing": "API key not configured",
        "unavailable": "Translation service temporarily unavailable",
    },
    "zh": {
        "method_not_allowed": "Method Not Allowed",
        "text_required": "text is required",
        "key_invalid": "API密钥无效或过期",
        "rate_limited": "请求过于频繁，请稍后重试",
        "upstream_status": "翻译API错误: {status}",
        "network": "网络连接失败，请检查网络设置",
        "key_missing": "API密钥未配置",
        "unavailable": "翻译服务暂时不可用",
    },
}


def message(key: str, locale: str = "en", **params) -> str:
    catalog = MESSAGES.get(locale, MESSAGES["en"])
    return catalog[key].format(**params)


def classify_failure(failure: TranslationFailure, locale: str = "en") -> tuple[int, str]:
    if failure.kind is FailureKind.UPSTREAM_STATUS:
        if failure.status_code == 401:
            return 401, message("key_invalid", locale)
        if failure.status_code == 429:
            return 429, message("rate_limited", locale)
        return 500, message("upstream_status", locale, status=failure.status_code)
    if failure.kind is FailureKind.NETWORK:
        return 500, message("network", locale)
    if failure.kind is FailureKind.CONFIG_MISSING:
        return 500, message("key_missing", locale)
    return 500, message("unavailable", locale)


def error_payload(error: str, details: str | None = None, expose_details: bool = False) -> dict:
    body = ErrorResponse(error=error, details=details if expose_details and details else None)
    return body.model_dump(exclude_none=True)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        payload = error_payload(str(exc.detail) if exc.detail else "HTTP error")
        return JSONResponse(status_code=exc.status_code, content=payload, headers=CORS_HEADERS)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        settings = resolve_settings(request)
        payload = error_payload("Validation failed", str(exc.errors()), settings.expose_error_details)
        return JSONResponse(status_code=422, content=payload, headers=CORS_HEADERS)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", exc_info=exc)
        settings = resolve_settings(request)
        payload = error_payload(
            message("unavailable", settings.message_locale),
            str(exc),
            settings.expose_error_details,
        )
        return JSONResponse(status_code=500, content=payload, headers=CORS_HEADERS)
