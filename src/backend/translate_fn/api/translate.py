import json
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from ..core.config import Settings, get_settings
from ..core.cors import CORS_HEADERS
from ..core.deps import get_translator
from ..core.errors import classify_failure, error_payload, message
from ..schemas.translate import TranslationResponse
from ..services.deepseek import DeepSeekTranslator, TranslationFailure

logger = logging.getLogger(__name__)

translate_route = APIRouter(tags=['translate'])

# The original deployment path is kept so existing frontends keep working.
HANDLER_PATHS = (
    '/',
    '/translate',
    '/translate/',
    '/.netlify/functions/translate',
    '/.netlify/functions/translate/',
)
ROUTED_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def _parse_body(raw: bytes):
    if not raw:
        return {}
    return json.loads(raw)


async def translate(
    request: Request,
    settings: Settings = Depends(get_settings),
    translator: DeepSeekTranslator = Depends(get_translator),
):
    if request.method == 'OPTIONS':
        return Response(status_code=status.HTTP_200_OK, content=b'', headers=CORS_HEADERS)

    if request.method != 'POST':
        return _json(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            error_payload(message('method_not_allowed', settings.message_locale)),
        )

    try:
        body = _parse_body(await request.body())
    except ValueError as exc:
        logger.error("Translation error: unreadable request body: %s", exc)
        return _json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_payload(message('unavailable', settings.message_locale), str(exc), settings.expose_error_details),
        )

    text = body.get('text') if isinstance(body, dict) else None
    if not isinstance(text, str) or not text.strip():
        return _json(
            status.HTTP_400_BAD_REQUEST,
            error_payload(message('text_required', settings.message_locale)),
        )

    outcome = await translator.translate(text)
    if isinstance(outcome, TranslationFailure):
        logger.error("Translation error (%s): %s", outcome.kind.value, outcome.detail)
        status_code, error = classify_failure(outcome, settings.message_locale)
        return _json(status_code, error_payload(error, outcome.detail, settings.expose_error_details))

    result = TranslationResponse(translation=outcome.text.strip(), original=text)
    logger.info("Translated %d chars into %d chars", len(text), len(result.translation))
    return _json(status.HTTP_200_OK, result.model_dump())


for _path in HANDLER_PATHS:
    translate_route.add_api_route(
        _path,
        translate,
        methods=ROUTED_METHODS,
        response_model=None,
        include_in_schema=_path == '/translate',
    )
