from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

import httpx

from ..core.config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional translation assistant. Translate the text provided by the user "
    "from English or Japanese into Simplified Chinese accurately. Preserve the meaning and tone "
    "of the original, do not add any explanations or commentary, and return only the translated text."
)
USER_PROMPT_PREFIX = "Please translate the following into Simplified Chinese:"

MAX_TOKENS = 1000
TEMPERATURE = 0.1


class FailureKind(str, Enum):
    CONFIG_MISSING = "config_missing"
    UPSTREAM_STATUS = "upstream_status"
    NETWORK = "network"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class TranslationSuccess:
    text: str


@dataclass(frozen=True)
class TranslationFailure:
    kind: FailureKind
    detail: str
    status_code: Optional[int] = None


TranslationOutcome = Union[TranslationSuccess, TranslationFailure]


def build_payload(text: str, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"{USER_PROMPT_PREFIX}\n\n{text}"},
        ],
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
        "stream": False,
    }


def extract_translation(data: Any) -> str:
    """Return ``choices[0].message.content`` or an empty string.

    The upstream body is untrusted: a missing or wrongly shaped level yields
    ``""``. Content that is present but not a string raises ``TypeError``.
    """
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise TypeError(f"message content is {type(content).__name__}, expected str")
    return content


class DeepSeekTranslator:
    """Single-shot client for the DeepSeek chat completion endpoint."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds)
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def translate(self, text: str) -> TranslationOutcome:
        api_key = self.settings.deepseek_api_key
        if not api_key:
            return TranslationFailure(FailureKind.CONFIG_MISSING, "DeepSeek API key is not configured")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = await self._client.post(
                self.settings.completions_url,
                json=build_payload(text, self.settings.deepseek_model),
                headers=headers,
                timeout=self.settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            return TranslationFailure(
                FailureKind.UPSTREAM_STATUS,
                f"Request failed with status code {exc.response.status_code}",
                status_code=exc.response.status_code,
            )
        except httpx.TimeoutException as exc:
            return TranslationFailure(FailureKind.NETWORK, f"Upstream timed out: {exc!r}")
        except httpx.TransportError as exc:
            return TranslationFailure(FailureKind.NETWORK, f"Upstream unreachable: {exc!r}")
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error calling DeepSeek", exc_info=exc)
            return TranslationFailure(FailureKind.UNEXPECTED, str(exc) or exc.__class__.__name__)

        try:
            data = response.json()
        except ValueError:
            logger.warning("DeepSeek returned a non-JSON body (status=%s)", response.status_code)
            data = None
        try:
            return TranslationSuccess(extract_translation(data))
        except TypeError as exc:
            return TranslationFailure(FailureKind.UNEXPECTED, str(exc))
