#!/usr/bin/env python3

"""Translate one sample sentence against the live DeepSeek API using the configured settings."""

import asyncio
import sys

from src.backend.translate_fn.core.config import get_settings
from src.backend.translate_fn.core.errors import classify_failure
from src.backend.translate_fn.services.deepseek import DeepSeekTranslator, TranslationFailure

DEFAULT_TEXT = "The quick brown fox jumps over the lazy dog."


async def main() -> int:
    text = " ".join(sys.argv[1:]) or DEFAULT_TEXT
    settings = get_settings()
    translator = DeepSeekTranslator(settings)
    try:
        outcome = await translator.translate(text)
    finally:
        await translator.aclose()

    if isinstance(outcome, TranslationFailure):
        status_code, error = classify_failure(outcome, settings.message_locale)
        print(f"[{status_code}] {error} ({outcome.detail})", file=sys.stderr)
        return 1
    print(f"{text}\n-> {outcome.text.strip()}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
