from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache
import os
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_TIMEOUT_SECONDS = 15.0
SUPPORTED_LOCALES = ("en", "zh")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True)

    app_name: str
    log_level: str
    app_env: str
    deepseek_api_key: Optional[str] = None
    deepseek_base_url: str = DEFAULT_BASE_URL
    deepseek_model: str = DEFAULT_MODEL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    message_locale: str = "en"

    @property
    def expose_error_details(self) -> bool:
        return self.app_env.lower() == "development"

    @property
    def completions_url(self) -> str:
        return f"{self.deepseek_base_url.rstrip('/')}/chat/completions"


@lru_cache()
def get_settings() -> Settings:
    load_dotenv()

    # The key is optional here; a missing key is reported per request.
    api_key = os.getenv('DEEPSEEK_API_KEY', '').strip() or None

    base_url = os.getenv('DEEPSEEK_BASE_URL', '').strip() or DEFAULT_BASE_URL
    model = os.getenv('DEEPSEEK_MODEL', '').strip() or DEFAULT_MODEL

    timeout_val = os.getenv('DEEPSEEK_TIMEOUT_SECONDS')
    timeout = DEFAULT_TIMEOUT_SECONDS
    if timeout_val:
        try:
            timeout = float(timeout_val)
        except ValueError as exc:
            raise RuntimeError('DEEPSEEK_TIMEOUT_SECONDS must be a number') from exc
        if timeout <= 0:
            raise RuntimeError('DEEPSEEK_TIMEOUT_SECONDS must be positive')

    app_env = os.getenv('APP_ENV') or os.getenv('NODE_ENV') or 'production'

    locale = os.getenv('ERROR_MESSAGE_LOCALE', 'en').strip().lower()
    if locale not in SUPPORTED_LOCALES:
        raise RuntimeError(f"ERROR_MESSAGE_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}")

    log_level = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in LOG_LEVELS:
        raise RuntimeError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    return Settings(
        app_name="zh-translate",
        log_level=log_level,
        app_env=app_env,
        deepseek_api_key=api_key,
        deepseek_base_url=base_url,
        deepseek_model=model,
        request_timeout_seconds=timeout,
        message_locale=locale,
    )
