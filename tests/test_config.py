import pytest

from src.backend.translate_fn.core.config import get_settings

ENV_VARS = [
    "DEEPSEEK_API_KEY", "DEEPSEEK_BASE_URL", "DEEPSEEK_MODEL", "DEEPSEEK_TIMEOUT_SECONDS",
    "APP_ENV", "NODE_ENV", "LOG_LEVEL", "ERROR_MESSAGE_LOCALE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("src.backend.translate_fn.core.config.load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = get_settings()
    assert settings.deepseek_api_key is None
    assert settings.completions_url == "https://api.deepseek.com/chat/completions"
    assert settings.deepseek_model == "deepseek-chat"
    assert settings.request_timeout_seconds == 15.0
    assert settings.app_env == "production"
    assert settings.expose_error_details is False
    assert settings.message_locale == "en"


def test_node_env_enables_details(monkeypatch):
    monkeypatch.setenv("NODE_ENV", "development")
    assert get_settings().expose_error_details is True


def test_app_env_wins_over_node_env(monkeypatch):
    monkeypatch.setenv("NODE_ENV", "development")
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings().expose_error_details is False


def test_reads_key_and_overrides(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", " sk-live ")
    monkeypatch.setenv("DEEPSEEK_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("ERROR_MESSAGE_LOCALE", "ZH")
    settings = get_settings()
    assert settings.deepseek_api_key == "sk-live"
    assert settings.request_timeout_seconds == 30.0
    assert settings.message_locale == "zh"


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_rejects_bad_timeout(monkeypatch, value):
    monkeypatch.setenv("DEEPSEEK_TIMEOUT_SECONDS", value)
    with pytest.raises(RuntimeError):
        get_settings()


def test_rejects_unknown_locale(monkeypatch):
    monkeypatch.setenv("ERROR_MESSAGE_LOCALE", "fr")
    with pytest.raises(RuntimeError):
        get_settings()


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert get_settings().log_level == "DEBUG"


def test_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(RuntimeError, match="LOG_LEVEL"):
        get_settings()
