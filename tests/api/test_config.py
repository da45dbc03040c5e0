# tests/api/test_config.py  # Settings.from_env: lectura de entorno y defaults.

import pytest

from contact_api.config import LOCAL_DEV_ORIGIN, Settings

ENV_VARS = [
    "APP_ENV", "SENDGRID_API_KEY", "CONTACT_FORM_EMAIL", "PUBLIC_SITE_URL", "EMAIL_FROM",
    "EMAIL_SENDER_NAME", "DEV_EMAIL_FROM", "DEV_EMAIL_SENDER_NAME", "DEV_EMAIL_TO",
    "SITE_NAME", "OWNER_NAME", "DRY_RUN", "CONTACT_ESCAPE_HTML", "ALERT_WEBHOOK_URL",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_defaults_are_production_without_credentials(clean_env):
    settings = Settings.from_env()
    assert settings.environment == "production"
    assert settings.sendgrid_api_key is None
    assert settings.contact_form_email is None
    assert settings.dry_run is False and settings.escape_html is False
    assert settings.allowed_origins == [LOCAL_DEV_ORIGIN, LOCAL_DEV_ORIGIN]


def test_values_are_read_and_trimmed(clean_env):
    clean_env.setenv("APP_ENV", " Development ")
    clean_env.setenv("SENDGRID_API_KEY", " SG.abc ")
    clean_env.setenv("CONTACT_FORM_EMAIL", "me@example.com")
    clean_env.setenv("PUBLIC_SITE_URL", "https://me.example.com/")
    clean_env.setenv("DRY_RUN", "1")
    settings = Settings.from_env()
    assert settings.is_development
    assert settings.sendgrid_api_key == "SG.abc"
    assert settings.dry_run is True
    assert settings.allowed_origins == ["https://me.example.com", LOCAL_DEV_ORIGIN]


def test_unknown_environment_falls_back_to_production(clean_env):
    clean_env.setenv("APP_ENV", "staging")
    assert Settings.from_env().environment == "production"


def test_blank_text_overrides_keep_defaults(clean_env):
    clean_env.setenv("EMAIL_FROM", "   ")
    assert Settings.from_env().email_from == Settings().email_from


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(Exception):
        settings.environment = "development"
