import pytest

from attendance_records.config import get_settings_module, load_settings


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "attendance_records.config.production"),
        ("PROD", "attendance_records.config.production"),
        ("testing", "attendance_records.config.testing"),
        ("test", "attendance_records.config.testing"),
        ("development", "attendance_records.config.development"),
        ("anything-else", "attendance_records.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_development_is_the_default(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "attendance_records.config.development"


def test_testing_settings_defaults(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    settings = load_settings()

    assert settings.MONGO_COLLECTION == "records"
    assert settings.HTTP_PORT == 8080
    assert settings.DISPLAY_TIMEZONE == "Asia/Kolkata"
    assert settings.DISPLAY_TIMEZONE_LABEL == "IST"
