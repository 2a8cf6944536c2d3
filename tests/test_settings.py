from datetime import datetime, timedelta, timezone

import pytest

from app import config as app_config
from app.utils import datetime as app_datetime


@pytest.fixture()
def configured(monkeypatch):
    """Reload settings and the cached timezone from the patched environment."""

    def _configure(**environment):
        for key, value in environment.items():
            monkeypatch.setenv(key, value)
        app_config.reset_settings_cache()
        app_datetime.get_app_timezone.cache_clear()
        return app_config.get_settings()

    yield _configure
    app_config.reset_settings_cache()
    app_datetime.get_app_timezone.cache_clear()


def test_log_level_is_normalized(configured):
    settings = configured(LOG_LEVEL="debug")

    assert settings.log_level == "DEBUG"


def test_unknown_log_level_is_rejected(configured):
    with pytest.raises(ValueError):
        configured(LOG_LEVEL="chatty")


def test_offset_timezone(configured):
    configured(APP_TIMEZONE="UTC-05:00")

    assert app_datetime.get_app_timezone() == timezone(-timedelta(hours=5))


def test_unknown_timezone_falls_back_to_utc(configured):
    configured(APP_TIMEZONE="Mars/Olympus_Mons")

    assert app_datetime.get_app_timezone() == timezone.utc


def test_naive_values_are_read_in_app_timezone(configured):
    configured(APP_TIMEZONE="UTC+02:00")

    value = app_datetime.ensure_app_timezone(datetime(2024, 5, 1, 12, 0))

    assert value.utcoffset() == timedelta(hours=2)
    assert value.hour == 12
    assert app_datetime.ensure_app_timezone(None) is None
