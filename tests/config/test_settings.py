"""Tests for Settings loading and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from workallocation.config.logging import configure_logging
from workallocation.config.settings import Environment, LogLevel, Settings


class TestSettings:

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WORK_ORDER_INDEX", raising=False)
        settings = Settings(_env_file=None)
        assert settings.WORK_ORDER_INDEX == "workorder"
        assert settings.WORK_ALLOCATION_INDEX == "workallocationv2"
        assert settings.WORK_ORDER_INDEX_TYPE == "_doc"
        assert settings.WORK_ORDER_UPDATE_RETRIES == 3
        assert settings.LOG_LEVEL == LogLevel.INFO
        assert not settings.is_production

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORK_ORDER_INDEX", "wo_v3")
        monkeypatch.setenv("frac_service_url", "http://frac.internal")
        monkeypatch.setenv("ENVIRONMENT", "prod")
        settings = Settings(_env_file=None)
        assert settings.WORK_ORDER_INDEX == "wo_v3"
        assert settings.FRAC_SERVICE_URL == "http://frac.internal"
        assert settings.ENVIRONMENT == Environment.PROD
        assert settings.is_production

    def test_retries_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, WORK_ORDER_UPDATE_RETRIES=0)

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, HTTP_TIMEOUT_SECONDS=0)


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(Settings(_env_file=None, LOG_LEVEL=LogLevel.WARNING))
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
