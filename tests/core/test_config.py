"""Unit tests for src/core/config.py"""

import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.config import Settings, configure_logging


def test_defaults() -> None:
    settings = Settings()
    assert settings.commission_rate == Decimal("0.10")
    assert settings.min_stake == Decimal("0")
    assert settings.max_stake is None
    assert not settings.men_capture_backward
    assert not settings.flying_kings
    assert not settings.promotion_ends_chain


def test_from_env() -> None:
    environ = {
        "CHECKERS_COMMISSION_RATE": "0.05",
        "CHECKERS_MAX_STAKE": "500",
        "CHECKERS_FLYING_KINGS": "true",
        "CHECKERS_DATABASE_URL": "sqlite:///:memory:",
        "UNRELATED": "ignored",
    }
    settings = Settings.from_env(environ)
    assert settings.commission_rate == Decimal("0.05")
    assert settings.max_stake == Decimal("500")
    assert settings.flying_kings
    assert not settings.men_capture_backward
    assert settings.database_url == "sqlite:///:memory:"


def test_from_empty_env_gives_defaults() -> None:
    assert Settings.from_env({}) == Settings()


@pytest.mark.parametrize("rate", ["-0.01", "1.5", "ten percent"])
def test_invalid_commission_rate(rate: str) -> None:
    with pytest.raises(ValidationError):
        Settings.from_env({"CHECKERS_COMMISSION_RATE": rate})


def test_stake_limits_must_make_sense() -> None:
    with pytest.raises(ValidationError):
        Settings(min_stake=Decimal("10"), max_stake=Decimal("10"))


def test_settings_are_frozen() -> None:
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.flying_kings = True  # type: ignore[misc]


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(Settings(log_level="debug"))
    assert calls[0]["level"] == "DEBUG"


@pytest.mark.parametrize("level", ["debug", "INFO", "Warning"])
def test_log_level_is_normalized(level: str) -> None:
    assert Settings(log_level=level).log_level == level.upper()


@pytest.mark.parametrize("level", ["LOUD", "", "verbose"])
def test_unknown_log_level_fails_when_parsing(level: str) -> None:
    with pytest.raises(ValidationError):
        Settings.from_env({"CHECKERS_LOG_LEVEL": level})
