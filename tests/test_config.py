"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from finboard.config import BaseConfig, DevConfig, TestConfig


def test_defaults(config):
    assert config.GATEWAY == "sqlmodel"
    assert config.LOCALE == "en"
    assert config.MONTHLY_SERIES_ORDER == "chronological"
    assert config.ENFORCE_CATEGORY_KIND is True
    assert config.SEED_DEFAULT_CATEGORIES is False
    assert config.DATA_DIR.is_dir()
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_dev_config_seeds_categories(test_env):
    assert DevConfig().SEED_DEFAULT_CATEGORIES is True
    assert TestConfig.TESTING is True


def test_overrides_are_read_from_env(test_env, monkeypatch):
    monkeypatch.setenv("FINBOARD_LOCALE", "pt_BR")
    monkeypatch.setenv("FINBOARD_MONTHLY_SERIES_ORDER", "first_seen")
    monkeypatch.setenv("FINBOARD_ENFORCE_CATEGORY_KIND", "off")
    monkeypatch.setenv("FINBOARD_GATEWAY_TIMEOUT", "2.5")

    config = BaseConfig()

    assert config.LOCALE == "pt_BR"
    assert config.MONTHLY_SERIES_ORDER == "first_seen"
    assert config.ENFORCE_CATEGORY_KIND is False
    assert config.GATEWAY_TIMEOUT == 2.5


def test_rest_gateway_requires_url_and_key(test_env, monkeypatch):
    monkeypatch.setenv("FINBOARD_GATEWAY", "rest")
    monkeypatch.delenv("FINBOARD_GATEWAY_URL", raising=False)
    monkeypatch.delenv("FINBOARD_GATEWAY_KEY", raising=False)
    with pytest.raises(ValueError, match="FINBOARD_GATEWAY_URL"):
        BaseConfig()

    monkeypatch.setenv("FINBOARD_GATEWAY_URL", "https://project.example.co/")
    monkeypatch.setenv("FINBOARD_GATEWAY_KEY", "anon-key")
    assert BaseConfig().GATEWAY_URL == "https://project.example.co"


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("FINBOARD_GATEWAY", "firebase", "FINBOARD_GATEWAY must be one of"),
        ("FINBOARD_MONTHLY_SERIES_ORDER", "random", "FINBOARD_MONTHLY_SERIES_ORDER"),
        ("FINBOARD_LOCALE", "fr", "FINBOARD_LOCALE"),
        ("FINBOARD_GATEWAY_TIMEOUT", "soon", "FINBOARD_GATEWAY_TIMEOUT"),
    ],
)
def test_invalid_values_are_rejected(test_env, monkeypatch, name, value, message):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=message):
        BaseConfig()


def test_secret_key_required_outside_dev_mode(test_env, monkeypatch):
    monkeypatch.setenv("FINBOARD_DEV_MODE", "false")
    monkeypatch.delenv("FINBOARD_SECRET_KEY", raising=False)
    with pytest.raises(ValueError, match="FINBOARD_SECRET_KEY"):
        BaseConfig()

    monkeypatch.setenv("FINBOARD_SECRET_KEY", "not-the-default")
    assert BaseConfig().DEV_MODE is False
