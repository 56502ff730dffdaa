import logging

import pytest

from indexer_healthcheck.config import Settings, load_settings
from indexer_healthcheck.errors import ConfigError


def test_defaults_when_environment_is_empty():
    settings = load_settings({})

    assert settings == Settings()
    assert settings.redis_host == "event-cache"
    assert settings.redis_port == 6379
    assert settings.state_key == "last_mc_seqno"
    assert settings.max_delay == 300
    assert settings.timeout == 10.0
    assert settings.log_level == logging.WARNING
    assert settings.redis_addr == "event-cache:6379"


def test_values_read_from_environment():
    settings = load_settings(
        {
            "REDIS_HOST": "cache.local",
            "REDIS_PORT": "6380",
            "REDIS_STATE_KEY": "indexer_state",
            "MAX_DELAY_SECONDS": "60",
            "CHECK_TIMEOUT_SECONDS": "2.5",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.redis_addr == "cache.local:6380"
    assert settings.state_key == "indexer_state"
    assert settings.max_delay == 60
    assert settings.timeout == 2.5
    assert settings.log_level == logging.DEBUG


def test_empty_values_fall_back_to_defaults():
    settings = load_settings(
        {"REDIS_HOST": "", "REDIS_PORT": "", "REDIS_STATE_KEY": "", "MAX_DELAY_SECONDS": ""}
    )

    assert settings == Settings()


def test_reads_os_environ_by_default(monkeypatch):
    monkeypatch.setenv("MAX_DELAY_SECONDS", "42")
    monkeypatch.delenv("REDIS_HOST", raising=False)

    settings = load_settings()

    assert settings.max_delay == 42
    assert settings.redis_host == "event-cache"


@pytest.mark.parametrize("raw", ["abc", "3.5", " 300", "3_00", "0x10", "1e3"])
def test_max_delay_must_be_base10_integer(raw):
    with pytest.raises(ConfigError, match="Invalid MAX_DELAY_SECONDS value"):
        load_settings({"MAX_DELAY_SECONDS": raw})


def test_max_delay_accepts_explicit_sign_and_zero():
    assert load_settings({"MAX_DELAY_SECONDS": "+120"}).max_delay == 120
    assert load_settings({"MAX_DELAY_SECONDS": "0"}).max_delay == 0


def test_max_delay_rejects_negative_and_overflow():
    with pytest.raises(ConfigError, match="must not be negative"):
        load_settings({"MAX_DELAY_SECONDS": "-1"})
    with pytest.raises(ConfigError, match="out of range"):
        load_settings({"MAX_DELAY_SECONDS": str(2**63)})


@pytest.mark.parametrize("raw", ["redis", "0", "65536", "-1"])
def test_invalid_port(raw):
    with pytest.raises(ConfigError, match="Invalid REDIS_PORT value"):
        load_settings({"REDIS_PORT": raw})


@pytest.mark.parametrize("raw", ["soon", "0", "-3", "nan", "inf"])
def test_invalid_timeout(raw):
    with pytest.raises(ConfigError, match="Invalid CHECK_TIMEOUT_SECONDS value"):
        load_settings({"CHECK_TIMEOUT_SECONDS": raw})


def test_unknown_log_level_falls_back_to_warning():
    assert load_settings({"LOG_LEVEL": "chatty"}).log_level == logging.WARNING


def test_settings_are_immutable():
    settings = load_settings({})

    with pytest.raises(AttributeError):
        settings.max_delay = 1
