from __future__ import annotations

import logging

import pytest

from jobly.core.config import DEV_SECRET_KEY, load_config, log_config
from jobly.core.errors import ConfigError

_VARS = (
    "JOBLY_ENV",
    "JOBLY_SECRET_KEY",
    "JOBLY_PORT",
    "JOBLY_DATABASE_URL",
    "JOBLY_JWT_LEEWAY_SECONDS",
    "JOBLY_TOKEN_TTL_SECONDS",
    "JOBLY_AUTH_ENABLED",
    "JOBLY_BCRYPT_WORK_FACTOR",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_dev_defaults(clean_env):
    cfg = load_config()
    assert cfg.env == "dev"
    assert cfg.secret_key == DEV_SECRET_KEY
    assert cfg.port == 3001
    assert cfg.database_url == "sqlite:///jobly.db"
    assert cfg.jwt_leeway_seconds == 30
    assert cfg.token_ttl_seconds is None
    assert cfg.auth_enabled is True
    assert cfg.bcrypt_work_factor == 13


def test_test_env_uses_memory_db(clean_env):
    clean_env.setenv("JOBLY_ENV", "test")
    cfg = load_config()
    assert cfg.database_url == "sqlite://"
    assert cfg.bcrypt_work_factor == 4


def test_bcrypt_work_factor_override(clean_env):
    clean_env.setenv("JOBLY_BCRYPT_WORK_FACTOR", "10")
    assert load_config().bcrypt_work_factor == 10


def test_explicit_database_url_wins(clean_env):
    clean_env.setenv("JOBLY_ENV", "test")
    clean_env.setenv("JOBLY_DATABASE_URL", "postgresql+psycopg://localhost/jobly_test")
    assert load_config().database_url == "postgresql+psycopg://localhost/jobly_test"


def test_prod_requires_secret(clean_env):
    clean_env.setenv("JOBLY_ENV", "prod")
    with pytest.raises(ConfigError):
        load_config()
    clean_env.setenv("JOBLY_SECRET_KEY", "a-real-secret")
    assert load_config().secret_key == "a-real-secret"


def test_int_parsing(clean_env):
    clean_env.setenv("JOBLY_PORT", "8080")
    clean_env.setenv("JOBLY_TOKEN_TTL_SECONDS", "3600")
    cfg = load_config()
    assert cfg.port == 8080
    assert cfg.token_ttl_seconds == 3600

    clean_env.setenv("JOBLY_PORT", "eighty")
    with pytest.raises(ConfigError):
        load_config()


@pytest.mark.parametrize("raw, expected", [("0", False), ("false", False), ("no", False), ("1", True), ("", True)])
def test_auth_enabled_flag(clean_env, raw, expected):
    clean_env.setenv("JOBLY_AUTH_ENABLED", raw)
    assert load_config().auth_enabled is expected


def test_log_config_masks_secret_and_warns_on_dev_key(clean_env, caplog):
    with caplog.at_level(logging.INFO, logger="jobly.config"):
        log_config(load_config())
    text = caplog.text
    assert DEV_SECRET_KEY not in text
    assert any(r.levelno == logging.WARNING and "insecure" in r.message for r in caplog.records)


def test_log_config_does_not_leak_real_secret(clean_env, caplog):
    clean_env.setenv("JOBLY_SECRET_KEY", "super-secret-value")
    with caplog.at_level(logging.INFO, logger="jobly.config"):
        log_config(load_config())
    assert "super-secret-value" not in caplog.text
    assert not any(r.levelno == logging.WARNING for r in caplog.records)
