from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from jobly.core.errors import ConfigError

log = logging.getLogger("jobly.config")

DEV_SECRET_KEY = "secret-dev"
# bcrypt cost; test runs use the library minimum
BCRYPT_WORK_FACTOR = 13
TEST_BCRYPT_WORK_FACTOR = 4


@dataclass(frozen=True)
class JoblyConfig:
    env: str
    secret_key: str
    port: int
    database_url: str
    jwt_leeway_seconds: int = 30
    token_ttl_seconds: Optional[int] = None
    auth_enabled: bool = True
    bcrypt_work_factor: int = BCRYPT_WORK_FACTOR


def _truthy(v: Optional[str], default: bool) -> bool:
    if v is None or not v.strip():
        return default
    return v.strip().lower() not in ("0", "false", "no", "off")


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def database_url_for(env: str) -> str:
    """Test runs get a private in-memory database unless told otherwise."""
    explicit = (os.getenv("JOBLY_DATABASE_URL") or "").strip()
    if explicit:
        return explicit
    if env == "test":
        return "sqlite://"
    return "sqlite:///jobly.db"


def load_config() -> JoblyConfig:
    env = (os.getenv("JOBLY_ENV") or "dev").strip().lower()

    secret = (os.getenv("JOBLY_SECRET_KEY") or "").strip()
    if not secret:
        if env == "prod":
            raise ConfigError("JOBLY_SECRET_KEY must be set in prod")
        secret = DEV_SECRET_KEY

    return JoblyConfig(
        env=env,
        secret_key=secret,
        port=_int_env("JOBLY_PORT", 3001),
        database_url=database_url_for(env),
        jwt_leeway_seconds=_int_env("JOBLY_JWT_LEEWAY_SECONDS", 30),
        token_ttl_seconds=_int_env("JOBLY_TOKEN_TTL_SECONDS", None),
        auth_enabled=_truthy(os.getenv("JOBLY_AUTH_ENABLED"), True),
        bcrypt_work_factor=_int_env(
            "JOBLY_BCRYPT_WORK_FACTOR",
            TEST_BCRYPT_WORK_FACTOR if env == "test" else BCRYPT_WORK_FACTOR,
        ),
    )


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "****"
    return secret[:2] + "****" + secret[-2:]


def log_config(cfg: JoblyConfig) -> None:
    log.info(
        "jobly config env=%s port=%s database=%s secret_key=%s auth_enabled=%s bcrypt_work_factor=%s",
        cfg.env,
        cfg.port,
        cfg.database_url,
        _mask(cfg.secret_key),
        cfg.auth_enabled,
        cfg.bcrypt_work_factor,
    )
    if cfg.secret_key == DEV_SECRET_KEY:
        log.warning("Using the insecure dev secret key; set JOBLY_SECRET_KEY outside local dev")
