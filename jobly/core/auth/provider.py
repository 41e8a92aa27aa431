from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import jwt

from jobly.core.auth.models import IdentityClaims
from jobly.core.config import JoblyConfig

log = logging.getLogger("jobly.auth")

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class JwtConfig:
    secret_key: str
    algorithm: str = _ALGORITHM
    leeway_seconds: int = 30
    token_ttl_seconds: Optional[int] = None

    @classmethod
    def from_config(cls, cfg: JoblyConfig) -> "JwtConfig":
        return cls(
            secret_key=cfg.secret_key,
            leeway_seconds=cfg.jwt_leeway_seconds,
            token_ttl_seconds=cfg.token_ttl_seconds,
        )


def extract_bearer(auth_header: Optional[str]) -> Optional[str]:
    """'Bearer abc' / 'bearer abc' -> 'abc'. Anything else -> None."""
    if not auth_header:
        return None
    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def _claims_from_payload(payload: Mapping[str, Any]) -> Optional[IdentityClaims]:
    username = payload.get("username")
    is_admin = payload.get("isAdmin", False)
    if not isinstance(username, str) or not username:
        return None
    if not isinstance(is_admin, bool):
        return None
    return IdentityClaims(subject_id=username, is_admin=is_admin)


class TokenVerifier:
    """
    Verifies HS256 bearer tokens issued by create_token().

    verify() never raises: a bad token is the same as no token.
    """

    def __init__(self, cfg: JwtConfig):
        self.cfg = cfg

    def verify(self, token: Optional[str]) -> Optional[IdentityClaims]:
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self.cfg.secret_key,
                algorithms=[self.cfg.algorithm],
                leeway=self.cfg.leeway_seconds,
            )
        except jwt.PyJWTError as e:
            log.info("token rejected reason=%s", type(e).__name__)
            return None

        claims = _claims_from_payload(payload)
        if claims is None:
            log.info("token rejected reason=bad_payload")
        return claims


def create_token(subject_id: str, is_admin: bool, cfg: JwtConfig) -> str:
    payload: Dict[str, Any] = {
        "username": subject_id,
        "isAdmin": bool(is_admin),
        "iat": int(time.time()),
    }
    if cfg.token_ttl_seconds:
        payload["exp"] = payload["iat"] + int(cfg.token_ttl_seconds)
    return jwt.encode(payload, cfg.secret_key, algorithm=cfg.algorithm)
