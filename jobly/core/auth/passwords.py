from __future__ import annotations

import logging
from typing import Optional

import bcrypt

from jobly.core.config import JoblyConfig
from jobly.core.errors import BadRequestError

log = logging.getLogger("jobly.auth")

# bcrypt ignores everything past 72 bytes; longer input is refused, not truncated
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise BadRequestError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return raw


class PasswordHasher:
    """
    bcrypt behind hash()/verify().

    Stored values are the standard "$2b$<cost>$..." strings, so a changed
    work factor only affects new hashes; old ones keep verifying.
    """

    def __init__(self, rounds: int = 13):
        self.rounds = rounds

    @classmethod
    def from_config(cls, cfg: JoblyConfig) -> "PasswordHasher":
        return cls(rounds=cfg.bcrypt_work_factor)

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, hashed: Optional[str]) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("ascii"))
        except BadRequestError:
            return False
        except ValueError:
            log.warning("stored password is not a bcrypt hash")
            return False
