from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class IdentityClaims:
    subject_id: str
    is_admin: bool = False


class AccessKind(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    ADMIN_OR_SELF = "admin_or_self"


@dataclass(frozen=True)
class AccessLevel:
    kind: AccessKind
    subject_id: Optional[str] = None

    def __post_init__(self):
        if (self.kind is AccessKind.ADMIN_OR_SELF) != (self.subject_id is not None):
            raise ValueError("subject_id is required for admin_or_self and only for it")

    def __str__(self) -> str:
        return self.kind.value


PUBLIC = AccessLevel(AccessKind.PUBLIC)
AUTHENTICATED = AccessLevel(AccessKind.AUTHENTICATED)
ADMIN = AccessLevel(AccessKind.ADMIN)


def admin_or_self(subject_id: str) -> AccessLevel:
    return AccessLevel(AccessKind.ADMIN_OR_SELF, subject_id=subject_id)
