from __future__ import annotations

from typing import Optional

from jobly.core.auth.models import AccessKind, AccessLevel, IdentityClaims
from jobly.core.errors import ForbiddenError, UnauthorizedError


def authorize(identity: Optional[IdentityClaims], level: AccessLevel) -> None:
    """
    Allow (return None) or raise.

    No identity where one is needed -> UnauthorizedError (401).
    Identity present but not enough -> ForbiddenError (403).
    """
    if level.kind is AccessKind.PUBLIC:
        return

    if identity is None:
        raise UnauthorizedError()

    if level.kind is AccessKind.AUTHENTICATED:
        return

    if identity.is_admin:
        return

    if level.kind is AccessKind.ADMIN_OR_SELF and identity.subject_id == level.subject_id:
        return

    raise ForbiddenError()


def is_allowed(identity: Optional[IdentityClaims], level: AccessLevel) -> bool:
    try:
        authorize(identity, level)
    except (UnauthorizedError, ForbiddenError):
        return False
    return True
