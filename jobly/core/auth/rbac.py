from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Request

from jobly.api.observability.metrics import AUTHZ_DECISIONS_TOTAL
from jobly.core.auth.decision import authorize
from jobly.core.auth.models import AccessLevel, IdentityClaims, admin_or_self
from jobly.core.errors import JoblyError

log = logging.getLogger("jobly.auth")


def current_identity(request: Request) -> Optional[IdentityClaims]:
    return getattr(request.state, "identity", None)


def _enforce(request: Request, level: AccessLevel) -> Optional[IdentityClaims]:
    identity = current_identity(request)
    subject = identity.subject_id if identity else None
    try:
        authorize(identity, level)
    except JoblyError as e:
        AUTHZ_DECISIONS_TOTAL.labels(decision="deny", required_level=str(level)).inc()
        log.info(
            "authz deny subject=%s required=%s status=%s method=%s path=%s",
            subject,
            level,
            e.status,
            request.method,
            request.url.path,
        )
        raise

    AUTHZ_DECISIONS_TOTAL.labels(decision="allow", required_level=str(level)).inc()
    return identity


def require_access(level: AccessLevel) -> Callable:
    """
    FastAPI dependency-style access check.
    Example:
      Depends(require_access(ADMIN))
    """

    def dependency(request: Request) -> Optional[IdentityClaims]:
        return _enforce(request, level)

    return dependency


def require_admin_or_self(path_param: str = "username") -> Callable:
    """Admin, or the principal named by the route's path parameter."""

    def dependency(request: Request) -> Optional[IdentityClaims]:
        return _enforce(request, admin_or_self(request.path_params[path_param]))

    return dependency
