from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from jobly.core.auth.provider import JwtConfig, TokenVerifier, extract_bearer
from jobly.core.config import load_config

log = logging.getLogger("jobly.auth")


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Authenticate, never authorize.

    A valid bearer token puts IdentityClaims on request.state.identity.
    No token, or a token that fails verification, leaves it as None;
    route dependencies decide whether that is acceptable.
    """

    def __init__(self, app, *, enabled: bool = True, verifier: Optional[TokenVerifier] = None):
        super().__init__(app)
        self.enabled = enabled
        self.verifier = verifier

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.identity = None

        if not self.enabled:
            return await call_next(request)

        if self.verifier is None:
            self.verifier = TokenVerifier(JwtConfig.from_config(load_config()))

        token = extract_bearer(request.headers.get("authorization"))
        if token:
            identity = self.verifier.verify(token)
            if identity is None:
                log.info("authn failed method=%s path=%s", request.method, request.url.path)
            request.state.identity = identity

        return await call_next(request)
