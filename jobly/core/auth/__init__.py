from .decision import authorize, is_allowed
from .models import ADMIN, AUTHENTICATED, PUBLIC, AccessKind, AccessLevel, IdentityClaims, admin_or_self
from .passwords import PasswordHasher
from .provider import JwtConfig, TokenVerifier, create_token, extract_bearer

__all__ = [
    "ADMIN",
    "AUTHENTICATED",
    "PUBLIC",
    "AccessKind",
    "AccessLevel",
    "IdentityClaims",
    "JwtConfig",
    "PasswordHasher",
    "TokenVerifier",
    "admin_or_self",
    "authorize",
    "create_token",
    "extract_bearer",
    "is_allowed",
]
