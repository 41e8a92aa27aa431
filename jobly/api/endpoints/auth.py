from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from jobly.core.auth.models import AUTHENTICATED, PUBLIC, IdentityClaims
from jobly.core.auth.passwords import PasswordHasher
from jobly.core.auth.provider import JwtConfig, create_token
from jobly.core.auth.rbac import require_access
from jobly.core.config import load_config
from jobly.core.storage.database import Database, get_db
from jobly.models.user import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    firstName: str = Field(min_length=1)
    lastName: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=EMAIL_PATTERN)


def get_jwt_config() -> JwtConfig:
    return JwtConfig.from_config(load_config())


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher.from_config(load_config())


def user_repo(
    db: Database = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserRepository:
    return UserRepository(db, hasher)


@router.post("/token")
def issue_token(
    payload: TokenRequest,
    _=Depends(require_access(PUBLIC)),
    repo: UserRepository = Depends(user_repo),
    jwt_cfg: JwtConfig = Depends(get_jwt_config),
):
    """Username + password -> {"token"}. Wrong either way is the same 401."""
    user = repo.authenticate(payload.username, payload.password)
    return {"token": create_token(user["username"], user["isAdmin"], jwt_cfg)}


@router.post("/register", status_code=201)
def register(
    payload: RegisterRequest,
    _=Depends(require_access(PUBLIC)),
    repo: UserRepository = Depends(user_repo),
    jwt_cfg: JwtConfig = Depends(get_jwt_config),
):
    """Self-service signup; never creates an admin."""
    user = repo.create({**payload.model_dump(), "isAdmin": False})
    return {"token": create_token(user["username"], user["isAdmin"], jwt_cfg)}


@router.get("/me")
def whoami(
    identity: IdentityClaims = Depends(require_access(AUTHENTICATED)),
    repo: UserRepository = Depends(user_repo),
):
    return {"user": repo.get(identity.subject_id)}
