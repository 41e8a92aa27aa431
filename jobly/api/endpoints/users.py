from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from jobly.api.endpoints.auth import EMAIL_PATTERN, get_jwt_config, user_repo
from jobly.core.auth.models import ADMIN, IdentityClaims
from jobly.core.auth.provider import JwtConfig, create_token
from jobly.core.auth.rbac import require_access, require_admin_or_self
from jobly.core.errors import ForbiddenError
from jobly.models.user import UserRepository

router = APIRouter(prefix="/users", tags=["users"])


class UserNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    firstName: str = Field(min_length=1)
    lastName: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=EMAIL_PATTERN)
    isAdmin: bool = False


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    password: Optional[str] = Field(default=None, min_length=5, max_length=72)
    firstName: Optional[str] = Field(default=None, min_length=1)
    lastName: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3, pattern=EMAIL_PATTERN)
    isAdmin: Optional[bool] = None


@router.get("")
def list_users(
    _=Depends(require_access(ADMIN)),
    repo: UserRepository = Depends(user_repo),
):
    return {"users": repo.find_all()}


@router.post("", status_code=201)
def create_user(
    payload: UserNew,
    _=Depends(require_access(ADMIN)),
    repo: UserRepository = Depends(user_repo),
    jwt_cfg: JwtConfig = Depends(get_jwt_config),
):
    """Admin-only; returns the new user plus a token for them."""
    user = repo.create(payload.model_dump())
    token = create_token(user["username"], user["isAdmin"], jwt_cfg)
    return {"user": user, "token": token}


@router.get("/{username}")
def get_user(
    username: str,
    _=Depends(require_admin_or_self("username")),
    repo: UserRepository = Depends(user_repo),
):
    return {"user": repo.get(username)}


@router.patch("/{username}")
def update_user(
    username: str,
    payload: UserUpdate,
    identity: IdentityClaims = Depends(require_admin_or_self("username")),
    repo: UserRepository = Depends(user_repo),
):
    data = payload.model_dump(exclude_unset=True)
    if "isAdmin" in data and not identity.is_admin:
        raise ForbiddenError("Only admins can change isAdmin")
    return {"user": repo.update(username, data)}


@router.delete("/{username}")
def delete_user(
    username: str,
    _=Depends(require_admin_or_self("username")),
    repo: UserRepository = Depends(user_repo),
):
    repo.remove(username)
    return {"deleted": username}
