from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from jobly.core.auth.models import ADMIN, PUBLIC
from jobly.core.auth.rbac import require_access
from jobly.core.storage.database import Database, get_db
from jobly.models.company import CompanyRepository

router = APIRouter(prefix="/companies", tags=["companies"])


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None


def _repo(db: Database = Depends(get_db)) -> CompanyRepository:
    return CompanyRepository(db)


@router.get("")
def list_companies(
    request: Request,
    _=Depends(require_access(PUBLIC)),
    repo: CompanyRepository = Depends(_repo),
):
    """Query params: nameLike, minEmployees, maxEmployees. Anything else is a 400."""
    return {"companies": repo.find_all(dict(request.query_params))}


@router.post("", status_code=201)
def create_company(
    payload: CompanyNew,
    _=Depends(require_access(ADMIN)),
    repo: CompanyRepository = Depends(_repo),
):
    return {"company": repo.create(payload.model_dump())}


@router.get("/{handle}")
def get_company(
    handle: str,
    _=Depends(require_access(PUBLIC)),
    repo: CompanyRepository = Depends(_repo),
):
    return {"company": repo.get(handle)}


@router.patch("/{handle}")
def update_company(
    handle: str,
    payload: CompanyUpdate,
    _=Depends(require_access(ADMIN)),
    repo: CompanyRepository = Depends(_repo),
):
    return {"company": repo.update(handle, payload.model_dump(exclude_unset=True))}


@router.delete("/{handle}")
def delete_company(
    handle: str,
    _=Depends(require_access(ADMIN)),
    repo: CompanyRepository = Depends(_repo),
):
    repo.remove(handle)
    return {"deleted": handle}
