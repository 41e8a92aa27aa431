from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from jobly.core.auth.models import ADMIN, PUBLIC
from jobly.core.auth.rbac import require_access
from jobly.core.storage.database import Database, get_db
from jobly.models.job import JobRepository

router = APIRouter(prefix="/jobs", tags=["jobs"])


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)
    companyHandle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseModel):
    # id and companyHandle are not updatable: extra keys are rejected
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)


def _repo(db: Database = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


@router.get("")
def list_jobs(
    request: Request,
    _=Depends(require_access(PUBLIC)),
    repo: JobRepository = Depends(_repo),
):
    """Query params: title, minSalary, hasEquity. Anything else is a 400."""
    return {"jobs": repo.find_all(dict(request.query_params))}


@router.post("", status_code=201)
def create_job(
    payload: JobNew,
    _=Depends(require_access(ADMIN)),
    repo: JobRepository = Depends(_repo),
):
    return {"job": repo.create(payload.model_dump())}


@router.get("/{job_id}")
def get_job(
    job_id: int,
    _=Depends(require_access(PUBLIC)),
    repo: JobRepository = Depends(_repo),
):
    return {"job": repo.get(job_id)}


@router.patch("/{job_id}")
def update_job(
    job_id: int,
    payload: JobUpdate,
    _=Depends(require_access(ADMIN)),
    repo: JobRepository = Depends(_repo),
):
    return {"job": repo.update(job_id, payload.model_dump(exclude_unset=True))}


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    _=Depends(require_access(ADMIN)),
    repo: JobRepository = Depends(_repo),
):
    repo.remove(job_id)
    return {"deleted": job_id}
