"""Jobs: create, search, read, partial update, delete."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql.filters import job_filter
from jobly.core.sql.names import JOB_NAMES
from jobly.core.sql.partial_update import sql_for_partial_update
from jobly.core.storage.database import Database

log = logging.getLogger("jobly.models")

_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# a job never moves to another company and never changes id
_FROZEN_FIELDS = frozenset({"id", "companyHandle", "company_handle"})


def job_row(row: Dict[str, Any]) -> Dict[str, Any]:
    # NUMERIC comes back as Decimal from postgres
    equity = row.get("equity")
    if isinstance(equity, Decimal):
        row["equity"] = float(equity)
    return row


class JobRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """data: {title, salary, equity, companyHandle}"""
        handle = data["companyHandle"]
        if not self.db.query_one("SELECT handle FROM companies WHERE handle = $1", [handle]):
            raise BadRequestError(f"No company: {handle}")

        job = self.db.query_one(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), handle],
        )
        log.info("job created id=%s company=%s", job["id"], handle)
        return job_row(job)

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """All jobs ordered by id, optionally narrowed by title / minSalary / hasEquity."""
        pred = job_filter(filters or {}).render(self.db.dialect)
        rows = self.db.query(
            f"""SELECT {_COLUMNS}
                FROM jobs
                {pred.where()}
                ORDER BY id""",
            pred.values,
        )
        return [job_row(r) for r in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        job = self.db.query_one(
            f"""SELECT {_COLUMNS}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        )
        if not job:
            raise NotFoundError(f"No job: {job_id}")
        return job_row(job)

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Partial update of {title, salary, equity}."""
        frozen = _FROZEN_FIELDS.intersection(data)
        if frozen:
            raise BadRequestError(f"Cannot update: {', '.join(sorted(frozen))}")

        clause = sql_for_partial_update(data, JOB_NAMES)
        job = self.db.query_one(
            f"""UPDATE jobs
                SET {clause.set_clause}
                WHERE id = {clause.next_placeholder}
                RETURNING {_COLUMNS}""",
            [*clause.values, job_id],
        )
        if not job:
            raise NotFoundError(f"No job: {job_id}")
        return job_row(job)

    def remove(self, job_id: int) -> None:
        row = self.db.query_one(
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
        )
        if not row:
            raise NotFoundError(f"No job: {job_id}")
        log.info("job removed id=%s", job_id)
