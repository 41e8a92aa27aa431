"""Companies: create, search, read, partial update, delete."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql.filters import company_filter
from jobly.core.sql.names import COMPANY_NAMES
from jobly.core.sql.partial_update import sql_for_partial_update
from jobly.core.storage.database import Database
from jobly.models.job import job_row

log = logging.getLogger("jobly.models")

_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


class CompanyRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        data: {handle, name, description, numEmployees, logoUrl}

        Raises BadRequestError if the handle is taken.
        """
        handle = data["handle"]
        if self.db.query_one("SELECT handle FROM companies WHERE handle = $1", [handle]):
            raise BadRequestError(f"Duplicate company: {handle}")

        company = self.db.query_one(
            f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        log.info("company created handle=%s", handle)
        return company

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        All companies ordered by name, optionally narrowed by
        nameLike / minEmployees / maxEmployees.
        """
        pred = company_filter(filters or {}).render(self.db.dialect)
        return self.db.query(
            f"""SELECT {_COLUMNS}
                FROM companies
                {pred.where()}
                ORDER BY name""",
            pred.values,
        )

    def get(self, handle: str) -> Dict[str, Any]:
        """Company plus its jobs: [{id, title, salary, equity}, ...]."""
        company = self.db.query_one(
            f"""SELECT {_COLUMNS}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        if not company:
            raise NotFoundError(f"No company: {handle}")

        jobs = self.db.query(
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        )
        company["jobs"] = [job_row(j) for j in jobs]
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the supplied fields change.

        data may hold {name, description, numEmployees, logoUrl}.
        """
        clause = sql_for_partial_update(data, COMPANY_NAMES)
        company = self.db.query_one(
            f"""UPDATE companies
                SET {clause.set_clause}
                WHERE handle = {clause.next_placeholder}
                RETURNING {_COLUMNS}""",
            [*clause.values, handle],
        )
        if not company:
            raise NotFoundError(f"No company: {handle}")
        return company

    def remove(self, handle: str) -> None:
        row = self.db.query_one(
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        )
        if not row:
            raise NotFoundError(f"No company: {handle}")
        log.info("company removed handle=%s", handle)
