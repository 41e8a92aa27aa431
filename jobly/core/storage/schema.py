from __future__ import annotations

from typing import List

from jobly.core.storage.database import Database

_JOB_ID = {
    "postgresql": "SERIAL PRIMARY KEY",
    "sqlite": "INTEGER PRIMARY KEY AUTOINCREMENT",
}


def schema_statements(dialect_name: str) -> List[str]:
    job_id = _JOB_ID.get(dialect_name, _JOB_ID["postgresql"])
    return [
        """
        CREATE TABLE IF NOT EXISTS companies (
            handle VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
            name TEXT UNIQUE NOT NULL,
            num_employees INTEGER CHECK (num_employees >= 0),
            description TEXT NOT NULL,
            logo_url TEXT
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS jobs (
            id {job_id},
            title TEXT NOT NULL,
            salary INTEGER CHECK (salary >= 0),
            equity NUMERIC CHECK (equity <= 1.0),
            company_handle VARCHAR(25) NOT NULL
                REFERENCES companies ON DELETE CASCADE
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS users (
            username VARCHAR(25) PRIMARY KEY,
            password TEXT NOT NULL,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            email TEXT NOT NULL,
            is_admin BOOLEAN NOT NULL DEFAULT FALSE
        )
        """,
    ]


def create_schema(db: Database) -> None:
    db.execute_script(schema_statements(db.dialect.name))


def clear_all(db: Database) -> None:
    db.execute_script(["DELETE FROM jobs", "DELETE FROM companies", "DELETE FROM users"])
