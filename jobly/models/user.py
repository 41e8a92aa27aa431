from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from jobly.core.auth.passwords import PasswordHasher
from jobly.core.config import load_config
from jobly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.sql.names import USER_NAMES
from jobly.core.sql.partial_update import sql_for_partial_update
from jobly.core.storage.database import Database

log = logging.getLogger("jobly.models")

# password is never selected into a returned row
_COLUMNS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'


def _user_row(row: Dict[str, Any]) -> Dict[str, Any]:
    # sqlite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


class UserRepository:
    def __init__(self, db: Database, hasher: Optional[PasswordHasher] = None):
        self.db = db
        self.hasher = hasher or PasswordHasher.from_config(load_config())

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """The user row when the password matches; UnauthorizedError otherwise."""
        row = self.db.query_one("SELECT password FROM users WHERE username = $1", [username])
        if row is None or not self.hasher.verify(password, row["password"]):
            log.info("login failed username=%s", username)
            raise UnauthorizedError("Invalid username/password")
        return self.get(username)

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        username = data["username"]
        if self.db.query_one("SELECT username FROM users WHERE username = $1", [username]):
            raise BadRequestError(f"Duplicate username: {username}")

        user = self.db.query_one(
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {_COLUMNS}""",
            [
                username,
                self.hasher.hash(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )
        log.info("user created username=%s is_admin=%s", username, user["isAdmin"])
        return _user_row(user)

    def find_all(self) -> List[Dict[str, Any]]:
        rows = self.db.query(
            f"""SELECT {_COLUMNS}
                FROM users
                ORDER BY username"""
        )
        return [_user_row(r) for r in rows]

    def get(self, username: str) -> Dict[str, Any]:
        user = self.db.query_one(
            f"""SELECT {_COLUMNS}
                FROM users
                WHERE username = $1""",
            [username],
        )
        if not user:
            raise NotFoundError(f"No user: {username}")
        return _user_row(user)

    def update(self, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Partial update of {firstName, lastName, email, isAdmin, password}."""
        if data.get("password") is not None:
            data = {**data, "password": self.hasher.hash(data["password"])}
        clause = sql_for_partial_update(data, USER_NAMES)
        user = self.db.query_one(
            f"""UPDATE users
                SET {clause.set_clause}
                WHERE username = {clause.next_placeholder}
                RETURNING {_COLUMNS}""",
            [*clause.values, username],
        )
        if not user:
            raise NotFoundError(f"No user: {username}")
        return _user_row(user)

    def remove(self, username: str) -> None:
        row = self.db.query_one(
            """DELETE
               FROM users
               WHERE username = $1
               RETURNING username""",
            [username],
        )
        if not row:
            raise NotFoundError(f"No user: {username}")
        log.info("user removed username=%s", username)
