import os

# Must be in place before the app module reads config
os.environ.setdefault("JOBLY_ENV", "test")
os.environ.setdefault("JOBLY_SECRET_KEY", "test-secret-key-0123456789abcdef-jobly")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobly.api.main import app  # noqa: E402
from jobly.core.auth.passwords import PasswordHasher  # noqa: E402
from jobly.core.auth.provider import JwtConfig, create_token  # noqa: E402
from jobly.core.config import load_config  # noqa: E402
from jobly.core.storage.database import Database, get_db  # noqa: E402
from jobly.core.storage.schema import create_schema  # noqa: E402


# bcrypt minimum cost keeps fixtures fast
HASHER = PasswordHasher(rounds=4)


def password_for(username: str) -> str:
    return f"password-{username}"


def _seed(db: Database) -> None:
    for n in (1, 2, 3):
        db.query(
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", f"Desc{n}", n, f"http://c{n}.img"],
        )

    for title, salary, equity, handle in (
        ("job1", 10000, 0, "c1"),
        ("job2", 20000, 0.02, "c1"),
        ("job3", 30000, 0.03, "c2"),
    ):
        db.query(
            "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, $4)",
            [title, salary, equity, handle],
        )

    for username, is_admin in (("u1", False), ("u2", False), ("admin", True)):
        db.query(
            """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
               VALUES ($1, $2, $3, $4, $5, $6)""",
            [
                username,
                HASHER.hash(password_for(username)),
                f"F{username}",
                f"L{username}",
                f"{username}@email.com",
                is_admin,
            ],
        )


@pytest.fixture()
def db():
    database = Database("sqlite://")
    create_schema(database)
    _seed(database)
    yield database
    database.dispose()


@pytest.fixture()
def job_ids(db):
    rows = db.query("SELECT id, title FROM jobs ORDER BY id")
    return {r["title"]: r["id"] for r in rows}


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def passwords():
    return {u: password_for(u) for u in ("u1", "u2", "admin")}


@pytest.fixture(scope="session")
def jwt_cfg():
    return JwtConfig.from_config(load_config())


@pytest.fixture(scope="session")
def u1_headers(jwt_cfg):
    return {"Authorization": f"Bearer {create_token('u1', False, jwt_cfg)}"}


@pytest.fixture(scope="session")
def u2_headers(jwt_cfg):
    return {"Authorization": f"Bearer {create_token('u2', False, jwt_cfg)}"}


@pytest.fixture(scope="session")
def admin_headers(jwt_cfg):
    return {"Authorization": f"Bearer {create_token('admin', True, jwt_cfg)}"}
