from __future__ import annotations

import argparse
from pathlib import Path
import sys

# ---- sys.path bootstrap (Windows-friendly) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------

from jobly.core.storage.database import Database  # noqa: E402
from jobly.core.config import load_config  # noqa: E402
from jobly.core.storage.schema import clear_all, create_schema  # noqa: E402
from jobly.models.company import CompanyRepository  # noqa: E402
from jobly.models.job import JobRepository  # noqa: E402
from jobly.models.user import UserRepository  # noqa: E402


def seed(db: Database, admin_password: str = "admin-password") -> None:
    companies = CompanyRepository(db)
    jobs = JobRepository(db)
    users = UserRepository(db)

    companies.create(
        {"handle": "acme", "name": "Acme", "description": "Anvils", "numEmployees": 120, "logoUrl": None}
    )
    companies.create(
        {"handle": "initech", "name": "Initech", "description": "TPS reports", "numEmployees": 45, "logoUrl": None}
    )
    jobs.create({"title": "Engineer", "salary": 120000, "equity": 0.01, "companyHandle": "acme"})
    jobs.create({"title": "Analyst", "salary": 80000, "equity": 0, "companyHandle": "initech"})
    users.create(
        {
            "username": "admin",
            "password": admin_password,
            "firstName": "Ada",
            "lastName": "Admin",
            "email": "admin@example.com",
            "isAdmin": True,
        }
    )


def main() -> int:
    ap = argparse.ArgumentParser(description="Create the jobly tables (and optionally demo rows).")
    ap.add_argument("--url", default=None, help="Database URL (default: JOBLY_DATABASE_URL / config)")
    ap.add_argument("--reset", action="store_true", help="Delete all rows before seeding")
    ap.add_argument("--seed", action="store_true", help="Insert a few demo rows")
    ap.add_argument("--admin-password", default="admin-password", help="Password for the seeded admin user")
    args = ap.parse_args()

    db = Database(args.url or load_config().database_url)
    create_schema(db)
    if args.reset:
        clear_all(db)
    if args.seed:
        seed(db, admin_password=args.admin_password)
    print(f"Schema ready: {db.url} ({db.dialect.name})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
