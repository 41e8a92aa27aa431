from __future__ import annotations

import argparse
from pathlib import Path
import sys

# ---- sys.path bootstrap (Windows-friendly) ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ---------------------------------------------

from jobly.core.auth.provider import JwtConfig, create_token  # noqa: E402
from jobly.core.config import load_config  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Mint a bearer token signed with JOBLY_SECRET_KEY.")
    ap.add_argument("username")
    ap.add_argument("--admin", action="store_true", help="Set isAdmin in the token")
    args = ap.parse_args()

    cfg = JwtConfig.from_config(load_config())
    print(create_token(args.username, args.admin, cfg))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
