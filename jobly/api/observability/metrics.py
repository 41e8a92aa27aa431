from __future__ import annotations

import re
from prometheus_client import Counter, Histogram


def normalize_path(path: str) -> str:
    """Reduce high-cardinality paths for metrics labels."""
    p = path or "/"

    # ints (job ids)
    p = re.sub(r"/\d+", "/:id", p)
    # company handles, usernames
    p = re.sub(r"^/companies/[^/]+$", "/companies/:handle", p)
    p = re.sub(r"^/users/[^/]+$", "/users/:username", p)

    return p


HTTP_REQUESTS_TOTAL = Counter(
    "jobly_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "jobly_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

AUTHZ_DECISIONS_TOTAL = Counter(
    "jobly_authz_decisions_total",
    "Authorization decisions",
    ["decision", "required_level"],
)
