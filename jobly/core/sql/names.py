from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping


class NameMapping:
    """
    External (client-facing) attribute names -> internal column names.

    Names missing from the table are the same on both sides.
    Read-only after construction, safe to share across requests.
    """

    def __init__(self, table: Mapping[str, str] | None = None):
        forward = dict(table or {})
        self._forward = MappingProxyType(forward)
        self._reverse = MappingProxyType({v: k for k, v in forward.items()})

    def translate(self, external: str) -> str:
        return self._forward.get(external, external)

    def reverse(self, internal: str) -> str:
        return self._reverse.get(internal, internal)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._forward)

    def __contains__(self, external: object) -> bool:
        return external in self._forward

    def __repr__(self) -> str:
        return f"NameMapping({dict(self._forward)!r})"


COMPANY_NAMES = NameMapping(
    {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
)

JOB_NAMES = NameMapping(
    {
        "companyHandle": "company_handle",
    }
)

USER_NAMES = NameMapping(
    {
        "firstName": "first_name",
        "lastName": "last_name",
        "isAdmin": "is_admin",
    }
)
