from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from jobly.core.errors import EmptyInputError
from jobly.core.sql.names import NameMapping


@dataclass(frozen=True)
class UpdateClauseSet:
    fragments: Tuple[str, ...]
    values: Tuple[Any, ...]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.fragments)

    @property
    def next_placeholder(self) -> str:
        # extra parameters (e.g. the row id) go after the SET values
        return f"${len(self.values) + 1}"


def sql_for_partial_update(data: Mapping[str, Any], mapping: NameMapping) -> UpdateClauseSet:
    """
    Build the SET part of an UPDATE that only touches the supplied fields.

    {"firstName": "Aliya", "age": 32} with firstName->first_name gives
    ('"first_name"=$1', '"age"=$2') and ("Aliya", 32).

    A None value means "set to NULL"; a missing key means "leave alone".
    Values are passed through as-is.
    """
    if not data:
        raise EmptyInputError()

    fragments = []
    values = []
    for idx, (key, value) in enumerate(data.items(), start=1):
        fragments.append(f'"{mapping.translate(key)}"=${idx}')
        values.append(value)

    return UpdateClauseSet(fragments=tuple(fragments), values=tuple(values))
