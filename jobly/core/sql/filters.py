from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Mapping, Union

from jobly.core.errors import (
    InvalidFilterKeyError,
    InvalidFilterValueError,
    InvalidRangeError,
)
from jobly.core.sql.predicate import Between, Comparison, Contains, Predicate

Number = Union[int, float]

# BIGINT range; anything wider overflows the drivers
_INT_LIMIT = 2**63 - 1

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off", ""})


@dataclass(frozen=True)
class FilterSpec:
    resource: str
    keys: FrozenSet[str]

    def check_keys(self, params: Mapping[str, Any]) -> None:
        unknown = set(params) - self.keys
        if unknown:
            raise InvalidFilterKeyError(unknown)


COMPANY_FILTER = FilterSpec(
    resource="company",
    keys=frozenset({"nameLike", "minEmployees", "maxEmployees"}),
)

JOB_FILTER = FilterSpec(
    resource="job",
    keys=frozenset({"title", "minSalary", "hasEquity"}),
)


def _present(params: Mapping[str, Any], key: str) -> bool:
    return params.get(key) is not None


def _parse_number(key: str, value: Any) -> Number:
    # query strings deliver "10"; JSON/tests may deliver 10
    if isinstance(value, bool):
        raise InvalidFilterValueError(key, value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            pass
        try:
            return float(s)
        except ValueError:
            raise InvalidFilterValueError(key, value) from None
    raise InvalidFilterValueError(key, value)


def _number(key: str, value: Any) -> Number:
    """Finite, and within the integer range the database can bind."""
    n = _parse_number(key, value)
    if isinstance(n, float) and not math.isfinite(n):
        raise InvalidFilterValueError(key, value)
    if abs(n) > _INT_LIMIT:
        raise InvalidFilterValueError(key, value)
    return n


def _flag(key: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
    raise InvalidFilterValueError(key, value)


def company_filter(params: Mapping[str, Any]) -> Predicate:
    """
    nameLike -> name ILIKE %x%
    minEmployees alone -> num_employees > min
    maxEmployees alone -> num_employees < max
    both -> num_employees BETWEEN min AND max (inclusive)

    Strict when alone, inclusive when combined: kept that way for
    compatibility with existing clients.
    """
    COMPANY_FILTER.check_keys(params)

    has_min = _present(params, "minEmployees")
    has_max = _present(params, "maxEmployees")
    low = _number("minEmployees", params["minEmployees"]) if has_min else None
    high = _number("maxEmployees", params["maxEmployees"]) if has_max else None

    if has_min and has_max and low > high:
        raise InvalidRangeError()

    pred = Predicate()
    if _present(params, "nameLike"):
        pred = pred.and_(Contains("name", str(params["nameLike"])))
    if has_min and has_max:
        pred = pred.and_(Between("num_employees", low, high))
    elif has_min:
        pred = pred.and_(Comparison("num_employees", ">", low))
    elif has_max:
        pred = pred.and_(Comparison("num_employees", "<", high))
    return pred


def job_filter(params: Mapping[str, Any]) -> Predicate:
    """
    title -> title ILIKE %x%
    minSalary -> salary >= min
    hasEquity truthy -> equity != 0 (falsy adds nothing)
    """
    JOB_FILTER.check_keys(params)

    pred = Predicate()
    if _present(params, "title"):
        pred = pred.and_(Contains("title", str(params["title"])))
    if _present(params, "minSalary"):
        pred = pred.and_(Comparison("salary", ">=", _number("minSalary", params["minSalary"])))
    if _flag("hasEquity", params.get("hasEquity")):
        pred = pred.and_(Comparison("equity", "!=", 0))
    return pred


FILTER_BUILDERS: Dict[str, Callable[[Mapping[str, Any]], Predicate]] = {
    COMPANY_FILTER.resource: company_filter,
    JOB_FILTER.resource: job_filter,
}


def build_filter(resource_kind: str, params: Mapping[str, Any]) -> Predicate:
    try:
        builder = FILTER_BUILDERS[resource_kind]
    except KeyError:
        raise ValueError(f"Unknown resource kind: {resource_kind}") from None
    return builder(params)
