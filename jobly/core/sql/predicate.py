from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

_COMPARISON_OPS = frozenset({"=", "!=", ">", ">=", "<", "<="})

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Make % and _ match themselves inside a LIKE pattern."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


@dataclass(frozen=True)
class Dialect:
    name: str
    ilike: str


POSTGRES = Dialect(name="postgresql", ilike="ILIKE")
# SQLite's LIKE is case-insensitive for ASCII and has no ILIKE
SQLITE = Dialect(name="sqlite", ilike="LIKE")

_DIALECTS = {d.name: d for d in (POSTGRES, SQLITE)}


def dialect_for(name: str) -> Dialect:
    return _DIALECTS.get((name or "").lower(), POSTGRES)


class _Binder:
    def __init__(self, start: int):
        self.start = start
        self.values: List[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${self.start + len(self.values) - 1}"


@dataclass(frozen=True)
class Comparison:
    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in _COMPARISON_OPS:
            raise ValueError(f"Unsupported operator: {self.op}")

    def render(self, dialect: Dialect, binder: _Binder) -> str:
        return f"{self.column} {self.op} {binder.bind(self.value)}"


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match; wildcards in the term are literal."""

    column: str
    term: str

    def render(self, dialect: Dialect, binder: _Binder) -> str:
        pattern = binder.bind(f"%{escape_like(self.term)}%")
        return f"{self.column} {dialect.ilike} {pattern} ESCAPE '{LIKE_ESCAPE}'"


@dataclass(frozen=True)
class Between:
    """Inclusive on both ends."""

    column: str
    low: Any
    high: Any

    def render(self, dialect: Dialect, binder: _Binder) -> str:
        low = binder.bind(self.low)
        high = binder.bind(self.high)
        return f"{self.column} BETWEEN {low} AND {high}"


Condition = Union[Comparison, Contains, Between]


@dataclass(frozen=True)
class RenderedPredicate:
    sql: str
    values: Tuple[Any, ...]

    def where(self) -> str:
        """WHERE clause to embed in a query, or "" when nothing filters."""
        return f"WHERE {self.sql}" if self.sql else ""


@dataclass(frozen=True)
class Predicate:
    """
    Conjunction of conditions. No OR, no nesting.

    Values stay out of the SQL text; render() emits $n placeholders and
    the matching value list.
    """

    conditions: Tuple[Condition, ...] = field(default_factory=tuple)

    def and_(self, condition: Condition) -> "Predicate":
        return Predicate(conditions=self.conditions + (condition,))

    @property
    def is_empty(self) -> bool:
        return not self.conditions

    def render(self, dialect: Dialect = POSTGRES, start: int = 1) -> RenderedPredicate:
        binder = _Binder(start)
        parts = [c.render(dialect, binder) for c in self.conditions]
        return RenderedPredicate(sql=" AND ".join(parts), values=tuple(binder.values))
