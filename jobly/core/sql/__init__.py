from .filters import COMPANY_FILTER, JOB_FILTER, FilterSpec, build_filter, company_filter, job_filter
from .names import COMPANY_NAMES, JOB_NAMES, USER_NAMES, NameMapping
from .partial_update import UpdateClauseSet, sql_for_partial_update
from .predicate import POSTGRES, SQLITE, Dialect, Predicate, RenderedPredicate, dialect_for

__all__ = [
    "COMPANY_FILTER",
    "COMPANY_NAMES",
    "Dialect",
    "FilterSpec",
    "JOB_FILTER",
    "JOB_NAMES",
    "NameMapping",
    "POSTGRES",
    "Predicate",
    "RenderedPredicate",
    "SQLITE",
    "USER_NAMES",
    "UpdateClauseSet",
    "build_filter",
    "company_filter",
    "dialect_for",
    "job_filter",
    "sql_for_partial_update",
]
