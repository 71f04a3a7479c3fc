"""
Query-string filters for companies and jobs.

Each registered filter turns one raw query-string value into a Fragment: a
SQL template with "{}" slots and the values bound into them. A Fragment
renders two ways:

- str(fragment): literal text, e.g. "num_employees >= 5"
- fragment.compile(start): "$n" placeholders for execution, values bound

build_filter_clause() checks every key against a registry, runs the matching
filters and joins the fragments with AND after a "1=1" base predicate.
"""

import logging
import re
from functools import lru_cache, partial
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, NamedTuple, Tuple

from jobly.core.errors import InvalidFilterValueError, InvalidRangeError, UnknownFilterError

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"-?\d+", re.ASCII)


class Fragment(NamedTuple):
    template: str
    params: Tuple[Any, ...] = ()

    def compile(self, start: int = 1) -> Tuple[str, List[Any]]:
        placeholders = [f"${idx}" for idx in range(start, start + len(self.params))]
        return self.template.format(*placeholders), list(self.params)

    def __str__(self) -> str:
        return self.template.format(*(_literal(value) for value in self.params))


class WhereClause(NamedTuple):
    sql: str
    params: List[Any]
    literal: str


FilterFunction = Callable[[str], Fragment]


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    return str(value)


def _to_int(raw: Any) -> int:
    """Parse plain ASCII decimal text such as "12" or "-3"; raise ValueError otherwise."""
    text = str(raw).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {raw!r}")
    return int(text)


def _parse_int(name: str, raw: Any, allow_zero: bool = False) -> int:
    """
    Parse an integer filter value.

    By default a parsed 0 is rejected along with non-numeric input.
    With allow_zero only a parse failure is rejected.
    """
    try:
        value = _to_int(raw)
    except ValueError:
        raise InvalidFilterValueError(name, "Integer")
    if not value and not allow_zero:
        raise InvalidFilterValueError(name, "Integer")
    return value


def min_employees(raw: str, allow_zero: bool = False) -> Fragment:
    return Fragment("num_employees >= {}", (_parse_int("minEmployees", raw, allow_zero),))


def max_employees(raw: str, allow_zero: bool = False) -> Fragment:
    return Fragment("num_employees <= {}", (_parse_int("maxEmployees", raw, allow_zero),))


def company_name(raw: str) -> Fragment:
    return Fragment("LOWER(name) LIKE {}", (f"%{str(raw).lower()}%",))


def job_title(raw: str) -> Fragment:
    return Fragment("LOWER(title) LIKE {}", (f"%{str(raw).lower()}%",))


def min_salary(raw: str, allow_zero: bool = False) -> Fragment:
    return Fragment("salary >= {}", (_parse_int("minSalary", raw, allow_zero),))


def has_equity(raw: str) -> Fragment:
    flag = str(raw).lower()
    if flag == "true":
        return Fragment("equity = 1")
    if flag == "false":
        # Matches every job, with or without equity
        return Fragment("equity >= 0 AND equity <= 1")
    raise InvalidFilterValueError("hasEquity", "'true' or 'false'")


@lru_cache()
def company_filters(allow_zero: bool = False) -> Mapping[str, FilterFunction]:
    """Filters accepted by the company search, keyed by query parameter."""
    return MappingProxyType({
        "minEmployees": partial(min_employees, allow_zero=allow_zero),
        "maxEmployees": partial(max_employees, allow_zero=allow_zero),
        "companyName": company_name,
    })


@lru_cache()
def job_filters(allow_zero: bool = False) -> Mapping[str, FilterFunction]:
    """Filters accepted by the job search, keyed by query parameter."""
    return MappingProxyType({
        "jobTitle": job_title,
        "minSalary": partial(min_salary, allow_zero=allow_zero),
        "hasEquity": has_equity,
    })


def check_range(query: Mapping[str, Any], low_key: str, high_key: str) -> None:
    """
    Raise InvalidRangeError when both bounds are given and low exceeds high.

    Values that do not parse are left for the filter functions to reject.
    """
    if query.get(low_key) is None or query.get(high_key) is None:
        return
    try:
        low = _to_int(query[low_key])
        high = _to_int(query[high_key])
    except ValueError:
        return
    if low > high:
        raise InvalidRangeError(f"{low_key} cannot be greater than {high_key}")


def build_filter_clause(
    query: Mapping[str, Any],
    registry: Mapping[str, FilterFunction],
    start: int = 1
) -> WhereClause:
    """
    Build a WHERE clause from query-string filters.

    Args:
        query: Raw query parameters, e.g. {"minEmployees": "10", "companyName": "net"}
        registry: Filter name -> filter function
        start: Number of the first "$n" placeholder

    Returns:
        WhereClause with placeholder SQL, its bound values in order, and the
        literal rendering of the same predicate

    Raises:
        UnknownFilterError: For the first key not in the registry, before any
            filter runs
        InvalidFilterValueError: If a filter rejects its value
    """
    for key in query:
        if key not in registry:
            raise UnknownFilterError(key)

    sql_parts = ["1=1"]
    literal_parts = ["1=1"]
    params: List[Any] = []
    for key, raw in query.items():
        fragment = registry[key](raw)
        sql, values = fragment.compile(start + len(params))
        sql_parts.append(sql)
        literal_parts.append(str(fragment))
        params.extend(values)

    clause = WhereClause(" AND ".join(sql_parts), params, " AND ".join(literal_parts))
    logger.debug(f"Built filter clause: {clause.literal}")
    return clause
