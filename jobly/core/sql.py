"""
Helpers for building parameterized SQL.

Only column names are ever placed into SQL text here. Values always travel
as bound parameters.
"""

import re
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from jobly.core.errors import BadRequestError, NoDataError

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_PLACEHOLDER = re.compile(r"\$(\d+)")


class PartialUpdate(NamedTuple):
    """Column assignments and their positional values, index for index."""
    assignments: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        return ", ".join(self.assignments)


def _validate_identifier(name: str) -> str:
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise BadRequestError(f"Invalid field name: {name!r}")
    return name


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> PartialUpdate:
    """
    Build the SET clause pieces for an UPDATE from a partial payload.

    Args:
        data: Fields to change, keyed by their API (camelCase) names,
            e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: API name -> column name, e.g. {"firstName": "first_name"}.
            Names missing from the map are used as the column name.

    Returns:
        PartialUpdate where assignments[i] is '"column"=$<i+1>' and values[i]
        is the value bound to that placeholder:
            (['"first_name"=$1', '"age"=$2'], ['Aliya', 32])

    Raises:
        NoDataError: If data is empty
        BadRequestError: If a column name is not a plain identifier
    """
    if not data:
        raise NoDataError()

    js_to_sql = js_to_sql or {}
    assignments = []
    values = []
    for idx, (key, value) in enumerate(data.items(), start=1):
        column = _validate_identifier(js_to_sql.get(key, key))
        assignments.append(f'"{column}"=${idx}')
        values.append(value)

    return PartialUpdate(assignments, values)


def to_named_params(sql: str, values: Sequence[Any] = ()) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite positional $n placeholders as SQLAlchemy named binds.

    "WHERE handle = $1" with ["c1"] becomes "WHERE handle = :p1" with {"p1": "c1"}.
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _replace(match: "re.Match") -> str:
        key = f"p{match.group(1)}"
        if key not in params:
            raise ValueError(f"No value supplied for placeholder ${match.group(1)}")
        return f":{key}"

    return _PLACEHOLDER.sub(_replace, sql), params
