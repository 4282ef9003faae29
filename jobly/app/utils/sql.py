"""Helpers for building safe SQL clauses.

Both builders return SQL text using positional ``$N`` placeholders together
with the values bound to them, in placeholder order. Column names come from
server-side tables only; values never appear in the generated text.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from ..errors import NoDataError, UnrecognizedFilterKeyError


class Comparison(str, Enum):
    """How a recognised filter key is compared against its column."""

    GREATER_OR_EQUAL = "gte"
    LESS_OR_EQUAL = "lte"
    SUBSTRING_MATCH = "ilike"
    POSITIVE_EXISTENCE = "positive"


class FilterSpec(NamedTuple):
    """Column and comparison used for one recognised filter key."""

    column: str
    comparison: Comparison


class PartialUpdate(NamedTuple):
    set_cols: str
    values: list[Any]


class WhereClause(NamedTuple):
    where_clause: str
    values: list[Any]


COMPANY_FILTERS: Mapping[str, FilterSpec] = MappingProxyType(
    {
        "minEmployees": FilterSpec("num_employees", Comparison.GREATER_OR_EQUAL),
        "maxEmployees": FilterSpec("num_employees", Comparison.LESS_OR_EQUAL),
        "nameLike": FilterSpec("name", Comparison.SUBSTRING_MATCH),
    }
)

JOB_FILTERS: Mapping[str, FilterSpec] = MappingProxyType(
    {
        "title": FilterSpec("title", Comparison.SUBSTRING_MATCH),
        "minSalary": FilterSpec("salary", Comparison.GREATER_OR_EQUAL),
        "hasEquity": FilterSpec("equity", Comparison.POSITIVE_EXISTENCE),
    }
)

_OPERATORS = {
    Comparison.GREATER_OR_EQUAL: ">=",
    Comparison.LESS_OR_EQUAL: "<=",
    Comparison.SUBSTRING_MATCH: "ILIKE",
}


def sql_for_partial_update(
    data: Mapping[str, Any], js_to_sql: Mapping[str, str]
) -> PartialUpdate:
    """Return the ``SET`` columns and values for a partial update.

    ``data`` maps field names to new values, in the order the columns should
    be assigned. ``js_to_sql`` maps the fields whose column name differs;
    any other field is used as its own column name.

    >>> sql_for_partial_update({"firstName": "Aliya", "age": 32},
    ...                        {"firstName": "first_name"})
    PartialUpdate(set_cols='"first_name"=$1, "age"=$2', values=['Aliya', 32])

    Raises :class:`NoDataError` when ``data`` is empty.
    """
    if not data:
        raise NoDataError("No data")

    cols = [
        f'"{js_to_sql.get(field, field)}"=${idx}'
        for idx, field in enumerate(data, start=1)
    ]
    return PartialUpdate(", ".join(cols), list(data.values()))


def sql_for_where(
    filters: Mapping[str, Any], recognized: Mapping[str, FilterSpec]
) -> WhereClause:
    """Return a ``WHERE`` clause and its values for ``filters``.

    Keys are handled in the order they appear in ``filters``. Placeholders
    are numbered only over the values actually bound, so a
    ``POSITIVE_EXISTENCE`` key never leaves a gap. An empty clause is
    returned when nothing matched, so callers can splice it unconditionally.

    Raises :class:`UnrecognizedFilterKeyError` for keys missing from
    ``recognized``.
    """
    parts: list[str] = []
    values: list[Any] = []
    for key, value in filters.items():
        rule = recognized.get(key)
        if rule is None:
            raise UnrecognizedFilterKeyError(f"Wrong key for filter: {key}")

        if rule.comparison is Comparison.POSITIVE_EXISTENCE:
            # only an explicit True narrows the results
            if value is True:
                parts.append(f"{rule.column} > 0")
            continue

        if rule.comparison is Comparison.SUBSTRING_MATCH:
            value = f"%{value}%"
        values.append(value)
        parts.append(f"{rule.column} {_OPERATORS[rule.comparison]} ${len(values)}")

    if not parts:
        return WhereClause("", [])
    return WhereClause("WHERE " + " AND ".join(parts), values)


__all__ = [
    "COMPANY_FILTERS",
    "JOB_FILTERS",
    "Comparison",
    "FilterSpec",
    "PartialUpdate",
    "WhereClause",
    "sql_for_partial_update",
    "sql_for_where",
]
