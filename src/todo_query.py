"""Filtering and sorting of loaded records.

Filter expressions read ``<field> <operator> <value...>``; the value is
whatever follows the operator, spaces included. Supported operators:

    ==    equal
    !=    not equal
    ~=    substring
    ~*=   case-insensitive substring

Only fields listed in FILTER_FIELDS can be filtered on. A bad field or
operator is reported and the records pass through untouched; the same goes
for an unknown sort field.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from todo_models import Record

logger = logging.getLogger(__name__)

Predicate = Callable[[str, str], bool]

OPERATORS: Dict[str, Predicate] = {
    '==': lambda field, needle: field == needle,
    '!=': lambda field, needle: field != needle,
    '~=': lambda field, needle: needle in field,
    '~*=': lambda field, needle: needle.lower() in field.lower(),
}
DEFAULT_OPERATOR = '=='

# Add an entry here to make another text field filterable.
FILTER_FIELDS: Dict[str, Callable[[Record], str]] = {
    'project': lambda r: r.project,
}


# -------------------- filtering --------------------
@dataclass(frozen=True)
class FieldFilter:
    field: str
    operator: str
    value: str

    def matches(self, record: Record) -> bool:
        return OPERATORS[self.operator](FILTER_FIELDS[self.field](record), self.value)


@dataclass(frozen=True)
class QueryError:
    """Unsupported filter: names what was wrong instead of raising."""
    expression: str
    message: str

    def __str__(self) -> str:
        return self.message


def parse_filter(expression: str) -> Union[FieldFilter, QueryError]:
    tokens = expression.split()
    if not tokens:
        return QueryError(expression, 'Filtering not yet implemented for None')
    field = tokens[0]
    op = tokens[1] if len(tokens) > 1 else DEFAULT_OPERATOR
    value = ' '.join(tokens[2:])
    if field not in FILTER_FIELDS:
        return QueryError(expression, f'Filtering not yet implemented for {field!r}')
    if op not in OPERATORS:
        return QueryError(expression, f'Unknown operator: {op}')
    return FieldFilter(field, op, value)


def filter_records(records: Sequence[Record], expression: str) -> List[Record]:
    """Keep records matching expression; empty or invalid -> all records."""
    if not expression:
        return list(records)
    parsed = parse_filter(expression)
    if isinstance(parsed, QueryError):
        logger.error("%s", parsed)
        return list(records)
    return [r for r in records if parsed.matches(r)]


# -------------------- sorting --------------------
class SortFieldError(ValueError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Field {field} does not exist')


def _completed_at(record: Record) -> Tuple[bool, Optional[datetime]]:
    # absent first (all absent compare equal), then chronological
    return (record.date_completed is not None, record.date_completed)


SORT_KEYS: Dict[str, Callable[[Record], Any]] = {
    'id': lambda r: r.id,
    'project': lambda r: r.project,
    'description': lambda r: r.description,
    'completed': lambda r: r.completed,
    'date_added': lambda r: r.date_added,
    'date_completed': _completed_at,
}
DEFAULT_SORT = 'id'


def sort_key(field: str) -> Callable[[Record], Any]:
    key = SORT_KEYS.get(field or DEFAULT_SORT)
    if key is None:
        raise SortFieldError(field)
    return key


def sort_records(records: Sequence[Record], field: str = '') -> List[Record]:
    """Stable ascending sort by field; unknown field keeps current order."""
    try:
        key = sort_key(field)
    except SortFieldError as err:
        logger.error("%s", err)
        return list(records)
    return sorted(records, key=key)
