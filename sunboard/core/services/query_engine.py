"""Filtering and sorting of in-memory project and task records.

Used identically by the project and task listings and by the reviewer CLI.
Everything here is pure: the input sequence is never mutated and the same
inputs always produce the same output order.

Filtering is a conjunction of exact-equality constraints. The sentinel
``"all"`` (or ``None``) disables a constraint, and field names outside the
known filterable set are ignored.

Sorting is stable. Enum fields sort by their vocabulary position (priority
``critical`` first, phase ``discovery`` first), never alphabetically.
Records missing a sort value go after all others in ascending order, and
descending order is exactly the reverse of ascending order.
"""

import locale
import unicodedata
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID

from sunboard.core.vocabulary import (
    AI_POTENTIAL,
    ASSESSMENT_FIELDS,
    DIFFICULTY,
    PRIORITY,
    PROJECT_STATUS,
    TASK_PHASE,
    TASK_STATUS,
    Rating,
)
from sunboard.utils.exceptions import InvalidSortKeyError

ALL = "all"
SORT_DIRECTIONS = ("asc", "desc")


class RecordKind(str, Enum):
    PROJECT = "project"
    TASK = "task"


FILTERABLE_FIELDS: dict[RecordKind, frozenset[str]] = {
    RecordKind.PROJECT: frozenset(
        (
            "status",
            "priority",
            "difficulty",
            "pillar_id",
            "owner_team_id",
            "category",
            "is_archived",
            *ASSESSMENT_FIELDS,
        )
    ),
    RecordKind.TASK: frozenset(
        (
            "project_id",
            "phase",
            "status",
            "difficulty",
            "ai_potential",
            "owner_team_id",
            "is_foundational",
            "is_critical_path",
        )
    ),
}


def field_value(record: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute object."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _normalize(value: Any) -> Any:
    # Foreign ids arrive as UUIDs from the ORM and as strings from query params
    if isinstance(value, UUID):
        return str(value)
    return value


def _matches(record: Any, field: str, expected: Any) -> bool:
    return _normalize(field_value(record, field)) == _normalize(expected)


def filter_records(
    records: Iterable[Any],
    kind: RecordKind,
    filters: Mapping[str, Any] | None = None,
    search: str | None = None,
) -> list[Any]:
    """Return the records that satisfy every active filter, in input order."""
    allowed = FILTERABLE_FIELDS[kind]
    active = [
        (name, expected)
        for name, expected in (filters or {}).items()
        if name in allowed and expected is not None and expected != ALL
    ]
    needle = search.strip().casefold() if search else ""

    result = []
    for record in records:
        if not all(_matches(record, name, expected) for name, expected in active):
            continue
        if needle and needle not in str(field_value(record, "title") or "").casefold():
            continue
        result.append(record)
    return result


# --- Sort keys ---
#
# Each key function maps a record to a comparable value, or None when the
# record has nothing usable for that key.


def _fold(text: str) -> str:
    """Casefold and strip accents so "Éclair" sorts with "eclair"."""
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _title_key(record: Any) -> str | None:
    title = field_value(record, "title")
    if not isinstance(title, str):
        return None
    return locale.strxfrm(_fold(title))


def _rank_key(field: str, scale: Rating) -> Callable[[Any], int | None]:
    def key(record: Any) -> int | None:
        return scale.rank(field_value(record, field))

    return key


def _numeric_key(field: str) -> Callable[[Any], float | None]:
    def key(record: Any) -> float | None:
        value = field_value(record, field)
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return None
        return None

    return key


def to_datetime(value: Any) -> datetime | None:
    """Coerce datetimes, dates and ISO strings to aware UTC datetimes."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


def _chrono_key(field: str, fallback: str | None = None) -> Callable[[Any], datetime | None]:
    def key(record: Any) -> datetime | None:
        value = to_datetime(field_value(record, field))
        if value is None and fallback:
            value = to_datetime(field_value(record, fallback))
        return value

    return key


SORT_KEYS: dict[RecordKind, dict[str, Callable[[Any], Any]]] = {
    RecordKind.PROJECT: {
        "title": _title_key,
        "priority": _rank_key("priority", PRIORITY),
        "status": _rank_key("status", PROJECT_STATUS),
        "difficulty": _rank_key("difficulty", DIFFICULTY),
        "progress_percentage": _numeric_key("progress_percentage"),
        "created_at": _chrono_key("created_at"),
        "updated_at": _chrono_key("updated_at", fallback="created_at"),
    },
    RecordKind.TASK: {
        "title": _title_key,
        "phase": _rank_key("phase", TASK_PHASE),
        "status": _rank_key("status", TASK_STATUS),
        "difficulty": _rank_key("difficulty", DIFFICULTY),
        "ai_potential": _rank_key("ai_potential", AI_POTENTIAL),
        "due_date": _chrono_key("due_date"),
        "created_at": _chrono_key("created_at"),
        "updated_at": _chrono_key("updated_at", fallback="created_at"),
    },
}


def validate_sort(kind: RecordKind, sort_key: str, direction: str = "asc") -> None:
    """Raise InvalidSortKeyError for a key or direction this kind can't sort by."""
    if sort_key not in SORT_KEYS[kind]:
        raise InvalidSortKeyError(
            f"Unknown sort key '{sort_key}' for {kind.value}s. "
            f"Expected one of: {', '.join(SORT_KEYS[kind])}"
        )
    if direction not in SORT_DIRECTIONS:
        raise InvalidSortKeyError(
            f"Unknown sort direction '{direction}'. Expected 'asc' or 'desc'"
        )


def sort_records(
    records: Sequence[Any],
    kind: RecordKind,
    sort_key: str,
    direction: str = "asc",
) -> list[Any]:
    """Stable sort by ``sort_key``; ``desc`` is the exact reverse of ``asc``."""
    validate_sort(kind, sort_key, direction)
    key = SORT_KEYS[kind][sort_key]

    keyed = [(key(record), record) for record in records]
    present = [pair for pair in keyed if pair[0] is not None]
    missing = [record for value, record in keyed if value is None]

    # sorted() is stable, so equal keys keep their input order
    ordered = [record for _, record in sorted(present, key=lambda pair: pair[0])]
    ordered.extend(missing)

    if direction == "desc":
        ordered.reverse()
    return ordered


def apply_query(
    records: Sequence[Any],
    kind: RecordKind,
    filters: Mapping[str, Any] | None = None,
    sort_key: str = "created_at",
    direction: str = "asc",
    search: str | None = None,
) -> list[Any]:
    """Filter then sort. Bad sort arguments fail before any work is done."""
    validate_sort(kind, sort_key, direction)
    return sort_records(filter_records(records, kind, filters, search), kind, sort_key, direction)
