"""Shared helpers for filtering, sorting, pagination and CSV export.

The vendor list is held in memory (it comes from the REST backend, not a
QuerySet), so every helper here is a plain function over a sequence of
records. Records may be :class:`~vendors.models.Vendor` instances or plain
mappings. :class:`ListState` carries the user's current search, sort and
page choices as a single immutable value parsed from ``request.GET``.
"""

from __future__ import annotations

import csv
import io
import math
from dataclasses import dataclass, replace
from enum import Enum
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Sequence, TypeVar
from urllib.parse import urlencode

from django.http import HttpResponse

R = TypeVar("R")

SEARCH_FIELDS = ("name", "contact", "email", "phone", "category")
FILTER_CHOICES = ("all",) + SEARCH_FIELDS
SORTABLE_COLUMNS = ("id", "name", "contact", "category")
DIRECTIONS = ("asc", "desc")
PAGE_SIZE_OPTIONS = (5, 10, 25)

EXPORT_HEADERS = ("ID", "Name", "Contact", "Email", "Phone", "Category")
EXPORT_COLUMNS = ("id", "name", "contact", "email", "phone", "category")
EXPORT_FILENAME = "vendors_data.csv"


def field_value(record: Any, field: str) -> Any:
    """Return ``field`` from a mapping or attribute container.

    Missing values and ``None`` come back as ``""``; enum members are reduced
    to their value.
    """

    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    return value


def _folded(record: Any, field: str) -> str:
    return str(field_value(record, field)).lower()


def filter_vendors(records: Iterable[R], query: str, field: str = "all") -> List[R]:
    """Return records whose searched field(s) start with ``query``.

    Matching is a case-insensitive prefix match. With ``field == "all"`` a
    record is kept when any of :data:`SEARCH_FIELDS` matches.
    """

    query = (query or "").lower()
    records = list(records)
    if not query:
        return records
    fields = SEARCH_FIELDS if field == "all" else (field,)
    return [
        record
        for record in records
        if any(_folded(record, f).startswith(query) for f in fields)
    ]


def _compare_values(a: Any, b: Any) -> int:
    if isinstance(a, str) and isinstance(b, str):
        key_a, key_b = (a.casefold(), a), (b.casefold(), b)
        return (key_a > key_b) - (key_a < key_b)
    try:
        diff = float(a) - float(b)
    except (TypeError, ValueError):
        return 0
    if math.isnan(diff):
        return 0
    return (diff > 0) - (diff < 0)


def sort_vendors(records: Iterable[R], column: str, direction: str = "asc") -> List[R]:
    """Return records ordered by ``column``.

    Text pairs compare case-insensitively (ties fall back to the raw text);
    any other pair compares numerically. The sort is stable in both
    directions, so equal keys keep their incoming order.
    """

    def compare(a: R, b: R) -> int:
        return _compare_values(field_value(a, column), field_value(b, column))

    return sorted(records, key=cmp_to_key(compare), reverse=direction == "desc")


def paginate(records: Sequence[R], page: int, size: int) -> List[R]:
    """Return the zero-based ``page`` of ``size`` records."""

    start = page * size
    return list(records[start:start + size])


def page_count(total: int, size: int) -> int:
    """Return the number of pages needed for ``total`` records (at least 1)."""

    if size <= 0:
        return 1
    return max(math.ceil(total / size), 1)


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ListState:
    """Search, sort and paging choices for the vendor list."""

    query: str = ""
    field: str = "all"
    sort: str = "id"
    direction: str = "asc"
    page: int = 0
    page_size: int = PAGE_SIZE_OPTIONS[0]

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "ListState":
        """Build a state from ``request.GET``-like params.

        Unknown values fall back to the defaults rather than raising.
        """

        default = cls()
        field = (params.get("field") or default.field).strip()
        sort = (params.get("sort") or default.sort).strip()
        direction = (params.get("direction") or default.direction).strip().lower()
        page_size = _to_int(params.get("page_size"), default.page_size)
        return cls(
            query=(params.get("q") or "").lower(),
            field=field if field in FILTER_CHOICES else default.field,
            sort=sort if sort in SORTABLE_COLUMNS else default.sort,
            direction=direction if direction in DIRECTIONS else default.direction,
            page=max(_to_int(params.get("page"), default.page), 0),
            page_size=page_size if page_size in PAGE_SIZE_OPTIONS else default.page_size,
        )

    def with_page(self, page: int) -> "ListState":
        return replace(self, page=max(page, 0))

    def with_page_size(self, page_size: int) -> "ListState":
        # The current page may not exist at the new size.
        return replace(self, page_size=page_size, page=0)

    def toggle_sort(self, column: str) -> "ListState":
        if column == self.sort and self.direction == "asc":
            return replace(self, direction="desc", page=0)
        return replace(self, sort=column, direction="asc", page=0)

    def as_query(self) -> Dict[str, Any]:
        return {
            "q": self.query,
            "field": self.field,
            "sort": self.sort,
            "direction": self.direction,
            "page": self.page,
            "page_size": self.page_size,
        }

    @property
    def placeholder(self) -> str:
        if self.field == "all":
            return "Search by All Fields"
        return f"Search by {self.field.capitalize()}"


def build_querystring(
    params: Mapping[str, Any], exclude: Sequence[str] | None = None
) -> str:
    """Return an urlencoded querystring for ``params`` minus ``exclude``."""

    excluded = set(("page",) if exclude is None else exclude)
    return urlencode({k: v for k, v in params.items() if k not in excluded})


def vendors_to_csv(records: Iterable[Any]) -> str:
    """Serialise ``records`` in their current order as CSV text.

    Values containing commas, quotes or newlines are quoted.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for record in records:
        writer.writerow([field_value(record, column) for column in EXPORT_COLUMNS])
    return buffer.getvalue()


def export_as_csv(records: Iterable[Any], filename: str = EXPORT_FILENAME) -> HttpResponse:
    """Return ``HttpResponse`` with ``records`` exported as a CSV download."""

    response = HttpResponse(vendors_to_csv(records), content_type="text/csv")
    response["Content-Disposition"] = f"attachment; filename={filename}"
    return response
