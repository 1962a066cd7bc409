"""
Search and sort for already-authorized list views.

filter_and_sort() is pure: it never mutates its input and returns a new
list, so callers can re-run it whenever the source list, the search term
or the sort key changes. Items may be mappings or plain objects.
"""
import locale
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

SORT_KEYS = ("recent", "oldest", "name-asc", "name-desc", "bookings-desc", "price-asc", "price-desc")


@dataclass(frozen=True)
class ListView:
    """Which fields of a summary type take part in search and sort."""
    searchable: Tuple[str, ...]
    date_field: str
    name_fields: Tuple[str, ...]
    count_field: Optional[str] = None
    amount_field: Optional[str] = None


CUSTOMER_VIEW = ListView(
    searchable=("first_name", "last_name", "email", "phone"),
    date_field="last_booking",
    name_fields=("first_name", "last_name"),
    count_field="bookings_count",
    amount_field="total_spent",
)

BOOKING_VIEW = ListView(
    searchable=("booking_reference", "first_name", "last_name", "email", "venue_name"),
    date_field="created_at",
    name_fields=("first_name", "last_name"),
    amount_field="total_price",
)

EVENT_VIEW = ListView(
    searchable=("title", "category", "city", "location_name"),
    date_field="created_at",
    name_fields=("title",),
    count_field="tickets_sold",
    amount_field="ticket_price",
)

VENUE_VIEW = ListView(
    searchable=("name", "venue_type", "location", "city"),
    date_field="created_at",
    name_fields=("name",),
    amount_field="price_min",
)

USER_VIEW = ListView(
    searchable=("name", "email", "phone", "company_name"),
    date_field="created_at",
    name_fields=("name",),
)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):  # str enums
        value = value.value
    return str(value)


def _timestamp(value: Any) -> float:
    """Comparable timestamp; missing dates sort as the oldest."""
    if value is None or value == "":
        return float("-inf")
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _number(value: Any) -> float:
    return float(value) if value is not None else 0.0


def _full_name(item: Any, view: ListView) -> str:
    return " ".join(_text(_field(item, f)) for f in view.name_fields).strip()


def _name_key(name: str):
    # Case differences only break ties
    return (locale.strxfrm(name.casefold()), locale.strxfrm(name))


def matches(item: Any, search_term: str, view: ListView) -> bool:
    term = (search_term or "").strip().casefold()
    if not term:
        return True
    return any(term in _text(_field(item, f)).casefold() for f in view.searchable)


def filter_and_sort(
    items: Iterable[Any],
    search_term: str = "",
    sort_key: str = "recent",
    view: ListView = CUSTOMER_VIEW,
) -> List[Any]:
    """Return the items matching search_term, ordered by sort_key.

    Sorting is stable: items that compare equal keep their relative order.
    Raises ValueError for an unknown sort key or one the view cannot serve.
    """
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{sort_key}'. Expected one of: {', '.join(SORT_KEYS)}")

    result = [item for item in items if matches(item, search_term, view)]

    if sort_key == "recent":
        return sorted(result, key=lambda i: _timestamp(_field(i, view.date_field)), reverse=True)
    if sort_key == "oldest":
        return sorted(result, key=lambda i: _timestamp(_field(i, view.date_field)))
    if sort_key in ("name-asc", "name-desc"):
        return sorted(
            result,
            key=lambda i: _name_key(_full_name(i, view)),
            reverse=sort_key == "name-desc",
        )
    if sort_key == "bookings-desc":
        _require(view.count_field, sort_key)
        return sorted(result, key=lambda i: _number(_field(i, view.count_field)), reverse=True)

    _require(view.amount_field, sort_key)
    return sorted(
        result,
        key=lambda i: _number(_field(i, view.amount_field)),
        reverse=sort_key == "price-desc",
    )


def _require(field_name: Optional[str], sort_key: str) -> None:
    if field_name is None:
        raise ValueError(f"Sort key '{sort_key}' is not supported for this list")

