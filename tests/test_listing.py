"""Tests for list search and sort (eventuraa/services/listing.py)"""
import pytest
from datetime import datetime, timezone
from types import SimpleNamespace

from eventuraa.models.venue import VenueType
from eventuraa.services.listing import (
    CUSTOMER_VIEW,
    USER_VIEW,
    VENUE_VIEW,
    filter_and_sort,
    matches,
)


def _customer(first, last, email, phone=None, bookings_count=1, last_booking=None, total_spent=0):
    return {
        "first_name": first,
        "last_name": last,
        "email": email,
        "phone": phone,
        "bookings_count": bookings_count,
        "last_booking": last_booking,
        "total_spent": total_spent,
    }


class TestFilter:
    def test_empty_input_returns_empty_list(self):
        assert filter_and_sort([], "", "recent") == []

    def test_search_matches_first_name_case_insensitively(self):
        ann = _customer("Ann", "Lee", "a@x.com")
        bob = _customer("Bob", "Ng", "b@x.com")

        result = filter_and_sort([ann, bob], "an", "recent")

        assert result == [ann]

    def test_search_matches_email_and_phone(self):
        ann = _customer("Ann", "Lee", "ann@hotel.lk", phone="+94 77 123")
        bob = _customer("Bob", "Ng", "bob@x.com", phone="+94 71 999")

        assert filter_and_sort([ann, bob], "HOTEL", "recent") == [ann]
        assert filter_and_sort([ann, bob], "71 999", "recent") == [bob]

    def test_blank_search_term_matches_everything(self):
        items = [_customer("Ann", "Lee", "a@x.com"), _customer("Bob", "Ng", "b@x.com")]

        assert len(filter_and_sort(items, "   ", "recent")) == 2

    def test_missing_fields_do_not_match(self):
        assert matches({"first_name": None}, "none", CUSTOMER_VIEW) is False

    def test_input_is_not_mutated(self):
        items = [
            _customer("Bob", "Ng", "b@x.com"),
            _customer("Ann", "Lee", "a@x.com"),
        ]
        snapshot = list(items)

        result = filter_and_sort(items, "", "name-asc")

        assert items == snapshot
        assert result is not items

    def test_enum_values_are_searchable(self):
        hotel = SimpleNamespace(name="Lagoon", venue_type=VenueType.HOTEL, location="Galle", city="Galle",
                                created_at=None, price_min=10)
        other = SimpleNamespace(name="Hall", venue_type=VenueType.BANQUET_HALL, location="Kandy", city="Kandy",
                                created_at=None, price_min=10)

        assert filter_and_sort([hotel, other], "hotel", "recent", VENUE_VIEW) == [hotel]


class TestSort:
    def test_recent_orders_by_date_descending(self):
        old = _customer("A", "A", "a@x.com", last_booking=datetime(2024, 1, 1, tzinfo=timezone.utc))
        new = _customer("B", "B", "b@x.com", last_booking=datetime(2024, 6, 1, tzinfo=timezone.utc))

        assert filter_and_sort([old, new], "", "recent") == [new, old]

    def test_oldest_orders_by_date_ascending(self):
        old = _customer("A", "A", "a@x.com", last_booking="2024-01-01T00:00:00Z")
        new = _customer("B", "B", "b@x.com", last_booking="2024-06-01T00:00:00Z")

        assert filter_and_sort([new, old], "", "oldest") == [old, new]

    def test_recent_is_stable_on_ties(self):
        same = datetime(2024, 3, 1, tzinfo=timezone.utc)
        first = _customer("First", "A", "1@x.com", last_booking=same)
        second = _customer("Second", "B", "2@x.com", last_booking=same)
        third = _customer("Third", "C", "3@x.com", last_booking=same)

        assert filter_and_sort([first, second, third], "", "recent") == [first, second, third]

    def test_missing_dates_sort_as_oldest(self):
        dated = _customer("A", "A", "a@x.com", last_booking=datetime(2024, 1, 1))
        undated = _customer("B", "B", "b@x.com")

        assert filter_and_sort([undated, dated], "", "recent") == [dated, undated]

    def test_naive_and_aware_datetimes_compare(self):
        naive = _customer("A", "A", "a@x.com", last_booking=datetime(2024, 1, 2))
        aware = _customer("B", "B", "b@x.com", last_booking=datetime(2024, 1, 1, tzinfo=timezone.utc))

        assert filter_and_sort([aware, naive], "", "recent") == [naive, aware]

    def test_bookings_desc(self):
        bob = _customer("Bob", "", "b@x.com", bookings_count=2)
        ann = _customer("Ann", "", "a@x.com", bookings_count=5)

        assert filter_and_sort([bob, ann], "", "bookings-desc") == [ann, bob]

    def test_name_sort_uses_full_name(self):
        ann_lee = _customer("Ann", "Lee", "a@x.com")
        ann_de = _customer("Ann", "De Silva", "d@x.com")
        bob = _customer("bob", "Ng", "b@x.com")

        assert filter_and_sort([bob, ann_lee, ann_de], "", "name-asc") == [ann_de, ann_lee, bob]
        assert filter_and_sort([bob, ann_lee, ann_de], "", "name-desc") == [bob, ann_lee, ann_de]

    def test_price_sorts(self):
        cheap = _customer("A", "A", "a@x.com", total_spent=100)
        dear = _customer("B", "B", "b@x.com", total_spent=900)

        assert filter_and_sort([dear, cheap], "", "price-asc") == [cheap, dear]
        assert filter_and_sort([cheap, dear], "", "price-desc") == [dear, cheap]

    def test_objects_are_supported(self):
        a = SimpleNamespace(name="Zed", email="z@x.com", phone=None, company_name=None,
                            created_at=datetime(2024, 1, 1))
        b = SimpleNamespace(name="Amy", email="a@x.com", phone=None, company_name=None,
                            created_at=datetime(2024, 2, 1))

        assert filter_and_sort([a, b], "", "name-asc", USER_VIEW) == [b, a]


class TestSortKeyValidation:
    def test_unknown_sort_key_raises(self):
        with pytest.raises(ValueError, match="Unknown sort key"):
            filter_and_sort([], "", "popular")

    def test_sort_key_without_field_in_view_raises(self):
        with pytest.raises(ValueError, match="not supported"):
            filter_and_sort([{"name": "x"}], "", "bookings-desc", USER_VIEW)
