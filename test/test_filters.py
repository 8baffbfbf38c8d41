# Test type: unit
# Validation: inclusive / open-ended date range filter and ledger text search
# Command: pytest test/test_filters.py -v

import copy
from datetime import datetime

import pytest

from app.utils.filters import filter_by_date_range, search_rows

FIELD = "purchaseDate"


def _rows():
    return [
        {"transactionId": 1, "customerName": "John", "purchaseDate": "2023-12-31"},
        {"transactionId": 2, "customerName": "Jane", "purchaseDate": "2024-01-01"},
        {"transactionId": 3, "customerName": "John", "purchaseDate": "2024-01-15"},
        {"transactionId": 4, "customerName": "Bob", "purchaseDate": "2024-01-31"},
        {"transactionId": 5, "customerName": "Jane", "purchaseDate": "2024-02-01"},
    ]


def _ids(rows):
    return [r["transactionId"] for r in rows]


# ---------------------------------------------------------------------------
# filter_by_date_range() tests
# ---------------------------------------------------------------------------

class TestFilterByDateRange:
    def test_january_range(self):
        result = filter_by_date_range(_rows(), "2024-01-01", "2024-01-31", FIELD)
        assert 3 in _ids(result)
        assert 5 not in _ids(result)

    def test_both_bounds_inclusive(self):
        result = filter_by_date_range(_rows(), "2024-01-01", "2024-01-31", FIELD)
        assert _ids(result) == [2, 3, 4]

    def test_only_start(self):
        result = filter_by_date_range(_rows(), "2024-01-15", None, FIELD)
        assert _ids(result) == [3, 4, 5]

    def test_only_end(self):
        result = filter_by_date_range(_rows(), None, "2024-01-01", FIELD)
        assert _ids(result) == [1, 2]

    def test_empty_string_bounds_are_absent(self):
        result = filter_by_date_range(_rows(), "", "", FIELD)
        assert _ids(result) == [1, 2, 3, 4, 5]

    def test_no_bounds_drops_missing_and_bad_dates(self):
        rows = _rows() + [
            {"transactionId": 6},
            {"transactionId": 7, "purchaseDate": ""},
            {"transactionId": 8, "purchaseDate": "not-a-date"},
            {"transactionId": 9, "purchaseDate": None},
        ]
        result = filter_by_date_range(rows, None, None, FIELD)
        assert _ids(result) == [1, 2, 3, 4, 5]

    def test_unparseable_bound_is_ignored(self):
        result = filter_by_date_range(_rows(), "garbage", "2024-01-01", FIELD)
        assert _ids(result) == [1, 2]

    def test_datetime_bounds(self):
        result = filter_by_date_range(
            _rows(), datetime(2024, 1, 2), datetime(2024, 1, 31), FIELD
        )
        assert _ids(result) == [3, 4]

    def test_time_of_day_after_end_bound_excluded(self):
        rows = [{"transactionId": 1, "purchaseDate": "2024-01-31T10:00:00"}]
        assert filter_by_date_range(rows, None, "2024-01-31", FIELD) == []

    def test_other_field_name(self):
        rows = [
            {"id": 1, "shippedOn": "2024-05-01"},
            {"id": 2, "shippedOn": "2024-06-01"},
        ]
        result = filter_by_date_range(rows, "2024-05-15", None, "shippedOn")
        assert [r["id"] for r in result] == [2]

    @pytest.mark.parametrize("field", ["", None])
    def test_empty_field_name(self, field):
        assert filter_by_date_range(_rows(), "2024-01-01", "2024-01-31", field) == []

    @pytest.mark.parametrize("bad", [None, "abc", {"purchaseDate": "2024-01-01"}])
    def test_non_list_data(self, bad):
        assert filter_by_date_range(bad, None, None, FIELD) == []

    def test_non_mapping_rows_excluded(self):
        rows = [None, "2024-01-10", {"purchaseDate": "2024-01-10"}]
        assert filter_by_date_range(rows, None, None, FIELD) == [
            {"purchaseDate": "2024-01-10"}
        ]

    def test_does_not_mutate_and_returns_original_records(self):
        rows = _rows()
        snapshot = copy.deepcopy(rows)
        result = filter_by_date_range(rows, "2024-01-01", None, FIELD)
        assert rows == snapshot
        assert result is not rows
        assert result[0] is rows[1]


# ---------------------------------------------------------------------------
# search_rows() tests
# ---------------------------------------------------------------------------

class TestSearchRows:
    def test_case_insensitive_match(self):
        result = search_rows(_rows(), "JOHN", ["customerName"])
        assert _ids(result) == [1, 3]

    def test_substring_over_all_fields(self):
        result = search_rows(_rows(), "2024-01", None)
        assert _ids(result) == [2, 3, 4]

    def test_only_listed_fields_searched(self):
        assert search_rows(_rows(), "2024", ["customerName"]) == []

    def test_numbers_are_searched_as_text(self):
        assert _ids(search_rows(_rows(), "4", ["transactionId"])) == [4]

    def test_empty_term_returns_copy(self):
        rows = _rows()
        result = search_rows(rows, "", ["customerName"])
        assert result == rows
        assert result is not rows

    def test_missing_field_is_blank(self):
        rows = [{"transactionId": 1}]
        assert search_rows(rows, "john", ["customerName"]) == []

    def test_non_list(self):
        assert search_rows(None, "john") == []

    def test_whitespace_term_is_literal(self):
        rows = [
            {"transactionId": 1, "productPurchased": "Phone Case"},
            {"transactionId": 2, "productPurchased": "Laptop"},
        ]
        assert _ids(search_rows(rows, " ", ["productPurchased"])) == [1]

    def test_whole_number_floats_render_without_decimal(self):
        rows = [
            {"transactionId": 1, "price": 75.0},
            {"transactionId": 2, "price": 75.5},
        ]
        assert _ids(search_rows(rows, "75.", ["price"])) == [2]
        assert _ids(search_rows(rows, "75", ["price"])) == [1, 2]

    def test_booleans_render_lowercase(self):
        rows = [{"transactionId": 1, "returned": True}]
        assert _ids(search_rows(rows, "true", ["returned"])) == [1]
