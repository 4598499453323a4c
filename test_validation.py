from datetime import datetime

import pytest

from validation import validate_book_payload


def _payload(**overrides):
    payload = {
        "title": "Dune",
        "author": "Herbert",
        "published_year": 1965,
        "genres": ["Sci-Fi"],
        "stock": 3,
    }
    payload.update(overrides)
    return payload


def test_valid_payload_has_no_errors():
    assert validate_book_payload(_payload()) == []


def test_year_below_minimum_is_rejected():
    assert validate_book_payload(_payload(published_year=999)) == [
        "published_year must not be less than 1000"
    ]


def test_current_year_is_accepted():
    assert validate_book_payload(_payload(published_year=datetime.now().year)) == []


def test_year_after_current_year_is_rejected():
    errors = validate_book_payload(_payload(published_year=2031), current_year=2030)
    assert errors == ["published_year must not be greater than 2030"]


def test_year_upper_bound_follows_the_given_year():
    assert validate_book_payload(_payload(published_year=2030), current_year=2030) == []


def test_empty_genres_are_rejected():
    assert validate_book_payload(_payload(genres=[])) == ["genres should not be empty"]


def test_genres_must_be_a_list():
    assert validate_book_payload(_payload(genres="Sci-Fi")) == ["genres must be an array"]


def test_genre_elements_must_be_non_empty_strings():
    errors = validate_book_payload(_payload(genres=["Sci-Fi", 7, "  "]))
    assert errors == [
        "each value in genres must be a string",
        "each value in genres should not be empty",
    ]


def test_negative_stock_is_rejected():
    assert validate_book_payload(_payload(stock=-1)) == ["stock must not be less than 0"]


def test_zero_stock_is_accepted():
    assert validate_book_payload(_payload(stock=0)) == []


def test_fractional_stock_is_rejected():
    assert validate_book_payload(_payload(stock=2.5)) == ["stock must be an integer number"]


def test_whole_float_values_are_accepted():
    assert validate_book_payload(_payload(published_year=1965.0, stock=3.0)) == []


@pytest.mark.parametrize("value", ["1965", None, True])
def test_year_must_be_numeric(value):
    assert validate_book_payload(_payload(published_year=value)) == [
        "published_year must be a number conforming to the specified constraints"
    ]


def test_title_and_author_must_be_text():
    errors = validate_book_payload(_payload(title=42, author=""))
    assert errors == ["title must be a string", "author should not be empty"]


def test_all_failing_fields_are_reported_in_order():
    errors = validate_book_payload({})
    assert errors == [
        "title must be a string",
        "author must be a string",
        "published_year must be a number conforming to the specified constraints",
        "genres must be an array",
        "stock must be a number conforming to the specified constraints",
    ]


def test_non_object_payload_is_rejected():
    assert validate_book_payload(["Dune"]) == ["book payload must be a JSON object"]
    assert validate_book_payload(None) == ["book payload must be a JSON object"]


def test_stock_is_bounded_by_the_column_size():
    assert validate_book_payload(_payload(stock=2**31 - 1)) == []
    assert validate_book_payload(_payload(stock=2**31)) == [
        "stock must not be greater than 2147483647"
    ]
