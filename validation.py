"""Field checks for incoming book payloads.

``validate_book_payload`` never raises on bad input; it returns every
violation it finds so the caller can report all failing fields at once.
"""
from datetime import datetime
from typing import Any

from schemas import MAX_INTEGER

MIN_PUBLISHED_YEAR = 1000


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_whole(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _check_text(name: str, value: Any) -> list[str]:
    if not isinstance(value, str):
        return [f"{name} must be a string"]
    if not value.strip():
        return [f"{name} should not be empty"]
    return []


def _check_whole_number(name: str, value: Any, minimum: int, maximum: int | None = None) -> list[str]:
    if not _is_number(value):
        return [f"{name} must be a number conforming to the specified constraints"]
    if not _is_whole(value):
        return [f"{name} must be an integer number"]

    errors = []
    if value < minimum:
        errors.append(f"{name} must not be less than {minimum}")
    if maximum is not None and value > maximum:
        errors.append(f"{name} must not be greater than {maximum}")
    return errors


def _check_genres(value: Any) -> list[str]:
    if not isinstance(value, list):
        return ["genres must be an array"]
    if not value:
        return ["genres should not be empty"]

    errors = []
    if any(not isinstance(genre, str) for genre in value):
        errors.append("each value in genres must be a string")
    if any(isinstance(genre, str) and not genre.strip() for genre in value):
        errors.append("each value in genres should not be empty")
    return errors


def validate_book_payload(payload: Any, current_year: int | None = None) -> list[str]:
    """Return the constraint violations of a create/update body, in field order.

    ``current_year`` defaults to the calendar year at call time.
    """
    if not isinstance(payload, dict):
        return ["book payload must be a JSON object"]

    if current_year is None:
        current_year = datetime.now().year

    errors: list[str] = []
    errors += _check_text("title", payload.get("title"))
    errors += _check_text("author", payload.get("author"))
    errors += _check_whole_number(
        "published_year", payload.get("published_year"), MIN_PUBLISHED_YEAR, current_year
    )
    errors += _check_genres(payload.get("genres"))
    errors += _check_whole_number("stock", payload.get("stock"), 0, MAX_INTEGER)
    return errors
