import math
from typing import Any

from repository import BookRepository
from schemas import BOOK_FIELDS, MAX_INTEGER, BookOut, BookPage

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if 0 < number <= MAX_INTEGER else default


def _book_fields(payload: dict[str, Any]) -> dict[str, Any]:
    # id and unknown keys are never taken from the caller
    return {key: payload[key] for key in BOOK_FIELDS if key in payload}


class BookService:
    """Book use cases on top of a ``BookRepository``.

    Payloads reaching ``create`` and ``update`` are expected to be validated
    already. Missing books come back as ``None``/``False``.
    """

    def __init__(self, repository: BookRepository):
        self.repository = repository

    def create(self, payload: dict[str, Any]) -> BookOut:
        return self.repository.create_book(_book_fields(payload))

    def list_books(self, search: str | None = None, page: Any = None, limit: Any = None) -> BookPage:
        search = search or ""
        page = _positive_int(page, DEFAULT_PAGE)
        limit = _positive_int(limit, DEFAULT_LIMIT)

        books, total_books = self.repository.get_books(search=search, page=page, limit=limit)
        return BookPage(
            page=page,
            total_pages=math.ceil(total_books / limit),
            total_books=total_books,
            books=books,
        )

    def get_by_id(self, book_id: int) -> BookOut | None:
        return self.repository.get_book_by_id(book_id)

    def update(self, book_id: int, payload: dict[str, Any]) -> BookOut | None:
        return self.repository.update_book(book_id, _book_fields(payload))

    def delete(self, book_id: int) -> bool:
        return self.repository.delete_book(book_id)
