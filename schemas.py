from typing import Any

from pydantic import BaseModel, Field

BOOK_FIELDS = ("title", "author", "published_year", "genres", "stock")

# upper bound of the 32-bit integer columns
MAX_INTEGER = 2**31 - 1


class BookOut(BaseModel):
    id: int
    title: str
    author: str
    published_year: int
    genres: list[str]
    stock: int


class BookPage(BaseModel):
    page: int
    total_pages: int = Field(serialization_alias="totalPages")
    total_books: int = Field(serialization_alias="totalBooks")
    books: list[BookOut]


class Envelope(BaseModel):
    message: str
    data: Any = None
