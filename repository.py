"""Persistence gateway for books.

All queries go through an explicitly passed SQLAlchemy session. Rows are
mapped to ``schemas.BookOut`` before they leave this module, and "not found"
is reported as ``None``/``False`` rather than raised.
"""
import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
from schemas import BookOut

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "/"


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _to_entity(book: models.Book) -> BookOut:
    return BookOut(
        id=book.id,
        title=book.title,
        author=book.author,
        published_year=book.published_year,
        genres=[genre.name for genre in book.genre_rows],
        stock=book.stock,
    )


class BookRepository:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, book_id: int) -> models.Book | None:
        return self.db.query(models.Book).filter(models.Book.id == book_id).first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    @staticmethod
    def _apply(book: models.Book, fields: dict[str, Any]) -> None:
        for key, value in fields.items():
            if key == "genres":
                book.genre_rows = [
                    models.BookGenre(position=position, name=name)
                    for position, name in enumerate(value)
                ]
            elif key in ("published_year", "stock"):
                setattr(book, key, int(value))
            else:
                setattr(book, key, value)

    def create_book(self, fields: dict[str, Any]) -> BookOut:
        new_book = models.Book()
        self._apply(new_book, fields)

        self.db.add(new_book)
        self._commit()
        self.db.refresh(new_book)

        logger.info(f"Created book {new_book.id}")
        return _to_entity(new_book)

    def get_books(self, search: str = "", page: int = 1, limit: int = 10) -> tuple[list[BookOut], int]:
        """
        Return one page of books matching ``search`` and the total match count.

        The search term is matched case-insensitively as a substring of the
        title, the author or any genre. Results are ordered by id.
        """
        query = self.db.query(models.Book)

        if search:
            pattern = _like_pattern(search)
            query = query.filter(
                or_(
                    models.Book.title.ilike(pattern, escape=LIKE_ESCAPE),
                    models.Book.author.ilike(pattern, escape=LIKE_ESCAPE),
                    models.Book.genre_rows.any(
                        models.BookGenre.name.ilike(pattern, escape=LIKE_ESCAPE)
                    ),
                )
            )

        # count before pagination
        total_books = query.count()
        rows = (
            query.order_by(models.Book.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [_to_entity(row) for row in rows], total_books

    def get_book_by_id(self, book_id: int) -> BookOut | None:
        db_book = self._find(book_id)
        if not db_book:
            return None
        return _to_entity(db_book)

    def update_book(self, book_id: int, fields: dict[str, Any]) -> BookOut | None:
        db_book = self._find(book_id)
        if not db_book:
            return None

        self._apply(db_book, fields)
        self._commit()
        self.db.refresh(db_book)

        logger.info(f"Updated book {book_id} fields={sorted(fields)}")
        return _to_entity(db_book)

    def delete_book(self, book_id: int) -> bool:
        db_book = self._find(book_id)
        if not db_book:
            return False

        self.db.delete(db_book)
        self._commit()

        logger.info(f"Deleted book {book_id}")
        return True
