import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from rate_limiter import current_rate_limit, limiter
from repository import BookRepository
from responses import (
    DATA_CREATED,
    DATA_DELETED,
    DATA_FETCHED,
    DATA_UPDATED,
    NOT_FOUND,
    VALIDATION_ERROR,
    send_response,
)
from schemas import MAX_INTEGER
from services import BookService
from validation import validate_book_payload

router = APIRouter(prefix="/books", tags=["Books"])
logger = logging.getLogger(__name__)


def get_book_repository(db: Session = Depends(get_db)) -> BookRepository:
    return BookRepository(db)


def get_book_service(repository: BookRepository = Depends(get_book_repository)) -> BookService:
    return BookService(repository)


def _parse_book_id(raw_id: str) -> int | None:
    try:
        book_id = int(raw_id)
    except ValueError:
        return None
    if book_id < 1 or book_id > MAX_INTEGER:
        return None
    return book_id


def _not_found():
    return send_response(status.HTTP_404_NOT_FOUND, NOT_FOUND)


# Add Book
@router.post("")
@limiter.limit(current_rate_limit)
def create_book(
    request: Request,
    payload: Any = Body(default=None),
    service: BookService = Depends(get_book_service),
):
    errors = validate_book_payload(payload)
    if errors:
        logger.info(f"Rejected book payload with {len(errors)} violation(s)")
        return send_response(status.HTTP_422_UNPROCESSABLE_ENTITY, VALIDATION_ERROR, errors)

    new_book = service.create(payload)
    return send_response(status.HTTP_201_CREATED, DATA_CREATED, new_book)


# Get Books
@router.get("")
@limiter.limit(current_rate_limit)
def get_books(
    request: Request,
    search: str | None = Query(default=None),
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: BookService = Depends(get_book_service),
):
    result = service.list_books(search=search, page=page, limit=limit)
    return send_response(status.HTTP_200_OK, DATA_FETCHED, result)


@router.get("/{book_id}")
@limiter.limit(current_rate_limit)
def get_book(
    request: Request,
    book_id: str,
    service: BookService = Depends(get_book_service),
):
    parsed_id = _parse_book_id(book_id)
    book = service.get_by_id(parsed_id) if parsed_id is not None else None
    if not book:
        return _not_found()
    return send_response(status.HTTP_200_OK, DATA_FETCHED, book)


@router.put("/{book_id}")
@limiter.limit(current_rate_limit)
def update_book(
    request: Request,
    book_id: str,
    payload: Any = Body(default=None),
    service: BookService = Depends(get_book_service),
):
    errors = validate_book_payload(payload)
    if errors:
        logger.info(f"Rejected book payload with {len(errors)} violation(s)")
        return send_response(status.HTTP_422_UNPROCESSABLE_ENTITY, VALIDATION_ERROR, errors)

    parsed_id = _parse_book_id(book_id)
    updated_book = service.update(parsed_id, payload) if parsed_id is not None else None
    if not updated_book:
        return _not_found()
    return send_response(status.HTTP_201_CREATED, DATA_UPDATED, updated_book)


@router.delete("/{book_id}")
@limiter.limit(current_rate_limit)
def delete_book(
    request: Request,
    book_id: str,
    service: BookService = Depends(get_book_service),
):
    parsed_id = _parse_book_id(book_id)
    deleted = service.delete(parsed_id) if parsed_id is not None else False
    if not deleted:
        return _not_found()
    return send_response(status.HTTP_201_CREATED, DATA_DELETED)
