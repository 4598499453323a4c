from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database import Base


class Book(Base):
    __tablename__ = "books"
    # never hand out the id of a deleted row again on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    published_year = Column(Integer, nullable=False)
    stock = Column(Integer, nullable=False)

    genre_rows = relationship(
        "BookGenre",
        order_by="BookGenre.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class BookGenre(Base):
    __tablename__ = "book_genres"

    id = Column(Integer, primary_key=True)
    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
