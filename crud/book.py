# crud/book.py - queries over tb_livros, catalog and favorite-mode rows alike
from typing import Dict, List, Optional

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Book

SEARCHABLE_FIELDS = ("titulo", "autor", "genero")


def _favorite_pair(device_id: str, google_books_id: str):
    return (
        Book.device_id == device_id,
        Book.google_books_id == google_books_id,
        Book.favorito.is_(True),
    )


async def get_books(db: AsyncSession) -> List[Book]:
    result = await db.execute(select(Book).order_by(Book.id))
    return result.scalars().all()


async def get_book(db: AsyncSession, book_id: int) -> Optional[Book]:
    result = await db.execute(select(Book).where(Book.id == book_id))
    return result.scalar_one_or_none()


async def search_books(db: AsyncSession, q: str) -> List[Book]:
    """Books whose titulo or autor contains ``q``, ignoring case."""
    stmt = select(Book).where(or_(
        Book.titulo.icontains(q, autoescape=True),
        Book.autor.icontains(q, autoescape=True),
    )).order_by(Book.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def search_books_by_field(db: AsyncSession, field: str, q: str) -> List[Book]:
    if field not in SEARCHABLE_FIELDS:
        raise ValueError(f"Cannot search books by {field!r}")
    column = getattr(Book, field)
    result = await db.execute(select(Book).where(column.icontains(q, autoescape=True)).order_by(Book.id))
    return result.scalars().all()


async def get_books_by_google_id(db: AsyncSession, google_books_id: str) -> List[Book]:
    result = await db.execute(select(Book).where(Book.google_books_id == google_books_id).order_by(Book.id))
    return result.scalars().all()


async def get_favorite_books(db: AsyncSession, device_id: str) -> List[Book]:
    stmt = select(Book).where(Book.device_id == device_id, Book.favorito.is_(True)).order_by(Book.id)
    result = await db.execute(stmt)
    return result.scalars().all()


async def favorite_book_exists(db: AsyncSession, device_id: str, google_books_id: str) -> bool:
    return await db.scalar(select(exists().where(*_favorite_pair(device_id, google_books_id))))


async def find_favorite_book(db: AsyncSession, device_id: str, google_books_id: str) -> Optional[Book]:
    result = await db.execute(select(Book).where(*_favorite_pair(device_id, google_books_id)))
    return result.scalar_one_or_none()


async def create_book(db: AsyncSession, book: Book) -> Book:
    db.add(book)
    await db.commit()
    await db.refresh(book)
    return book


async def update_book(db: AsyncSession, book: Book, values: Dict) -> Book:
    for key, value in values.items():
        setattr(book, key, value)
    await db.commit()
    await db.refresh(book)
    return book


async def delete_book(db: AsyncSession, book_id: int):
    await db.execute(delete(Book).where(Book.id == book_id))
    await db.commit()
