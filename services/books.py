# services/books.py - catalog CRUD, favorites stored on tb_livros, and search
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crud import book as crud
from errors import NotFound
from models import Book
from schemas import BookDTO
from services.favorites import require_favorite_fields

logger = logging.getLogger(__name__)

CORE_FIELDS = ("titulo", "autor", "genero", "capa", "data_publicacao", "descricao")


def _core_values(dto: BookDTO) -> dict:
    # every core field, unset ones included: updates overwrite, they never merge
    return {field: getattr(dto, field) for field in CORE_FIELDS}


# ─────────────────────── CATALOG ───────────────────────

async def create(db: AsyncSession, dto: BookDTO) -> Book:
    book = await crud.create_book(db, Book(**_core_values(dto)))
    logger.info("Book %s created", book.id)
    return book


async def list_all(db: AsyncSession) -> List[Book]:
    return await crud.get_books(db)


async def find_by_id(db: AsyncSession, book_id: int) -> Optional[Book]:
    return await crud.get_book(db, book_id)


async def update(db: AsyncSession, book_id: int, dto: BookDTO) -> Optional[Book]:
    book = await crud.get_book(db, book_id)
    if book is None:
        return None
    return await crud.update_book(db, book, _core_values(dto))


async def delete_by_id(db: AsyncSession, book_id: int):
    await crud.delete_book(db, book_id)


# ─────────────────────── FAVORITES ON BOOKS ───────────────────────

async def fav_list_by_device(db: AsyncSession, device_id: str) -> List[Book]:
    return await crud.get_favorite_books(db, device_id)


async def fav_is(db: AsyncSession, device_id: str, google_books_id: str) -> bool:
    return await crud.favorite_book_exists(db, device_id, google_books_id)


async def fav_add(
    db: AsyncSession,
    device_id: Optional[str],
    google_books_id: Optional[str],
    titulo: Optional[str],
    autor: Optional[str] = None,
    imagem_url: Optional[str] = None,
    descricao: Optional[str] = None,
    data_publicacao_texto: Optional[str] = None,
) -> Book:
    """Store a Google Books volume as a favorite book of a device.

    Idempotent on (device, volume) among flagged rows. The cover URL seeds
    both ``capa`` and ``imagem_url``.
    """
    require_favorite_fields(device_id, google_books_id, titulo)

    existing = await crud.find_favorite_book(db, device_id, google_books_id)
    if existing:
        return existing

    book = Book(
        device_id=device_id,
        google_books_id=google_books_id,
        titulo=titulo,
        autor=autor,
        imagem_url=imagem_url,
        capa=imagem_url,
        descricao=descricao,
        data_publicacao_texto=data_publicacao_texto,
        favorito=True,
    )
    try:
        book = await crud.create_book(db, book)
    except IntegrityError:
        await db.rollback()
        existing = await crud.find_favorite_book(db, device_id, google_books_id)
        if existing is None:
            raise
        logger.warning("Concurrent favorite book add absorbed: device=%s volume=%s", device_id, google_books_id)
        return existing

    logger.info("Favorite book %s added: device=%s volume=%s", book.id, device_id, google_books_id)
    return book


async def fav_remove(db: AsyncSession, device_id: str, google_books_id: str):
    """Unflag a favorite book. The row stays in the catalog."""
    book = await crud.find_favorite_book(db, device_id, google_books_id)
    if book is None:
        raise NotFound("Favorito não encontrado para este dispositivo e livro")
    await crud.update_book(db, book, {"favorito": False})
    logger.info("Favorite book %s removed: device=%s", book.id, device_id)


# ─────────────────────── SEARCH ───────────────────────

async def search_by_title_or_author(db: AsyncSession, query: Optional[str]) -> List[Book]:
    if query is None or not query.strip():
        return await crud.get_books(db)
    return await crud.search_books(db, query.strip())


async def search_by_field(db: AsyncSession, field: str, query: Optional[str]) -> List[Book]:
    if query is None or not query.strip():
        return await crud.get_books(db)
    return await crud.search_books_by_field(db, field, query.strip())
