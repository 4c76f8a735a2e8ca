# services/favorites.py - per-device favorites kept in the favoritos table
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crud import favorite as crud
from errors import BadRequest, NotFound
from models import Favorite

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "deviceId, googleBooksId e titulo são obrigatórios"


def require_favorite_fields(device_id: Optional[str], google_books_id: Optional[str], titulo: Optional[str]):
    if not device_id or not google_books_id or not titulo:
        raise BadRequest(REQUIRED_FIELDS_MESSAGE)


async def list_all(db: AsyncSession) -> List[Favorite]:
    return await crud.get_favorites(db)


async def list_by_device(db: AsyncSession, device_id: str) -> List[Favorite]:
    return await crud.get_favorites_by_device(db, device_id)


async def is_favorite(db: AsyncSession, device_id: str, google_books_id: str) -> bool:
    return await crud.favorite_pair_exists(db, device_id, google_books_id)


async def add(
    db: AsyncSession,
    device_id: Optional[str],
    google_books_id: Optional[str],
    titulo: Optional[str],
    autor: Optional[str] = None,
    imagem_url: Optional[str] = None,
    descricao: Optional[str] = None,
    data_publicacao: Optional[str] = None,
) -> Favorite:
    """Mark a volume as favorite for a device.

    Adding a pair that is already there returns the stored row untouched;
    the snapshot fields of the first add win.
    """
    require_favorite_fields(device_id, google_books_id, titulo)

    existing = await crud.find_favorite(db, device_id, google_books_id)
    if existing:
        logger.debug("Favorite already present: device=%s volume=%s", device_id, google_books_id)
        return existing

    favorite = Favorite(
        device_id=device_id,
        google_books_id=google_books_id,
        titulo=titulo,
        autor=autor,
        imagem_url=imagem_url,
        descricao=descricao,
        data_publicacao=data_publicacao,
    )
    try:
        favorite = await crud.create_favorite(db, favorite)
    except IntegrityError:
        # another request inserted the same pair between our read and write
        await db.rollback()
        existing = await crud.find_favorite(db, device_id, google_books_id)
        if existing is None:
            raise
        logger.warning("Concurrent favorite add absorbed: device=%s volume=%s", device_id, google_books_id)
        return existing

    logger.info("Favorite %s added: device=%s volume=%s", favorite.id, device_id, google_books_id)
    return favorite


async def remove(db: AsyncSession, device_id: str, google_books_id: str):
    removed = await crud.delete_favorite_pair(db, device_id, google_books_id)
    if not removed:
        raise NotFound("Favorito não encontrado para este dispositivo e livro")
    logger.info("Favorite removed: device=%s volume=%s", device_id, google_books_id)


async def find_by_id(db: AsyncSession, favorite_id: int) -> Optional[Favorite]:
    return await crud.get_favorite(db, favorite_id)


async def delete_by_id(db: AsyncSession, favorite_id: int):
    favorite = await crud.get_favorite(db, favorite_id)
    if favorite is None:
        raise NotFound(f"Favorito não encontrado com ID: {favorite_id}")
    await crud.delete_favorite(db, favorite)
    logger.info("Favorite %s deleted", favorite_id)
