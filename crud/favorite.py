# crud/favorite.py - queries over the favoritos table
from typing import List, Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Favorite


def _pair(device_id: str, google_books_id: str):
    return (Favorite.device_id == device_id, Favorite.google_books_id == google_books_id)


async def get_favorites(db: AsyncSession) -> List[Favorite]:
    result = await db.execute(select(Favorite).order_by(Favorite.id))
    return result.scalars().all()


async def get_favorite(db: AsyncSession, favorite_id: int) -> Optional[Favorite]:
    return await db.get(Favorite, favorite_id)


async def favorite_exists(db: AsyncSession, favorite_id: int) -> bool:
    return await db.scalar(select(exists().where(Favorite.id == favorite_id)))


async def get_favorites_by_device(db: AsyncSession, device_id: str) -> List[Favorite]:
    result = await db.execute(select(Favorite).where(Favorite.device_id == device_id).order_by(Favorite.id))
    return result.scalars().all()


async def get_favorites_by_google_id(db: AsyncSession, google_books_id: str) -> List[Favorite]:
    result = await db.execute(
        select(Favorite).where(Favorite.google_books_id == google_books_id).order_by(Favorite.id)
    )
    return result.scalars().all()


async def favorite_pair_exists(db: AsyncSession, device_id: str, google_books_id: str) -> bool:
    return await db.scalar(select(exists().where(*_pair(device_id, google_books_id))))


async def find_favorite(db: AsyncSession, device_id: str, google_books_id: str) -> Optional[Favorite]:
    result = await db.execute(select(Favorite).where(*_pair(device_id, google_books_id)))
    return result.scalar_one_or_none()


async def create_favorite(db: AsyncSession, favorite: Favorite) -> Favorite:
    db.add(favorite)
    await db.commit()
    await db.refresh(favorite)
    return favorite


async def delete_favorite(db: AsyncSession, favorite: Favorite):
    await db.delete(favorite)
    await db.commit()


async def delete_favorite_pair(db: AsyncSession, device_id: str, google_books_id: str) -> int:
    """Delete by (device, volume); returns the number of rows removed."""
    result = await db.execute(delete(Favorite).where(*_pair(device_id, google_books_id)))
    await db.commit()
    return result.rowcount
