from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas import Favorite, FavoritePayload
from services import favorites as service

router = APIRouter(
    prefix="/favoritos",
    tags=["favoritos"],
)


@router.get("", response_model=List[Favorite])
async def list_favorites(db: AsyncSession = Depends(get_db)):
    return await service.list_all(db)


@router.get("/device/{device_id}", response_model=List[Favorite])
async def list_device_favorites(device_id: str, db: AsyncSession = Depends(get_db)):
    """
    Favorites of a device
    """
    return await service.list_by_device(db, device_id)


@router.get("/check", response_model=bool)
async def check_favorite(
    device_id: str = Query(..., alias="deviceId"),
    google_books_id: str = Query(..., alias="googleBooksId"),
    db: AsyncSession = Depends(get_db),
):
    """
    Whether a Google Books volume is a favorite of the device
    """
    return await service.is_favorite(db, device_id, google_books_id)


@router.post("", response_model=Favorite, status_code=status.HTTP_201_CREATED)
async def add_favorite(payload: FavoritePayload, db: AsyncSession = Depends(get_db)):
    """
    Add a Google Books volume to the device's favorites; re-adding returns the stored favorite
    """
    return await service.add(
        db,
        payload.device_id,
        payload.google_books_id,
        payload.titulo,
        autor=payload.autor,
        imagem_url=payload.imagem_url,
        descricao=payload.descricao,
        data_publicacao=payload.data_publicacao,
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    device_id: str = Query(..., alias="deviceId"),
    google_books_id: str = Query(..., alias="googleBooksId"),
    db: AsyncSession = Depends(get_db),
):
    await service.remove(db, device_id, google_books_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# /{favorite_id} routes stay last so they do not shadow /check and /device
@router.get("/{favorite_id}", response_model=Favorite)
async def get_favorite(favorite_id: int, db: AsyncSession = Depends(get_db)):
    favorite = await service.find_by_id(db, favorite_id)
    if not favorite:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorito não encontrado")
    return favorite


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_favorite(favorite_id: int, db: AsyncSession = Depends(get_db)):
    await service.delete_by_id(db, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
