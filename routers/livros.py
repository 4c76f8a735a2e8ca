from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas import Book, BookDTO, FavoritePayload
from services import books as service

router = APIRouter(
    prefix="/livros",
    tags=["livros"],
)


# ─────────────────────── CATALOG ───────────────────────

@router.post("", response_model=BookDTO)
async def create_book(dto: BookDTO, db: AsyncSession = Depends(get_db)):
    return await service.create(db, dto)


@router.get("", response_model=List[BookDTO])
async def list_books(db: AsyncSession = Depends(get_db)):
    return await service.list_all(db)


@router.get("/status")
async def status_check(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


# ─────────────────────── FAVORITES ───────────────────────

@router.get("/favoritos/device/{device_id}", response_model=List[Book])
async def list_device_favorites(device_id: str, db: AsyncSession = Depends(get_db)):
    return await service.fav_list_by_device(db, device_id)


@router.get("/favoritos/check", response_model=bool)
async def check_favorite(
    device_id: str = Query(..., alias="deviceId"),
    google_books_id: str = Query(..., alias="googleBooksId"),
    db: AsyncSession = Depends(get_db),
):
    return await service.fav_is(db, device_id, google_books_id)


@router.post("/favoritos", response_model=Book, status_code=status.HTTP_201_CREATED)
async def add_favorite(payload: FavoritePayload, db: AsyncSession = Depends(get_db)):
    """
    Add a Google Books volume to the device's favorites as a book record
    """
    return await service.fav_add(
        db,
        payload.device_id,
        payload.google_books_id,
        payload.titulo,
        autor=payload.autor,
        imagem_url=payload.imagem_url,
        descricao=payload.descricao,
        data_publicacao_texto=payload.data_publicacao,
    )


@router.delete("/favoritos", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    device_id: str = Query(..., alias="deviceId"),
    google_books_id: str = Query(..., alias="googleBooksId"),
    db: AsyncSession = Depends(get_db),
):
    """
    Unflag a favorite book; the book itself is kept
    """
    await service.fav_remove(db, device_id, google_books_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─────────────────────── SEARCH ───────────────────────

@router.get("/busca", response_model=List[Book])
async def search_books(query: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """
    Books whose title or author contains the query, ignoring case. No query returns every book.
    """
    return await service.search_by_title_or_author(db, query)


@router.get("/busca/titulo", response_model=List[BookDTO])
async def search_by_title(titulo: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await service.search_by_field(db, "titulo", titulo)


@router.get("/busca/autor", response_model=List[BookDTO])
async def search_by_author(autor: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await service.search_by_field(db, "autor", autor)


@router.get("/busca/genero", response_model=List[BookDTO])
async def search_by_genre(genero: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    return await service.search_by_field(db, "genero", genero)


# ─────────────────────── BY ID ───────────────────────

@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: int, db: AsyncSession = Depends(get_db)):
    book = await service.find_by_id(db, book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Livro não encontrado")
    return book


@router.put("/{book_id}", response_model=BookDTO)
async def update_book(book_id: int, dto: BookDTO, db: AsyncSession = Depends(get_db)):
    book = await service.update(db, book_id, dto)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Livro não encontrado")
    return book


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: int, db: AsyncSession = Depends(get_db)):
    await service.delete_by_id(db, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
