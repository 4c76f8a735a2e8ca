import datetime as dt

import pytest

from crud import book as crud
from errors import BadRequest, NotFound
from schemas import BookDTO
from services import books

pytestmark = pytest.mark.anyio


def _dto(**values):
    return BookDTO(**values)


async def test_create_and_find_by_id(db):
    published = dt.datetime(1954, 7, 29)
    book = await books.create(db, _dto(titulo="O Senhor dos Anéis", autor="Tolkien", genero="Fantasia",
                                       capa="http://img/1.jpg", data_publicacao=published, descricao="Terra Média"))

    found = await books.find_by_id(db, book.id)
    assert BookDTO.model_validate(found) == BookDTO.model_validate(book)
    assert found.data_publicacao == published
    assert found.favorito is False
    assert found.device_id is None
    assert found.data_criacao is not None


async def test_create_ignores_client_id(db):
    book = await books.create(db, _dto(id=99, titulo="T"))

    assert book.id != 99


async def test_list_all_in_insertion_order(db):
    for titulo in ("A", "B", "C"):
        await books.create(db, _dto(titulo=titulo))

    assert [b.titulo for b in await books.list_all(db)] == ["A", "B", "C"]


async def test_update_overwrites_core_fields_with_nulls(db):
    book = await books.create(db, _dto(titulo="Old", autor="Someone", genero="G", capa="c", descricao="d"))

    updated = await books.update(db, book.id, _dto(titulo="New"))

    assert updated.titulo == "New"
    for field in ("autor", "genero", "capa", "data_publicacao", "descricao"):
        assert getattr(updated, field) is None


async def test_update_keeps_favorite_fields(db):
    book = await books.fav_add(db, "D1", "G1", "T1", imagem_url="http://img")

    updated = await books.update(db, book.id, _dto(titulo="Renamed", capa="http://other"))

    assert updated.capa == "http://other"
    assert updated.imagem_url == "http://img"
    assert updated.device_id == "D1"
    assert updated.favorito is True


async def test_update_unknown_id_returns_none(db):
    assert await books.update(db, 404, _dto(titulo="x")) is None


async def test_delete_is_silent_for_unknown_id(db):
    book = await books.create(db, _dto(titulo="T"))

    await books.delete_by_id(db, book.id)
    await books.delete_by_id(db, book.id)

    assert await books.find_by_id(db, book.id) is None


async def test_fav_add_seeds_cover_and_flag(db):
    book = await books.fav_add(db, "D2", "G9", "B9", autor="A", imagem_url="http://img/9",
                               descricao="desc", data_publicacao_texto="2009-05")

    assert book.favorito is True
    assert book.capa == book.imagem_url == "http://img/9"
    assert book.data_publicacao_texto == "2009-05"
    assert book.data_publicacao is None
    assert book.data_criacao is not None


async def test_fav_add_is_idempotent(db):
    first = await books.fav_add(db, "D1", "G1", "T1")
    again = await books.fav_add(db, "D1", "G1", "Other title")

    assert again.id == first.id
    assert again.titulo == "T1"
    assert len(await books.fav_list_by_device(db, "D1")) == 1


async def test_fav_add_requires_fields(db):
    with pytest.raises(BadRequest):
        await books.fav_add(db, "D1", None, "T1")


async def test_fav_remove_keeps_row_and_clears_flag(db):
    book_id = (await books.fav_add(db, "D2", "G9", "B9")).id

    await books.fav_remove(db, "D2", "G9")

    found = await books.find_by_id(db, book_id)
    assert found is not None
    assert found.favorito is False
    assert not await books.fav_is(db, "D2", "G9")
    assert await books.fav_list_by_device(db, "D2") == []


async def test_fav_remove_absent_raises_not_found(db):
    with pytest.raises(NotFound):
        await books.fav_remove(db, "D1", "GX")


async def test_fav_add_after_remove_creates_new_row(db):
    first_id = (await books.fav_add(db, "D1", "G1", "T1")).id
    await books.fav_remove(db, "D1", "G1")

    second = await books.fav_add(db, "D1", "G1", "T1")

    assert second.id != first_id
    assert [b.id for b in await crud.get_books_by_google_id(db, "G1")] == [first_id, second.id]


async def test_fav_is_matches_device_listing(db):
    await books.fav_add(db, "D1", "G1", "T1")
    await books.fav_add(db, "D1", "G2", "T2")
    await books.fav_remove(db, "D1", "G2")
    await books.create(db, _dto(titulo="catalog"))

    listed = {b.google_books_id for b in await books.fav_list_by_device(db, "D1")}
    assert listed == {"G1"}
    for google_books_id in ("G1", "G2", "G3"):
        assert await books.fav_is(db, "D1", google_books_id) == (google_books_id in listed)


async def test_concurrent_duplicate_fav_add_returns_stored_row(db, monkeypatch):
    stored_id = (await books.fav_add(db, "D1", "G1", "T1")).id
    real_find = crud.find_favorite_book
    calls = []

    async def stale_find(*args):
        calls.append(args)
        if len(calls) == 1:
            return None
        return await real_find(*args)

    monkeypatch.setattr(crud, "find_favorite_book", stale_find)

    book = await books.fav_add(db, "D1", "G1", "T-late")

    assert book.id == stored_id
    assert book.titulo == "T1"


async def _seed_search(db):
    await books.create(db, _dto(titulo="Clean Code", autor="Martin", genero="Software"))
    await books.create(db, _dto(titulo="The Mythical Man-Month", autor="Brooks", genero="Software"))
    await books.create(db, _dto(titulo="100% Python", autor=None, genero="Programação"))


async def test_search_matches_title_or_author_ignoring_case(db):
    await _seed_search(db)

    assert [b.titulo for b in await books.search_by_title_or_author(db, "code")] == ["Clean Code"]
    assert [b.titulo for b in await books.search_by_title_or_author(db, "BROOKS")] == ["The Mythical Man-Month"]
    assert await books.search_by_title_or_author(db, "tolkien") == []


async def test_search_trims_query(db):
    await _seed_search(db)

    assert [b.autor for b in await books.search_by_title_or_author(db, "  martin  ")] == ["Martin"]


@pytest.mark.parametrize("query", [None, "", "   "])
async def test_blank_search_returns_every_book(db, query):
    await _seed_search(db)

    assert len(await books.search_by_title_or_author(db, query)) == 3


async def test_search_treats_wildcards_literally(db):
    await _seed_search(db)

    assert [b.titulo for b in await books.search_by_title_or_author(db, "100%")] == ["100% Python"]
    assert await books.search_by_title_or_author(db, "C_ean") == []


async def test_search_by_single_field(db):
    await _seed_search(db)

    assert [b.titulo for b in await books.search_by_field(db, "titulo", "man")] == ["The Mythical Man-Month"]
    assert [b.titulo for b in await books.search_by_field(db, "autor", "mart")] == ["Clean Code"]
    assert len(await books.search_by_field(db, "genero", "software")) == 2
    assert len(await books.search_by_field(db, "genero", " ")) == 3
