import datetime as dt
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Timestamps go over the wire as ISO-8601 with seconds precision
Timestamp = Annotated[
    dt.datetime,
    PlainSerializer(lambda v: v.isoformat(timespec="seconds"), return_type=str, when_used="json"),
]

# Widths of the matching VARCHAR columns; SQLite does not enforce them
ID_LENGTH = 500
TEXT_LENGTH = 1000
URL_LENGTH = 2000
DESCRIPTION_LENGTH = 5000


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class FavoritePayload(CamelModel):
    """Body of POST /favoritos and POST /livros/favoritos.

    Every key is optional here so that a missing one reaches the service and
    comes back as a 400 with a readable message. JSON numbers are read as
    strings since some clients send numeric volume ids.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    device_id: Optional[str] = Field(None, max_length=ID_LENGTH)
    google_books_id: Optional[str] = Field(None, max_length=ID_LENGTH)
    titulo: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    autor: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    imagem_url: Optional[str] = Field(None, max_length=URL_LENGTH)
    descricao: Optional[str] = Field(None, max_length=DESCRIPTION_LENGTH)
    data_publicacao: Optional[str] = None


class Favorite(CamelModel):
    id: int
    device_id: str
    google_books_id: str
    titulo: str
    autor: Optional[str] = None
    imagem_url: Optional[str] = None
    descricao: Optional[str] = None
    data_publicacao: Optional[str] = None
    data_criacao: Timestamp


class BookDTO(CamelModel):
    """Catalog view of a book: core fields only."""
    id: Optional[int] = None
    titulo: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    autor: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    genero: Optional[str] = None
    capa: Optional[str] = Field(None, max_length=URL_LENGTH)
    data_publicacao: Optional[Timestamp] = None
    descricao: Optional[str] = Field(None, max_length=DESCRIPTION_LENGTH)


class Book(BookDTO):
    """Full book record, favorite-mode fields included."""
    id: int
    device_id: Optional[str] = None
    google_books_id: Optional[str] = None
    imagem_url: Optional[str] = None
    data_publicacao_texto: Optional[str] = None
    favorito: bool = False
    data_criacao: Timestamp
