# models.py
import datetime as dt

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, UniqueConstraint, text

from database import Base


def _now() -> dt.datetime:
    return dt.datetime.now().replace(microsecond=0)


class Favorite(Base):
    """A Google Books volume marked by a device. Never changed after insert."""
    __tablename__ = "favoritos"
    id              = Column(Integer, primary_key=True)
    device_id       = Column(String(500), nullable=False, index=True)
    google_books_id = Column(String(500), nullable=False, index=True)
    titulo          = Column(String(1000), nullable=False)
    autor           = Column(String(1000))
    imagem_url      = Column(String(2000))
    descricao       = Column(String(5000))
    data_publicacao = Column(String)
    data_criacao    = Column(DateTime, nullable=False, default=_now)

    __table_args__ = (
        UniqueConstraint("device_id", "google_books_id", name="uq_favoritos_device_google"),
    )


class Book(Base):
    __tablename__ = "tb_livros"
    id              = Column(Integer, primary_key=True)
    titulo          = Column(String(1000), nullable=False)
    autor           = Column(String(1000))
    genero          = Column(String)
    capa            = Column(String(2000))
    data_publicacao = Column(DateTime)
    descricao       = Column(String(5000))

    # only set when the book was created through the favorites endpoints
    device_id             = Column(String(500), index=True)
    google_books_id       = Column(String(500), index=True)
    imagem_url            = Column(String(2000))
    data_publicacao_texto = Column(String)
    favorito              = Column(Boolean, nullable=False, default=False)

    data_criacao = Column(DateTime, nullable=False, default=_now)

    __table_args__ = (
        # a device can flag the same volume once; unflagged rows are kept as history
        Index(
            "uq_tb_livros_device_google_favorito",
            "device_id",
            "google_books_id",
            unique=True,
            sqlite_where=text("favorito = 1"),
            postgresql_where=text("favorito"),
        ),
    )
