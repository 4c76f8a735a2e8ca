# database.py - async engine, per-request sessions and schema bootstrap
import logging

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_async_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()

# Columns that tb_livros gained when favorites started being stored on books.
# Databases created before that only have the catalog columns.
FAVORITE_COLUMNS = [
    ("device_id", "VARCHAR(500)"),
    ("google_books_id", "VARCHAR(500)"),
    ("imagem_url", "VARCHAR(2000)"),
    ("data_publicacao_texto", "VARCHAR"),
    ("favorito", "BOOLEAN NOT NULL DEFAULT FALSE"),
    ("data_criacao", "TIMESTAMP"),
]


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


def _missing_book_columns(sync_conn) -> list:
    columns = [c["name"] for c in inspect(sync_conn).get_columns("tb_livros")]
    return [(name, ddl) for name, ddl in FAVORITE_COLUMNS if name not in columns]


def _missing_book_indexes(sync_conn) -> list:
    names = {ix["name"] for ix in inspect(sync_conn).get_indexes("tb_livros")}
    table = Base.metadata.tables["tb_livros"]
    return [ix for ix in table.indexes if ix.name not in names]


async def init_db(bind: AsyncEngine = None):
    """Create missing tables and bring an older tb_livros up to date."""
    # models must be imported so their tables are registered on Base.metadata
    import models  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        # create_all skips an existing tb_livros along with its indexes
        # those are added below once the columns exist
        has_books = await conn.run_sync(lambda c: inspect(c).has_table("tb_livros"))
        if has_books:
            for name, ddl in await conn.run_sync(_missing_book_columns):
                await conn.execute(text(f"ALTER TABLE tb_livros ADD COLUMN {name} {ddl}"))
                logger.info("Added column %s to tb_livros", name)
                if name == "data_criacao":
                    await conn.execute(
                        text("UPDATE tb_livros SET data_criacao = CURRENT_TIMESTAMP WHERE data_criacao IS NULL")
                    )

        await conn.run_sync(Base.metadata.create_all)

        for index in await conn.run_sync(_missing_book_indexes):
            await conn.run_sync(index.create)
            logger.info("Created index %s", index.name)
