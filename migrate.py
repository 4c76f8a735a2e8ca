# migrate.py - one-shot schema upgrade, same steps the API runs at startup
import asyncio

from sqlalchemy import inspect

from database import engine, init_db


async def main():
    await init_db(engine)
    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
    await engine.dispose()
    print(f"Schema up to date: {', '.join(sorted(tables))}")


if __name__ == "__main__":
    asyncio.run(main())
