import asyncio
import logging

from app.db.engine import connect
from app.db.schema import SEED_ORDER
from app.settings import SETTINGS
from scripts.seed import ensure_table


async def init_db(database_url=None):
    # Safe to re-run: every table is created only if absent.
    async with connect(database_url) as engine:
        for table in SEED_ORDER:
            await ensure_table(engine, table)


def main():
    logging.basicConfig(
        level=SETTINGS.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    asyncio.run(init_db())
    print("DB schema created.")

if __name__ == "__main__":
    main()
