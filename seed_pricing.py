import sys
import asyncio
import logging

from app.core.config import settings
from app.db.seed import seed_reference_data
from app.db.session import get_engine, get_sessionmaker, close_engine
from app.models.base import Base

logger = logging.getLogger(__name__)


async def seed_database(create_tables: bool = True) -> bool:
    try:
        if create_tables:
            async with get_engine().begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        async with get_sessionmaker()() as session:
            counts = await seed_reference_data(session)

        for table, count in counts.items():
            print(f"{table}: {count} rows")
        return True

    except Exception as e:
        print(f"Error seeding pricing data: {str(e)}")
        return False
    finally:
        await close_engine()


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)

    create_tables = "--no-create" not in sys.argv[1:]
    print(f"Seeding pricing data into {settings.DATABASE_URL.split('@')[-1]}")

    success = asyncio.run(seed_database(create_tables))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
