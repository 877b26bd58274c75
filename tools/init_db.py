import argparse
import asyncio
import importlib
import pkgutil

import alumni_backend.entity
from alumni_backend.common.database import Database
from alumni_backend.common.logger import get_logger

logger = get_logger()


def load_all_entities():
    """
    Import every module under alumni_backend.entity.

    Importing the modules registers all SQLAlchemy models and their tables
    into Base.metadata, so create_all() sees the whole schema.
    """
    package = alumni_backend.entity
    prefix = package.__name__ + "."

    for _, name, _ in pkgutil.iter_modules(package.__path__, prefix):
        logger.info("Auto importing model: %s", name)
        importlib.import_module(name)


async def init_database(database: Database, reset: bool = False):
    """
    Create all tables defined in Base.metadata.

    Args:
        database (Database): Target database.
        reset (bool): Drop every known table first.
    """
    load_all_entities()

    if reset:
        logger.info("Dropping existing tables before creating them...")
    await database.create_schema(reset=reset)

    await database.close()
    logger.info("Database initialization complete.")


def main():
    parser = argparse.ArgumentParser(description="Create the alumni backend tables.")
    parser.add_argument(
        "--reset", action="store_true", help="drop existing tables before creating"
    )
    args = parser.parse_args()

    asyncio.run(init_database(Database(), reset=args.reset))


if __name__ == "__main__":
    main()
