import unittest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from alumni_backend.common.database import Database
from tools.init_db import load_all_entities

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class BaseRepositoryTestLib(unittest.IsolatedAsyncioTestCase):
    """
    A reusable base test class for repository tests.

    Features:
      - Each test gets a fresh in-memory SQLite database with every table created.
      - A single shared connection (StaticPool) keeps the in-memory data alive
        for the whole test.
      - Provides helper to insert entities.
    """

    async def asyncSetUp(self):
        load_all_entities()

        self.db = Database(TEST_DATABASE_URL, poolclass=StaticPool)
        await self.db.create_schema()

        self.session_maker = async_sessionmaker(
            bind=self.db.get_engine(),
            expire_on_commit=False,
            class_=AsyncSession,
        )
        self.session = self.session_maker()

    async def asyncTearDown(self):
        await self.session.close()
        await self.db.close()

    async def insert_entities(self, entities):
        """
        Insert ORM entities into the active test session.

        `flush()` assigns generated ids without ending the test transaction.
        """
        self.session.add_all(entities)
        await self.session.flush()
