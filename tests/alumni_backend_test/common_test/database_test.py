import unittest
from unittest.mock import patch

from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from alumni_backend.common.database import Database
from tools.init_db import load_all_entities


class TestDatabase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.database = Database("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async def asyncTearDown(self):
        await self.database.close()

    def test_missing_url_raises(self):
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError):
                Database()

    def test_url_from_environment(self):
        env = {"DATABASE_URL": "sqlite+aiosqlite:///:memory:"}
        with patch.dict("os.environ", env, clear=True):
            database = Database()

        self.assertEqual(database.database_url, env["DATABASE_URL"])

    async def test_session_executes(self):
        async with self.database.session() as session:
            result = await session.execute(text("SELECT 1"))

        self.assertEqual(result.scalar_one(), 1)

    async def test_create_schema_creates_entity_tables(self):
        load_all_entities()
        await self.database.create_schema()

        async with self.database.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM event_attendees"))

        self.assertEqual(result.scalar_one(), 0)

    async def test_session_rolls_back_and_reraises(self):
        with patch(
            "sqlalchemy.ext.asyncio.AsyncSession.rollback", autospec=True
        ) as mock_rollback:
            with self.assertRaises(KeyError):
                async with self.database.session():
                    raise KeyError("boom")

        mock_rollback.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
