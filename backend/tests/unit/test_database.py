"""
Unit tests for database startup.
"""

import pytest
from unittest.mock import patch
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from app.infrastructure.db.database import DatabaseManager, get_db_manager, init_db
from app.infrastructure.exceptions import DatabaseError


class TestInitDb:

    async def test_init_creates_schema(self):
        manager = get_db_manager()
        try:
            await init_db()
        finally:
            await manager.close()

    async def test_unreachable_database_raises_database_error(self):
        failure = OperationalError("CREATE TABLE", {}, Exception("unreachable"))
        with patch.object(DatabaseManager, "create_tables", side_effect=failure):
            with pytest.raises(DatabaseError) as exc_info:
                await init_db()

        assert exc_info.value.details == {"operation": "init"}
        assert exc_info.value.original_error is failure


class TestSchemaLifecycle:

    async def test_drop_tables_removes_schema(self):
        manager = get_db_manager()
        try:
            await manager.create_tables()
            await manager.drop_tables()
            async with manager.engine.connect() as conn:
                names = await conn.run_sync(lambda sync: inspect(sync).get_table_names())
        finally:
            await manager.close()

        assert "plans" not in names
        assert "subscriptions" not in names
