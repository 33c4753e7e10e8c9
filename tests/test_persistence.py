# =============================================================================
# tests/test_persistence.py - Transaction Helper Tests
# =============================================================================
# Drives the helpers directly against a session, bypassing the services'
# up-front checks so the constraint paths actually run.
#
# Run with: pytest tests/test_persistence.py -v
# =============================================================================

import asyncio

import pytest
from sqlalchemy import func, insert, select

from app.exceptions import ConflictError
from core.services.persistence import commit_or_conflict, insert_ignoring_duplicate
from lib.database import Database
from lib.entities import User, follows


def run_in_session(scenario):
    """Run scenario(session) against a throwaway in-memory database."""

    async def runner():
        database = Database("sqlite+aiosqlite://")
        await database.create_all()
        try:
            async with database.session() as session:
                await scenario(session)
        finally:
            await database.drop_all()
            await database.dispose()

    asyncio.run(runner())


class TestCommitOrConflict:
    """Tests for commit_or_conflict()."""

    def test_duplicate_user_becomes_conflict(self):
        async def scenario(session):
            session.add(User(username="jake", email="jake@jake.jake", password_hash="x"))
            await session.commit()

            session.add(User(username="jake", email="other@jake.jake", password_hash="x"))
            with pytest.raises(ConflictError) as excinfo:
                await commit_or_conflict(session, "username or email has already been taken")

            assert excinfo.value.status_code == 409
            assert excinfo.value.message == "username or email has already been taken"
            # Rolled back: the rejected user is gone from the session
            assert not session.new
            assert not session.in_transaction()
            assert await session.scalar(select(func.count()).select_from(User)) == 1

        run_in_session(scenario)

    def test_clean_commit_passes_through(self):
        async def scenario(session):
            session.add(User(username="jane", email="jane@jane.jane", password_hash="x"))
            await commit_or_conflict(session, "unused")

            assert await session.scalar(select(User.username)) == "jane"

        run_in_session(scenario)


class TestInsertIgnoringDuplicate:
    """Tests for insert_ignoring_duplicate()."""

    def test_second_identical_insert_is_a_no_op(self):
        async def scenario(session):
            jake = User(username="jake", email="jake@jake.jake", password_hash="x")
            jane = User(username="jane", email="jane@jane.jane", password_hash="x")
            session.add_all([jake, jane])
            await session.commit()
            row = {"follower_id": jake.id, "followed_id": jane.id}

            first = await insert_ignoring_duplicate(session, insert(follows).values(**row))
            second = await insert_ignoring_duplicate(session, insert(follows).values(**row))

            assert first is True
            assert second is False
            assert await session.scalar(select(func.count()).select_from(follows)) == 1

        run_in_session(scenario)
