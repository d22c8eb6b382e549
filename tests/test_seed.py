"""Seeding a fresh database and skipping an already populated one."""
import asyncio

from sqlalchemy import func, select

from fitness_api.database import connection
from fitness_api.database.seed import seed
from fitness_api.database.tables import Base


async def _row_counts():
    async with connection.get_session()() as session:
        return {
            table.name: await session.scalar(select(func.count()).select_from(table))
            for table in Base.metadata.sorted_tables
        }


async def _seed_twice():
    await connection.create_tables()
    try:
        first = await seed()
        counts = await _row_counts()
        second = await seed()
        counts_after = await _row_counts()
    finally:
        await connection.dispose_database()
    return first, counts, second, counts_after


def test_seed_fills_every_table_once(tmp_path):
    assert connection.init_database(f"sqlite:///{tmp_path / 'seed.db'}")

    first, counts, second, counts_after = asyncio.run(_seed_twice())

    assert first is True
    assert set(counts) == {
        "users", "workouts", "exercises", "goals", "wearable_devices", "community_posts",
        "challenges", "leaderboard", "weight_history", "stats_overview",
    }
    assert all(count > 0 for count in counts.values()), counts
    assert counts["users"] == 5
    assert counts["weight_history"] == 40

    assert second is False
    assert counts_after == counts


def test_seed_without_database_is_skipped():
    assert not connection.is_initialized()
    assert asyncio.run(seed()) is False
