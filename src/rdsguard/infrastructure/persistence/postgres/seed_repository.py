"""PostgreSQL seed repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from rdsguard.domain.entities import Seed
from rdsguard.domain.value_objects import Condition, ResourceType
from rdsguard.infrastructure.persistence.postgres.filters import compile_condition

_COLUMNS = "id, code, location_id, created_at, is_fallback"


def _row_to_seed(r: tuple) -> Seed:
    return Seed(id=r[0], code=r[1], location_id=r[2], created_at=r[3], is_fallback=r[4])


class PostgresSeedRepository:
    """Seed repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_code(self, code: str) -> Seed | None:
        """Get seed by code."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM seed WHERE code = %s", (code,))
        r = await cur.fetchone()
        return _row_to_seed(r) if r else None

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Seed], str | None]:
        """List seeds matching ``condition`` with cursor pagination."""
        sql, _params = compile_condition(condition, ResourceType.SEED)
        conditions = [sql]
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM seed WHERE {' AND '.join(conditions)} ORDER BY id LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        seeds = [_row_to_seed(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return seeds, next_cursor

    async def create(self, seed: Seed) -> Seed:
        """Create seed."""
        await self._conn.execute(
            f"INSERT INTO seed ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
            (seed.id, seed.code, seed.location_id, seed.created_at, seed.is_fallback),
        )
        return seed
