"""PostgreSQL code registry - one query across every code namespace."""

from collections.abc import Iterable

from psycopg import AsyncConnection

# child_codes is text[]; the overlap keeps the GIN index usable.
_FIND_EXISTING_SQL = (
    "SELECT code FROM survey WHERE code = ANY(%(codes)s::text[]) "
    "UNION SELECT parent_code FROM survey WHERE parent_code = ANY(%(codes)s::text[]) "
    "UNION SELECT c FROM survey, unnest(child_codes) AS c "
    "WHERE child_codes && %(codes)s::text[] AND c = ANY(%(codes)s::text[]) "
    "UNION SELECT code FROM seed WHERE code = ANY(%(codes)s::text[])"
)


class PostgresCodeRegistry:
    """Looks codes up in survey own, child and parent codes and in seed codes."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def find_existing(self, codes: Iterable[str]) -> set[str]:
        """Subset of ``codes`` already present anywhere."""
        wanted = list(dict.fromkeys(codes))
        if not wanted:
            return set()
        cur = await self._conn.execute(_FIND_EXISTING_SQL, {"codes": wanted})
        return {r[0] for r in await cur.fetchall()}
