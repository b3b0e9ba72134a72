"""PostgreSQL survey repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from rdsguard.domain.entities import Survey
from rdsguard.domain.exceptions import ReferralCodeAlreadyUsed
from rdsguard.domain.value_objects import Condition, ResourceType
from rdsguard.infrastructure.persistence.postgres.filters import compile_condition

_COLUMNS = (
    "id, code, parent_code, child_codes, created_by_user_id, owner_employee_key, "
    "location_id, responses, is_completed, created_at, updated_at, deleted_at"
)


def _row_to_survey(r: tuple) -> Survey:
    return Survey(
        id=r[0],
        code=r[1],
        parent_code=r[2],
        child_codes=tuple(r[3] or ()),
        created_by_user_id=r[4],
        owner_employee_key=r[5],
        location_id=r[6],
        responses=r[7] or {},
        is_completed=r[8],
        created_at=r[9],
        updated_at=r[10],
        deleted_at=r[11],
    )


class PostgresSurveyRepository:
    """Survey repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, survey_id: UUID, include_deleted: bool = False) -> Survey | None:
        """Get survey by id."""
        q = f"SELECT {_COLUMNS} FROM survey WHERE id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        cur = await self._conn.execute(q, (survey_id,))
        r = await cur.fetchone()
        return _row_to_survey(r) if r else None

    async def get_by_code(self, code: str, include_deleted: bool = True) -> Survey | None:
        """Get survey submitted under ``code``."""
        q = f"SELECT {_COLUMNS} FROM survey WHERE code = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        cur = await self._conn.execute(q, (code,))
        r = await cur.fetchone()
        return _row_to_survey(r) if r else None

    async def find_parent_by_child_code(self, code: str) -> Survey | None:
        """Live survey holding ``code`` in one of its child slots."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM survey "
            "WHERE %s = ANY(child_codes) AND deleted_at IS NULL LIMIT 1",
            (code,),
        )
        r = await cur.fetchone()
        return _row_to_survey(r) if r else None

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
        include_deleted: bool = False,
    ) -> tuple[list[Survey], str | None]:
        """List surveys matching ``condition`` with cursor pagination."""
        sql, _params = compile_condition(condition, ResourceType.SURVEY)
        conditions = [sql]
        if not include_deleted:
            conditions.append("deleted_at IS NULL")
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = " AND ".join(conditions)
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM survey WHERE {where} ORDER BY id LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        surveys = [_row_to_survey(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return surveys, next_cursor

    async def create(self, survey: Survey) -> Survey:
        """Create survey. A second survey under the same code is rejected."""
        try:
            await self._conn.execute(
                f"INSERT INTO survey ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    survey.id,
                    survey.code,
                    survey.parent_code,
                    list(survey.child_codes),
                    survey.created_by_user_id,
                    survey.owner_employee_key,
                    survey.location_id,
                    Jsonb(survey.responses),
                    survey.is_completed,
                    survey.created_at,
                    survey.updated_at,
                    survey.deleted_at,
                ),
            )
        except UniqueViolation as exc:
            raise ReferralCodeAlreadyUsed(
                f"A survey has already been submitted with code {survey.code}"
            ) from exc
        return survey

    async def update(self, survey: Survey) -> None:
        """Update the editable fields of a survey."""
        await self._conn.execute(
            "UPDATE survey SET responses=%s, is_completed=%s, updated_at=%s WHERE id=%s",
            (Jsonb(survey.responses), survey.is_completed, survey.updated_at, survey.id),
        )

    async def soft_delete(self, survey_id: UUID) -> None:
        """Soft delete survey."""
        await self._conn.execute(
            "UPDATE survey SET deleted_at = NOW() WHERE id = %s",
            (survey_id,),
        )
