"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from rdsguard.domain.entities import PermissionGrant, User
from rdsguard.domain.exceptions import UserAlreadyExists
from rdsguard.domain.value_objects import ApprovalStatus, Condition, ResourceType
from rdsguard.infrastructure.persistence.postgres.filters import compile_condition

_COLUMNS = (
    "id, employee_key, role, first_name, last_name, email, phone, "
    "location_id, approval_status, approved_by_user_id, created_at, updated_at"
)


def _row_to_user(r: tuple, grants: list[PermissionGrant] | None = None) -> User:
    return User(
        id=r[0],
        employee_key=r[1],
        role=r[2],
        first_name=r[3],
        last_name=r[4],
        email=r[5],
        phone=r[6],
        location_id=r[7],
        approval_status=ApprovalStatus(r[8]),
        approved_by_user_id=r[9],
        created_at=r[10],
        updated_at=r[11],
        permissions=grants or [],
    )


class PostgresUserRepository:
    """Staff accounts in ``user_account``, custom grants in ``permission_grant``."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _grants(self, user_id: UUID) -> list[PermissionGrant]:
        cur = await self._conn.execute(
            "SELECT action, resource, scope, conditions FROM permission_grant "
            "WHERE user_id = %s ORDER BY created_at",
            (user_id,),
        )
        return [
            PermissionGrant(action=g[0], resource=g[1], scope=g[2], conditions=tuple(g[3] or ()))
            for g in await cur.fetchall()
        ]

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by id, custom grants included."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_account WHERE id = %s AND deleted_at IS NULL",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_user(r, await self._grants(user_id))

    async def get_by_employee_key(self, employee_key: str) -> User | None:
        """Get user by employee key, deleted accounts included."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_account WHERE employee_key = %s",
            (employee_key,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[User], str | None]:
        """List users matching ``condition`` with cursor pagination. Grants are not loaded."""
        sql, _params = compile_condition(condition, ResourceType.USER)
        conditions = [sql, "deleted_at IS NULL"]
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = " AND ".join(conditions)
        params = tuple(_params) + (limit + 1,)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_account WHERE {where} ORDER BY id LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        users = [_row_to_user(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return users, next_cursor

    async def create(self, user: User) -> User:
        """Create user. Employee keys are unique."""
        try:
            await self._conn.execute(
                f"INSERT INTO user_account ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    user.id,
                    user.employee_key,
                    str(user.role),
                    user.first_name,
                    user.last_name,
                    user.email,
                    user.phone,
                    user.location_id,
                    str(user.approval_status),
                    user.approved_by_user_id,
                    user.created_at,
                    user.updated_at,
                ),
            )
        except UniqueViolation as exc:
            raise UserAlreadyExists(
                f"User already exists with employee key {user.employee_key}"
            ) from exc
        return user

    async def update_profile(self, user: User) -> None:
        """Persist profile, role and location."""
        await self._conn.execute(
            "UPDATE user_account SET first_name=%s, last_name=%s, email=%s, phone=%s, "
            "role=%s, location_id=%s, updated_at=%s WHERE id=%s",
            (
                user.first_name,
                user.last_name,
                user.email,
                user.phone,
                str(user.role),
                user.location_id,
                user.updated_at,
                user.id,
            ),
        )

    async def update_approval(self, user: User) -> None:
        """Persist approval decision."""
        await self._conn.execute(
            "UPDATE user_account SET approval_status=%s, approved_by_user_id=%s, updated_at=%s "
            "WHERE id=%s",
            (str(user.approval_status), user.approved_by_user_id, user.updated_at, user.id),
        )
