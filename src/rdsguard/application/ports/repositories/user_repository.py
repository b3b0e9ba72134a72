"""User repository port."""

from typing import Protocol
from uuid import UUID

from rdsguard.domain.entities import User
from rdsguard.domain.value_objects import Condition


class UserRepository(Protocol):
    """Port for staff account persistence, grants included."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_employee_key(self, employee_key: str) -> User | None: ...

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[User], str | None]: ...

    async def create(self, user: User) -> User: ...

    async def update_profile(self, user: User) -> None: ...

    async def update_approval(self, user: User) -> None: ...
