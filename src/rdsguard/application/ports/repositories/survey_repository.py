"""Survey repository port."""

from typing import Protocol
from uuid import UUID

from rdsguard.domain.entities import Survey
from rdsguard.domain.value_objects import Condition


class SurveyRepository(Protocol):
    """Port for survey persistence."""

    async def get_by_id(self, survey_id: UUID, include_deleted: bool = False) -> Survey | None: ...

    async def get_by_code(self, code: str, include_deleted: bool = True) -> Survey | None: ...

    async def find_parent_by_child_code(self, code: str) -> Survey | None: ...

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
        include_deleted: bool = False,
    ) -> tuple[list[Survey], str | None]: ...

    async def create(self, survey: Survey) -> Survey: ...

    async def update(self, survey: Survey) -> None: ...

    async def soft_delete(self, survey_id: UUID) -> None: ...
