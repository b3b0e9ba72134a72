"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from rdsguard.application.ports.code_registry import CodeRegistry
from rdsguard.application.ports.repositories.seed_repository import SeedRepository
from rdsguard.application.ports.repositories.survey_repository import (
    SurveyRepository,
)
from rdsguard.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def surveys(self) -> SurveyRepository: ...

    @property
    def seeds(self) -> SeedRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def codes(self) -> CodeRegistry: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
