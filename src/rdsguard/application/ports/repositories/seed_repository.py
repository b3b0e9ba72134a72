"""Seed repository port."""

from typing import Protocol

from rdsguard.domain.entities import Seed
from rdsguard.domain.value_objects import Condition


class SeedRepository(Protocol):
    """Port for seed persistence. Seeds are never updated."""

    async def get_by_code(self, code: str) -> Seed | None: ...

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Seed], str | None]: ...

    async def create(self, seed: Seed) -> Seed: ...
