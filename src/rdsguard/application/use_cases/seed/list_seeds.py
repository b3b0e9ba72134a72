"""List seeds use case."""

from rdsguard.application.dto import Actor
from rdsguard.domain.entities import Seed
from rdsguard.domain.value_objects import Action, ResourceType


class ListSeedsUseCase:
    """List the seeds the actor may read."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: Actor,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Seed], str | None]:
        condition = actor.capabilities.filter_for(Action.READ, ResourceType.SEED)
        async with self._uow_factory() as uow:
            return await uow.seeds.list(condition=condition, cursor=cursor, limit=limit)
