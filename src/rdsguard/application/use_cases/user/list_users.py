"""List users use case."""

from rdsguard.application.dto import Actor
from rdsguard.domain.entities import User
from rdsguard.domain.value_objects import Action, ResourceType


class ListUsersUseCase:
    """List the staff accounts the actor may read."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: Actor,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[User], str | None]:
        condition = actor.capabilities.filter_for(Action.READ, ResourceType.USER)
        async with self._uow_factory() as uow:
            return await uow.users.list(condition=condition, cursor=cursor, limit=limit)
