"""Get user use case."""

from uuid import UUID

from rdsguard.application.dto import Actor
from rdsguard.domain.entities import User
from rdsguard.domain.exceptions import NotFound
from rdsguard.domain.value_objects import Action


class GetUserUseCase:
    """Get a staff account by id. Accounts the actor cannot read look missing."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Actor, user_id: UUID) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
        if not user or not actor.capabilities.can(Action.READ, user):
            raise NotFound("User", str(user_id))
        return user
