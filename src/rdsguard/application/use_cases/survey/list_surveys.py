"""List surveys use case."""

from rdsguard.application.dto import Actor, SurveyOutput
from rdsguard.domain.value_objects import Action, ResourceType


class ListSurveysUseCase:
    """List the surveys the actor may read."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor: Actor,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[SurveyOutput], str | None]:
        condition = actor.capabilities.filter_for(Action.READ, ResourceType.SURVEY)
        async with self._uow_factory() as uow:
            surveys, next_cursor = await uow.surveys.list(
                condition=condition,
                cursor=cursor,
                limit=limit,
                include_deleted=False,
            )
        return [SurveyOutput.from_entity(s) for s in surveys], next_cursor
