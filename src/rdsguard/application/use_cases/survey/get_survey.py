"""Get survey use case."""

from uuid import UUID

from rdsguard.application.dto import Actor, SurveyOutput
from rdsguard.domain.exceptions import NotFound
from rdsguard.domain.value_objects import Action


class GetSurveyUseCase:
    """Get survey by id. Surveys the actor cannot read look missing."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Actor, survey_id: UUID) -> SurveyOutput:
        async with self._uow_factory() as uow:
            survey = await uow.surveys.get_by_id(survey_id)
        if not survey or not actor.capabilities.can(Action.READ, survey):
            raise NotFound("Survey", str(survey_id))
        return SurveyOutput.from_entity(survey)
