"""Delete survey use case."""

from uuid import UUID

from rdsguard.application.dto import Actor
from rdsguard.domain.exceptions import NotFound, PermissionDenied
from rdsguard.domain.value_objects import Action


class DeleteSurveyUseCase:
    """Soft delete a survey. Its codes stay taken."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Actor, survey_id: UUID) -> None:
        capabilities = actor.capabilities
        async with self._uow_factory() as uow:
            survey = await uow.surveys.get_by_id(survey_id)
            if not survey or not capabilities.can(Action.READ, survey):
                raise NotFound("Survey", str(survey_id))
            if not capabilities.can(Action.DELETE, survey):
                raise PermissionDenied("User does not have permission to delete this survey")
            await uow.surveys.soft_delete(survey_id)
