"""Update survey use case."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

from rdsguard.application.dto import Actor, SurveyOutput
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities.survey import EDITABLE_FIELDS, IMMUTABLE_FIELDS
from rdsguard.domain.exceptions import (
    ImmutableFieldViolation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rdsguard.domain.value_objects import Action


class UpdateSurveyUseCase:
    """Edit the responses or completion flag of a survey.

    Every changed field is checked on its own, so a rule limited to some fields
    never lets the others through.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, actor: Actor, survey_id: UUID, changes: dict[str, Any]) -> SurveyOutput:
        if not changes:
            raise ValidationError("No survey fields to update")
        immutable = sorted(IMMUTABLE_FIELDS.intersection(changes))
        if immutable:
            raise ImmutableFieldViolation(
                f"Cannot modify fields fixed at creation: {', '.join(immutable)}"
            )
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown survey fields: {', '.join(unknown)}")
        if "responses" in changes and not isinstance(changes["responses"], dict):
            raise ValidationError("responses must be an object")
        if "is_completed" in changes and not isinstance(changes["is_completed"], bool):
            raise ValidationError("is_completed must be a boolean")

        capabilities = actor.capabilities
        async with self._uow_factory() as uow:
            survey = await uow.surveys.get_by_id(survey_id)
            if not survey or not capabilities.can(Action.READ, survey):
                raise NotFound("Survey", str(survey_id))

            for name in changes:
                if not capabilities.can(Action.UPDATE, survey, name):
                    raise PermissionDenied(f"User does not have permission to update {name}")

            for name, value in changes.items():
                setattr(survey, name, value)
            survey.updated_at = self._clock()
            await uow.surveys.update(survey)

        return SurveyOutput.from_entity(survey)
