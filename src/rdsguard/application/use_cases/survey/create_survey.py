"""Create survey use case."""

import logging
import random
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from rdsguard.application.dto import Actor, SurveyCreateInput, SurveyOutput
from rdsguard.application.services import CodeGenerator, SurveyTreeResolver
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities import Survey
from rdsguard.domain.exceptions import PermissionDenied, ValidationError
from rdsguard.domain.value_objects import Action, CodePolicy, ResourceType

logger = logging.getLogger(__name__)


class CreateSurveyUseCase:
    """Submit a survey under a referral code and mint its child codes."""

    def __init__(
        self,
        unit_of_work_factory: type,
        code_policy: CodePolicy | None = None,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._code_policy = code_policy or CodePolicy()
        self._clock = clock
        self._rng = rng

    async def execute(self, actor: Actor, data: SurveyCreateInput) -> SurveyOutput:
        """Resolve the parent, place the survey and persist it in one transaction."""
        capabilities = actor.capabilities
        if not capabilities.can(Action.CREATE, ResourceType.SURVEY):
            raise PermissionDenied("User does not have permission to create surveys")

        if data.referral_code is not None and not isinstance(data.referral_code, str):
            raise ValidationError("Referral code must be a string")
        referral_code = (data.referral_code or "").strip().upper() or None
        if referral_code is None and not capabilities.can(
            Action.CREATE_WITHOUT_REFERRAL, ResourceType.SURVEY
        ):
            raise PermissionDenied(
                "User does not have permission to create surveys without a referral"
            )

        location_id = data.location_id or actor.location_id
        if location_id is None:
            raise ValidationError("Survey location is required")

        async with self._uow_factory() as uow:
            generator = CodeGenerator(uow.codes, self._code_policy, self._rng)
            resolver = SurveyTreeResolver(uow.surveys, uow.seeds, generator, self._clock)
            placement = await resolver.place(referral_code)

            now = self._clock()
            survey = Survey(
                id=uuid4(),
                code=placement.code,
                parent_code=placement.parent_code,
                child_codes=placement.child_codes,
                created_by_user_id=actor.user_id,
                owner_employee_key=actor.employee_key,
                location_id=location_id,
                created_at=now,
                updated_at=now,
                responses=dict(data.responses),
                is_completed=data.is_completed,
            )
            if not capabilities.can(Action.CREATE, survey):
                raise PermissionDenied("User does not have permission to create this survey")
            await uow.surveys.create(survey)

        logger.info(
            "Created survey %s (code=%s, parent=%s, via %s)",
            survey.id,
            survey.code,
            survey.parent_code,
            placement.kind,
        )
        return SurveyOutput.from_entity(survey)
