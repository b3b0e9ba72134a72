"""Create seed use case."""

import logging
import random
from collections.abc import Callable
from datetime import datetime
from uuid import UUID, uuid4

from rdsguard.application.dto import Actor
from rdsguard.application.services import CodeGenerator
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities import Seed
from rdsguard.domain.exceptions import PermissionDenied, ValidationError
from rdsguard.domain.value_objects import Action, CodePolicy, ResourceType

logger = logging.getLogger(__name__)


class CreateSeedUseCase:
    """Create a seed with a fresh code to start a new referral tree."""

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

    async def execute(
        self,
        actor: Actor,
        location_id: UUID | None = None,
        is_fallback: bool = False,
    ) -> Seed:
        if not actor.capabilities.can(Action.CREATE, ResourceType.SEED):
            raise PermissionDenied("User does not have permission to create seeds")

        location_id = location_id or actor.location_id
        if location_id is None:
            raise ValidationError("Seed location is required")

        async with self._uow_factory() as uow:
            generator = CodeGenerator(uow.codes, self._code_policy, self._rng)
            code = await generator.generate_unique_code()
            seed = Seed(
                id=uuid4(),
                code=code,
                location_id=location_id,
                created_at=self._clock(),
                is_fallback=is_fallback,
            )
            await uow.seeds.create(seed)

        logger.info("Created seed %s (code=%s, location=%s)", seed.id, seed.code, location_id)
        return seed
