"""Actor loader - builds the request actor from the stored account."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from rdsguard.application.dto import Actor
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.value_objects import ApprovalStatus

logger = logging.getLogger(__name__)


class ActorLoader:
    """Loads the account behind a token subject and compiles its capabilities.

    Accounts that are unknown or not yet approved get no actor.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        timezone: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._timezone = timezone
        self._clock = clock

    async def load(self, subject: str) -> Actor | None:
        try:
            user_id = UUID(subject)
        except ValueError:
            logger.warning("Token subject %r is not an account id", subject)
            return None
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
        if user is None:
            logger.warning("No account for token subject %s", subject)
            return None
        if user.approval_status != ApprovalStatus.APPROVED:
            logger.info("Account %s is %s, rejecting request", user.id, user.approval_status)
            return None
        return Actor.from_user(user, self._timezone, now=self._clock())
