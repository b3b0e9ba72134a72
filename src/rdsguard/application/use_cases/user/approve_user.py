"""Approve user use case."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from rdsguard.application.dto import Actor
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities import User
from rdsguard.domain.exceptions import NotFound, PermissionDenied, ValidationError
from rdsguard.domain.value_objects import Action, ApprovalStatus

logger = logging.getLogger(__name__)


class ApproveUserUseCase:
    """Approve or reject a pending staff account. Nobody decides on their own."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        actor: Actor,
        user_id: UUID,
        status: ApprovalStatus | str = ApprovalStatus.APPROVED,
    ) -> User:
        try:
            status = ApprovalStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown approval status: {status}") from None
        if status is ApprovalStatus.PENDING:
            raise ValidationError("Approval status must be Approved or Rejected")

        capabilities = actor.capabilities
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user or not capabilities.can(Action.READ, user):
                raise NotFound("User", str(user_id))
            if not capabilities.can(Action.APPROVE, user):
                raise PermissionDenied("User does not have permission to approve this account")

            user.approval_status = status
            user.approved_by_user_id = actor.user_id
            user.updated_at = self._clock()
            await uow.users.update_approval(user)

        logger.info("User %s marked %s by %s", user.id, status, actor.user_id)
        return user
