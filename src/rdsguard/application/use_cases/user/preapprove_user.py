"""Preapprove user use case."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from rdsguard.application.dto import Actor, UserPreapproveInput
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities import User
from rdsguard.domain.exceptions import PermissionDenied, UserAlreadyExists, ValidationError
from rdsguard.domain.value_objects import Action, ApprovalStatus, ResourceType, Role

logger = logging.getLogger(__name__)


class PreapproveUserUseCase:
    """Register a staff account that is approved from the start."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, actor: Actor, data: UserPreapproveInput) -> User:
        if not actor.capabilities.can(Action.PREAPPROVE, ResourceType.USER):
            raise PermissionDenied("User does not have permission to preapprove accounts")

        employee_key = data.employee_key.strip() if isinstance(data.employee_key, str) else ""
        if not employee_key:
            raise ValidationError("employee_key is required")
        if not isinstance(data.first_name, str) or not data.first_name.strip():
            raise ValidationError("first_name is required")
        for name in ("last_name", "email", "phone"):
            value = getattr(data, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{name} must be a string")
        try:
            role = Role(data.role)
        except ValueError:
            raise ValidationError(f"Unknown role: {data.role}") from None

        now = self._clock()
        user = User(
            id=uuid4(),
            employee_key=employee_key,
            role=role,
            first_name=data.first_name.strip(),
            last_name=data.last_name or "",
            email=data.email,
            phone=data.phone,
            location_id=data.location_id,
            approval_status=ApprovalStatus.APPROVED,
            approved_by_user_id=actor.user_id,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            if await uow.users.get_by_employee_key(employee_key):
                raise UserAlreadyExists(f"User already exists with employee key {employee_key}")
            await uow.users.create(user)

        logger.info("User %s (%s) preapproved by %s", user.id, role, actor.user_id)
        return user
