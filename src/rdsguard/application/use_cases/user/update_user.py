"""Update user use case."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID

from rdsguard.application.dto import Actor
from rdsguard.application.services.survey_tree import utc_now
from rdsguard.domain.entities import User
from rdsguard.domain.entities.user import EDITABLE_FIELDS, IMMUTABLE_FIELDS
from rdsguard.domain.exceptions import (
    ImmutableFieldViolation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rdsguard.domain.value_objects import Action, Role

_TEXT_FIELDS = ("first_name", "last_name", "email", "phone")


def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate value types; returns the changes with ids and roles parsed."""
    coerced = dict(changes)
    for name in _TEXT_FIELDS:
        if name not in coerced:
            continue
        value = coerced[name]
        if name == "first_name" and not (isinstance(value, str) and value.strip()):
            raise ValidationError("first_name must be a non-empty string")
        if name == "last_name" and not isinstance(value, str):
            raise ValidationError("last_name must be a string")
        if name in ("email", "phone") and value is not None and not isinstance(value, str):
            raise ValidationError(f"{name} must be a string")
    if "role" in coerced:
        try:
            coerced["role"] = Role(coerced["role"])
        except ValueError:
            raise ValidationError(f"Unknown role: {coerced['role']}") from None
    if "location_id" in coerced and coerced["location_id"] is not None:
        try:
            coerced["location_id"] = UUID(str(coerced["location_id"]))
        except ValueError:
            raise ValidationError("Invalid location ID") from None
    return coerced


class UpdateUserUseCase:
    """Edit a staff account's profile, role or location.

    Each field in the request is checked against the loaded account, so a
    volunteer may edit their own name and contact details but not their role.
    Approval has its own use case.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, actor: Actor, user_id: UUID, changes: dict[str, Any]) -> User:
        if not changes:
            raise ValidationError("No user fields to update")
        immutable = sorted(IMMUTABLE_FIELDS.intersection(changes))
        if immutable:
            raise ImmutableFieldViolation(
                f"Cannot modify fields fixed at creation: {', '.join(immutable)}"
            )
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown or read-only user fields: {', '.join(unknown)}")
        changes = _coerce(changes)

        capabilities = actor.capabilities
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user or not capabilities.can(Action.READ, user):
                raise NotFound("User", str(user_id))

            for name in changes:
                if not capabilities.can(Action.UPDATE, user, name):
                    raise PermissionDenied(f"You are not allowed to update {name} on this user")

            for name, value in changes.items():
                setattr(user, name, value)
            user.updated_at = self._clock()
            await uow.users.update_profile(user)

        return user
