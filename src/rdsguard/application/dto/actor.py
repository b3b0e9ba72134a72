"""Actor DTO - the authenticated staff member behind a request."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rdsguard.domain.authorization import ActorContext, CapabilitySet, build_capabilities
from rdsguard.domain.entities import User


@dataclass(frozen=True)
class Actor:
    """Identity plus the capability set built for this request."""

    user_id: UUID
    role: str
    employee_key: str
    location_id: UUID | None
    capabilities: CapabilitySet

    @classmethod
    def from_user(cls, user: User, timezone: str, now: datetime | None = None) -> "Actor":
        context = ActorContext(
            user_id=user.id,
            employee_key=user.employee_key,
            location_id=user.location_id,
            timezone=timezone,
        )
        return cls(
            user_id=user.id,
            role=user.role,
            employee_key=user.employee_key,
            location_id=user.location_id,
            capabilities=build_capabilities(user.role, context, user.permissions, now=now),
        )
