"""User entity - staff account."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from rdsguard.domain.entities.permission_grant import PermissionGrant
from rdsguard.domain.value_objects import ApprovalStatus, ResourceType

PROFILE_FIELDS = frozenset({"first_name", "last_name", "email", "phone"})
EDITABLE_FIELDS = PROFILE_FIELDS | {"role", "location_id"}
IMMUTABLE_FIELDS = frozenset({"id", "employee_key", "created_at"})


@dataclass
class User:
    """Staff member - the actor behind every authenticated request."""

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.USER

    id: UUID
    employee_key: str
    role: str
    first_name: str
    created_at: datetime
    updated_at: datetime
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    location_id: UUID | None = None
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    approved_by_user_id: UUID | None = None
    permissions: list[PermissionGrant] = field(default_factory=list)
