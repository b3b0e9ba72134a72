"""Survey entity - one submitted response in a referral tree."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

from rdsguard.domain.value_objects import ResourceType

# Fixed at creation; any update touching these is rejected.
IMMUTABLE_FIELDS = frozenset({
    "id",
    "code",
    "parent_code",
    "child_codes",
    "created_by_user_id",
    "owner_employee_key",
    "location_id",
    "created_at",
})
EDITABLE_FIELDS = frozenset({"responses", "is_completed"})


@dataclass
class Survey:
    """Submitted survey - own code, parent link and three child slots."""

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.SURVEY

    id: UUID
    code: str
    parent_code: str
    child_codes: tuple[str, ...]
    created_by_user_id: UUID
    owner_employee_key: str
    location_id: UUID
    created_at: datetime
    updated_at: datetime
    responses: dict[str, Any] = field(default_factory=dict)
    is_completed: bool = False
    deleted_at: datetime | None = None
