"""User DTOs."""

from dataclasses import dataclass
from uuid import UUID

from rdsguard.domain.value_objects import Role


@dataclass
class UserPreapproveInput:
    """Input for registering an account that starts out approved."""

    employee_key: str
    first_name: str
    role: Role | str = Role.VOLUNTEER
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    location_id: UUID | None = None
