"""Domain entities."""

from rdsguard.domain.entities.permission_grant import PermissionGrant
from rdsguard.domain.entities.seed import Seed
from rdsguard.domain.entities.survey import Survey
from rdsguard.domain.entities.user import User

__all__ = [
    "PermissionGrant",
    "Seed",
    "Survey",
    "User",
]
