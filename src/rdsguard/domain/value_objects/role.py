"""Staff roles and account approval states."""

from enum import StrEnum


class Role(StrEnum):
    """Staff roles, each with a default rule template."""

    VOLUNTEER = "Volunteer"
    MANAGER = "Manager"
    ADMIN = "Admin"


class ApprovalStatus(StrEnum):
    """Account approval states."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
