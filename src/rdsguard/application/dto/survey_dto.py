"""Survey DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from rdsguard.domain.entities import Survey


@dataclass
class SurveyCreateInput:
    """Input for submitting a survey.

    ``referral_code`` is the code the respondent arrived with; None only for
    staff creating a survey without referral.
    """

    referral_code: str | None
    location_id: UUID | None = None
    responses: dict[str, Any] = field(default_factory=dict)
    is_completed: bool = False


@dataclass
class SurveyOutput:
    """Output DTO for survey."""

    id: UUID
    code: str
    parent_code: str
    child_codes: list[str]
    created_by_user_id: UUID
    owner_employee_key: str
    location_id: UUID
    responses: dict[str, Any]
    is_completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, survey: Survey) -> "SurveyOutput":
        return cls(
            id=survey.id,
            code=survey.code,
            parent_code=survey.parent_code,
            child_codes=list(survey.child_codes),
            created_by_user_id=survey.created_by_user_id,
            owner_employee_key=survey.owner_employee_key,
            location_id=survey.location_id,
            responses=dict(survey.responses),
            is_completed=survey.is_completed,
            created_at=survey.created_at,
            updated_at=survey.updated_at,
        )
