"""Application DTOs."""

from rdsguard.application.dto.actor import Actor
from rdsguard.application.dto.referral_dto import ReferralCodeStatus
from rdsguard.application.dto.survey_dto import SurveyCreateInput, SurveyOutput
from rdsguard.application.dto.user_dto import UserPreapproveInput

__all__ = [
    "Actor",
    "ReferralCodeStatus",
    "SurveyCreateInput",
    "SurveyOutput",
    "UserPreapproveInput",
]
