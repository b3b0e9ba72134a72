"""Repository ports."""

from rdsguard.application.ports.repositories.seed_repository import SeedRepository
from rdsguard.application.ports.repositories.survey_repository import (
    SurveyRepository,
)
from rdsguard.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "SeedRepository",
    "SurveyRepository",
    "UserRepository",
]
