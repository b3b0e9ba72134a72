"""Application services shared by use cases."""

from rdsguard.application.services.code_generator import CodeGenerator
from rdsguard.application.services.survey_tree import (
    ParentKind,
    ParentResolution,
    SurveyPlacement,
    SurveyTreeResolver,
)

__all__ = [
    "CodeGenerator",
    "ParentKind",
    "ParentResolution",
    "SurveyPlacement",
    "SurveyTreeResolver",
]
