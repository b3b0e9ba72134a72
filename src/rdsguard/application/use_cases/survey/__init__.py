"""Survey use cases."""

from rdsguard.application.use_cases.survey.create_survey import CreateSurveyUseCase
from rdsguard.application.use_cases.survey.delete_survey import DeleteSurveyUseCase
from rdsguard.application.use_cases.survey.get_survey import GetSurveyUseCase
from rdsguard.application.use_cases.survey.list_surveys import ListSurveysUseCase
from rdsguard.application.use_cases.survey.update_survey import UpdateSurveyUseCase

__all__ = [
    "CreateSurveyUseCase",
    "DeleteSurveyUseCase",
    "GetSurveyUseCase",
    "ListSurveysUseCase",
    "UpdateSurveyUseCase",
]
