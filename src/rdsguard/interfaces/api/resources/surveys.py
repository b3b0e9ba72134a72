"""Survey API resources."""

from uuid import UUID

import falcon.asgi

from rdsguard.application.dto import SurveyCreateInput
from rdsguard.application.use_cases.survey import (
    CreateSurveyUseCase,
    DeleteSurveyUseCase,
    GetSurveyUseCase,
    ListSurveysUseCase,
    UpdateSurveyUseCase,
)
from rdsguard.interfaces.api.resources.common import (
    error_body,
    page_params,
    parse_uuid,
    require_actor,
    survey_to_dict,
)


class SurveysResource:
    """GET/POST /v1/surveys - list readable surveys and submit new ones."""

    def __init__(
        self,
        create_survey: CreateSurveyUseCase,
        list_surveys: ListSurveysUseCase,
    ) -> None:
        self._create_survey = create_survey
        self._list_surveys = list_surveys

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        cursor, limit = page_params(req)
        surveys, next_cursor = await self._list_surveys.execute(actor, cursor=cursor, limit=limit)
        resp.media = {
            "items": [survey_to_dict(s) for s in surveys],
            "next_cursor": next_cursor,
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Submit a survey under ``referral_code`` (omit it for a root survey)."""
        actor = require_actor(req, resp)
        if actor is None:
            return

        try:
            body = await req.get_media()
            location = body.get("location_id")
            referral_code = body.get("referral_code")
            if referral_code is not None and not isinstance(referral_code, str):
                raise TypeError("referral_code must be a string")
            data = SurveyCreateInput(
                referral_code=referral_code or None,
                location_id=UUID(location) if location else None,
                responses=dict(body.get("responses") or {}),
                is_completed=bool(body.get("is_completed", False)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", str(e), 400)
            return

        result = await self._create_survey.execute(actor, data)
        resp.media = survey_to_dict(result)
        resp.status = falcon.HTTP_201


class SurveyResource:
    """GET/PATCH/DELETE /v1/surveys/{survey_id}."""

    def __init__(
        self,
        get_survey: GetSurveyUseCase,
        update_survey: UpdateSurveyUseCase,
        delete_survey: DeleteSurveyUseCase,
    ) -> None:
        self._get_survey = get_survey
        self._update_survey = update_survey
        self._delete_survey = delete_survey

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, survey_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        sid = parse_uuid(survey_id, resp, "survey")
        if sid is None:
            return
        result = await self._get_survey.execute(actor, sid)
        resp.media = survey_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, survey_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        sid = parse_uuid(survey_id, resp, "survey")
        if sid is None:
            return
        body = await req.get_media()
        if not isinstance(body, dict) or not body:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", "Body must be a non-empty object", 400)
            return
        result = await self._update_survey.execute(actor, sid, body)
        resp.media = survey_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, survey_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        sid = parse_uuid(survey_id, resp, "survey")
        if sid is None:
            return
        await self._delete_survey.execute(actor, sid)
        resp.status = falcon.HTTP_204
