"""Referral code validation resource."""

import falcon.asgi

from rdsguard.application.use_cases.referral import ValidateReferralCodeUseCase
from rdsguard.interfaces.api.resources.common import require_actor


class ReferralCodeResource:
    """GET /v1/referral-codes/{code} - can a respondent start a survey with it."""

    def __init__(self, validate_referral_code: ValidateReferralCodeUseCase) -> None:
        self._validate = validate_referral_code

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, code: str
    ) -> None:
        if require_actor(req, resp) is None:
            return
        result = await self._validate.execute(code)
        resp.media = {
            "code": result.code,
            "is_valid": result.is_valid,
            "message": result.message,
        }
        resp.status = falcon.HTTP_200
