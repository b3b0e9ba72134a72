"""Validate referral code use case."""

from rdsguard.application.dto import ReferralCodeStatus
from rdsguard.domain.exceptions import ValidationError
from rdsguard.domain.value_objects import CodePolicy

UNKNOWN_CODE_MESSAGE = "This survey code does not exist. Please try again."
USED_CODE_MESSAGE = (
    "This survey has already been used. If you have access to it, "
    "visit Survey Entry Dashboard to view it."
)
VALID_CODE_MESSAGE = "Valid referral code"


class ValidateReferralCodeUseCase:
    """Tell whether a respondent can start a survey with a code. Writes nothing."""

    def __init__(self, unit_of_work_factory: type, code_policy: CodePolicy | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._code_policy = code_policy or CodePolicy()

    async def execute(self, code: str) -> ReferralCodeStatus:
        code = code.strip().upper()
        if len(code) != self._code_policy.length:
            raise ValidationError(
                f"Coupon code must be exactly {self._code_policy.length} characters"
            )

        async with self._uow_factory() as uow:
            parent = await uow.surveys.find_parent_by_child_code(code)
            seed = await uow.seeds.get_by_code(code) if parent is None else None
            if parent is None and seed is None:
                return ReferralCodeStatus(code, False, UNKNOWN_CODE_MESSAGE)
            if await uow.surveys.get_by_code(code) is not None:
                return ReferralCodeStatus(code, False, USED_CODE_MESSAGE)
        return ReferralCodeStatus(code, True, VALID_CODE_MESSAGE)
