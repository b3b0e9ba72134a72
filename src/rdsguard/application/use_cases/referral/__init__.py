"""Referral code use cases."""

from rdsguard.application.use_cases.referral.validate_referral_code import (
    ValidateReferralCodeUseCase,
)

__all__ = ["ValidateReferralCodeUseCase"]
