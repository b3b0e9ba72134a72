"""Referral code validation DTO."""

from dataclasses import dataclass


@dataclass
class ReferralCodeStatus:
    """Whether a respondent can still start a survey with ``code``."""

    code: str
    is_valid: bool
    message: str
