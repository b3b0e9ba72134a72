"""Unit tests for domain exceptions."""

import pytest

from rdsguard.domain.exceptions import (
    CodeGenerationExhausted,
    ImmutableFieldViolation,
    NotFound,
    ParentNotFound,
    PermissionDenied,
    RdsGuardError,
    ReferralChronologyViolation,
    ReferralCodeAlreadyUsed,
    UserAlreadyExists,
    ValidationError,
)


@pytest.mark.parametrize(
    ("exc", "code", "status"),
    [
        (PermissionDenied("no"), "PERMISSION_DENIED", 403),
        (NotFound("Survey", "x"), "NOT_FOUND", 404),
        (ParentNotFound("ZZZZZZZZ"), "PARENT_SURVEY_NOT_FOUND", 404),
        (ValidationError("bad"), "VALIDATION_ERROR", 400),
        (ImmutableFieldViolation("code"), "IMMUTABLE_FIELD_VIOLATION", 400),
        (ReferralCodeAlreadyUsed("used"), "SURVEY_CODE_ALREADY_EXISTS", 409),
        (ReferralChronologyViolation("late"), "REFERRAL_CHRONOLOGY_VIOLATION", 409),
        (UserAlreadyExists("dup"), "USER_ALREADY_EXISTS", 409),
        (CodeGenerationExhausted("busy"), "SURVEY_CODE_GENERATION_ERROR", 500),
    ],
)
def test_error_contract(exc: RdsGuardError, code: str, status: int) -> None:
    """Each error renders its stable code and HTTP status."""
    assert isinstance(exc, RdsGuardError)
    body = exc.to_dict()
    assert body["code"] == code
    assert body["status"] == status
    assert body["message"] == str(exc)


def test_parent_not_found_is_not_found() -> None:
    """ParentNotFound can be caught as NotFound."""
    with pytest.raises(NotFound):
        raise ParentNotFound("ZZZZZZZZ")


def test_immutable_field_violation_is_validation_error() -> None:
    assert issubclass(ImmutableFieldViolation, ValidationError)


def test_only_code_generation_is_retryable() -> None:
    assert CodeGenerationExhausted.retryable
    assert not ReferralCodeAlreadyUsed.retryable


def test_not_found_message() -> None:
    assert str(NotFound("Survey", "42")) == "Survey not found: 42"
    assert str(NotFound("Nothing here")) == "Nothing here"
