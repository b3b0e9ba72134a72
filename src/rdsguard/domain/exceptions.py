"""Domain exceptions.

Every exception carries a stable ``code`` and the HTTP ``status`` the API layer
reports it with, so routes never have to guess how to render a failure.
"""


class RdsGuardError(Exception):
    """Base exception for rdsguard."""

    code = "INTERNAL_ERROR"
    status = 500
    retryable = False

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": str(self), "status": self.status}


class PermissionDenied(RdsGuardError):
    """Actor does not have permission for the requested action."""

    code = "PERMISSION_DENIED"
    status = 403


class NotFound(RdsGuardError):
    """Requested resource was not found."""

    code = "NOT_FOUND"
    status = 404

    def __init__(self, kind: str, identifier: str | None = None) -> None:
        message = kind if identifier is None else f"{kind} not found: {identifier}"
        super().__init__(message)


class ParentNotFound(NotFound):
    """Submitted code matches neither a survey child slot nor a seed."""

    code = "PARENT_SURVEY_NOT_FOUND"

    def __init__(self, submitted_code: str) -> None:
        super().__init__("Could not find parent survey or seed for code", submitted_code)
        self.submitted_code = submitted_code


class ValidationError(RdsGuardError):
    """Validation failed for input data."""

    code = "VALIDATION_ERROR"
    status = 400


class ImmutableFieldViolation(ValidationError):
    """Attempt to modify a field that is fixed at creation."""

    code = "IMMUTABLE_FIELD_VIOLATION"


class ReferralCodeAlreadyUsed(RdsGuardError):
    """A survey has already been submitted under this code."""

    code = "SURVEY_CODE_ALREADY_EXISTS"
    status = 409


class ReferralChronologyViolation(RdsGuardError):
    """Child survey would not be newer than its parent."""

    code = "REFERRAL_CHRONOLOGY_VIOLATION"
    status = 409


class CodeGenerationExhausted(RdsGuardError):
    """No collision-free code found within the retry budget. Safe to retry."""

    code = "SURVEY_CODE_GENERATION_ERROR"
    status = 500
    retryable = True


class UserAlreadyExists(RdsGuardError):
    """An account with this employee key is already registered."""

    code = "USER_ALREADY_EXISTS"
    status = 409
