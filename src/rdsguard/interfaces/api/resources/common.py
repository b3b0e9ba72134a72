"""Helpers shared by API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from rdsguard.application.dto import Actor, SurveyOutput
from rdsguard.domain.entities import Seed, User

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def error_body(code: str, message: str, status: int) -> dict[str, object]:
    return {"code": code, "message": message, "status": status}


def require_actor(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> Actor | None:
    """The request actor, or None after writing a 401 response."""
    actor = getattr(req.context, "actor", None)
    if actor is None:
        resp.status = falcon.HTTP_401
        resp.media = error_body("UNAUTHORIZED", "Authentication required", 401)
    return actor


def parse_uuid(value: str, resp: falcon.asgi.Response, label: str) -> UUID | None:
    """Parse a path id, or write a 400 response and return None."""
    try:
        return UUID(value)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = error_body("VALIDATION_ERROR", f"Invalid {label} ID", 400)
        return None


def page_params(req: falcon.asgi.Request) -> tuple[str | None, int]:
    cursor = req.get_param("cursor")
    limit = req.get_param_as_int("limit") or DEFAULT_PAGE_SIZE
    return cursor, min(max(limit, 1), MAX_PAGE_SIZE)


def survey_to_dict(s: SurveyOutput) -> dict[str, object]:
    return {
        "id": str(s.id),
        "code": s.code,
        "parent_code": s.parent_code,
        "child_codes": s.child_codes,
        "created_by_user_id": str(s.created_by_user_id),
        "owner_employee_key": s.owner_employee_key,
        "location_id": str(s.location_id),
        "responses": s.responses,
        "is_completed": s.is_completed,
        "created_at": s.created_at.isoformat(),
        "updated_at": s.updated_at.isoformat(),
    }


def seed_to_dict(seed: Seed) -> dict[str, object]:
    return {
        "id": str(seed.id),
        "code": seed.code,
        "location_id": str(seed.location_id),
        "is_fallback": seed.is_fallback,
        "created_at": seed.created_at.isoformat(),
    }


def user_to_dict(user: User) -> dict[str, object]:
    return {
        "id": str(user.id),
        "employee_key": user.employee_key,
        "role": str(user.role),
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "phone": user.phone,
        "location_id": str(user.location_id) if user.location_id else None,
        "approval_status": str(user.approval_status),
        "approved_by_user_id": str(user.approved_by_user_id) if user.approved_by_user_id else None,
        "created_at": user.created_at.isoformat(),
        "updated_at": user.updated_at.isoformat(),
    }
