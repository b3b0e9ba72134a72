"""User API resources."""

from uuid import UUID

import falcon.asgi

from rdsguard.application.dto import UserPreapproveInput
from rdsguard.application.use_cases.user import (
    ApproveUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    PreapproveUserUseCase,
    UpdateUserUseCase,
)
from rdsguard.domain.value_objects import ApprovalStatus, Role
from rdsguard.interfaces.api.resources.common import (
    error_body,
    page_params,
    parse_uuid,
    require_actor,
    user_to_dict,
)


class UsersResource:
    """GET/POST /v1/users - list readable accounts and preapprove new ones."""

    def __init__(
        self,
        list_users: ListUsersUseCase,
        preapprove_user: PreapproveUserUseCase,
    ) -> None:
        self._list_users = list_users
        self._preapprove_user = preapprove_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        cursor, limit = page_params(req)
        users, next_cursor = await self._list_users.execute(actor, cursor=cursor, limit=limit)
        resp.media = {"items": [user_to_dict(u) for u in users], "next_cursor": next_cursor}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        try:
            body = await req.get_media()
            location = body.get("location_id")
            data = UserPreapproveInput(
                employee_key=body["employee_key"],
                first_name=body["first_name"],
                role=body.get("role", Role.VOLUNTEER),
                last_name=body.get("last_name") or "",
                email=body.get("email"),
                phone=body.get("phone"),
                location_id=UUID(location) if location else None,
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", f"Missing field: {e.args[0]}", 400)
            return
        except (AttributeError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", str(e), 400)
            return

        user = await self._preapprove_user.execute(actor, data)
        resp.media = user_to_dict(user)
        resp.status = falcon.HTTP_201


class UserResource:
    """GET/PATCH /v1/users/{user_id}."""

    def __init__(self, get_user: GetUserUseCase, update_user: UpdateUserUseCase) -> None:
        self._get_user = get_user
        self._update_user = update_user

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        uid = parse_uuid(user_id, resp, "user")
        if uid is None:
            return
        user = await self._get_user.execute(actor, uid)
        resp.media = user_to_dict(user)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        uid = parse_uuid(user_id, resp, "user")
        if uid is None:
            return
        body = await req.get_media()
        if not isinstance(body, dict) or not body:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", "Body must be a non-empty object", 400)
            return
        user = await self._update_user.execute(actor, uid, body)
        resp.media = user_to_dict(user)
        resp.status = falcon.HTTP_200


class UserApprovalResource:
    """POST /v1/users/{user_id}/approval - approve or reject an account."""

    def __init__(self, approve_user: ApproveUserUseCase) -> None:
        self._approve_user = approve_user

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        uid = parse_uuid(user_id, resp, "user")
        if uid is None:
            return
        body = await req.get_media(default_when_empty={}) or {}
        status = body.get("status", ApprovalStatus.APPROVED) if isinstance(body, dict) else None
        user = await self._approve_user.execute(actor, uid, status)
        resp.media = {
            "id": str(user.id),
            "approval_status": str(user.approval_status),
            "approved_by_user_id": str(user.approved_by_user_id),
        }
        resp.status = falcon.HTTP_200
