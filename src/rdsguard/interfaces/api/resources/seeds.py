"""Seed API resources."""

from uuid import UUID

import falcon.asgi

from rdsguard.application.use_cases.seed import CreateSeedUseCase, ListSeedsUseCase
from rdsguard.interfaces.api.resources.common import (
    error_body,
    page_params,
    require_actor,
    seed_to_dict,
)


class SeedsResource:
    """GET/POST /v1/seeds - list and create seeds."""

    def __init__(self, create_seed: CreateSeedUseCase, list_seeds: ListSeedsUseCase) -> None:
        self._create_seed = create_seed
        self._list_seeds = list_seeds

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        cursor, limit = page_params(req)
        seeds, next_cursor = await self._list_seeds.execute(actor, cursor=cursor, limit=limit)
        resp.media = {"items": [seed_to_dict(s) for s in seeds], "next_cursor": next_cursor}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if actor is None:
            return
        try:
            body = await req.get_media(default_when_empty={}) or {}
            location = body.get("location_id")
            location_id = UUID(location) if location else None
            is_fallback = bool(body.get("is_fallback", False))
        except (AttributeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = error_body("VALIDATION_ERROR", str(e), 400)
            return

        seed = await self._create_seed.execute(actor, location_id, is_fallback=is_fallback)
        resp.media = seed_to_dict(seed)
        resp.status = falcon.HTTP_201
