"""Auth middleware - resolves the bearer token to an actor."""

import falcon.asgi

from rdsguard.application.ports import IdentityProvider
from rdsguard.infrastructure.permission import ActorLoader


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.actor.

    Requests without a usable token get ``actor = None``; resources decide
    whether that is acceptable.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider | None,
        actor_loader: ActorLoader,
    ) -> None:
        self._identity = identity_provider
        self._actors = actor_loader

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract actor from Authorization header."""
        req.context.actor = None
        if req.method == "OPTIONS":
            return
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or self._identity is None:
            return
        subject = self._identity.resolve_subject(auth[7:])
        if subject:
            req.context.actor = await self._actors.load(subject)
