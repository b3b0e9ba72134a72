"""Keycloak OIDC provider for token introspection."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCIdentity:
    """Identity carried by an active token."""

    subject: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Keycloak OIDC - introspects tokens and extracts the account subject."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCIdentity | None:
        """Introspect token, return identity or None if inactive."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return OIDCIdentity(
            subject=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )

    def resolve_subject(self, token: str) -> str | None:
        identity = self.decode_token(token)
        return identity.subject if identity else None
