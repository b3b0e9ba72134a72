"""Identity provider adapters."""

from rdsguard.infrastructure.auth.keycloak_provider import KeycloakProvider, OIDCIdentity

__all__ = ["KeycloakProvider", "OIDCIdentity"]
