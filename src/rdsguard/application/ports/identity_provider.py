"""Identity provider port - maps a bearer token to an account id."""

from typing import Protocol


class IdentityProvider(Protocol):
    """Resolves an already-issued token to the subject it was issued for.

    The subject is the staff account id. Token issuance and signature checks
    belong to the provider.
    """

    def resolve_subject(self, token: str) -> str | None: ...
