"""Permission grant entity - custom per-user rule."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionGrant:
    """Additive grant stored on a user account.

    Values are kept as stored strings; the rule builder interprets them and skips
    any grant it cannot parse.
    """

    action: str
    resource: str
    scope: str = "all"
    conditions: tuple[str, ...] = ()
