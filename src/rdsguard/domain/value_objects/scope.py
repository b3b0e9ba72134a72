"""Scopes and named conditions for custom permission grants."""

from enum import StrEnum


class Scope(StrEnum):
    """Whether a grant covers every instance or only the actor's own."""

    ALL = "all"
    SELF = "self"


class GrantCondition(StrEnum):
    """Extra restrictions a grant may carry, ANDed onto its scope."""

    IS_SELF = "IS_SELF"
    HAS_SAME_LOCATION = "HAS_SAME_LOCATION"
    WAS_CREATED_TODAY = "WAS_CREATED_TODAY"
