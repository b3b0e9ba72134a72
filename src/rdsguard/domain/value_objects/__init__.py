"""Domain value objects."""

from rdsguard.domain.value_objects.action import (
    ALL_ACTIONS,
    MANAGE,
    Action,
    ActionSpec,
    Manage,
    expand_actions,
    parse_action,
)
from rdsguard.domain.value_objects.condition import (
    MATCH_NOTHING,
    NO_CONDITION,
    AllOf,
    AnyOf,
    Condition,
    CreatedBetween,
    MatchNothing,
    NoCondition,
    Not,
    OwnedByEmployeeKey,
    OwnedById,
    SameLocation,
    all_of,
    any_of,
    negate,
)
from rdsguard.domain.value_objects.resource_type import ResourceType
from rdsguard.domain.value_objects.role import ApprovalStatus, Role
from rdsguard.domain.value_objects.scope import GrantCondition, Scope
from rdsguard.domain.value_objects.survey_code import (
    SEED_PARENT_SENTINEL,
    CodePolicy,
)

__all__ = [
    "ALL_ACTIONS",
    "MANAGE",
    "MATCH_NOTHING",
    "NO_CONDITION",
    "SEED_PARENT_SENTINEL",
    "Action",
    "ActionSpec",
    "AllOf",
    "AnyOf",
    "ApprovalStatus",
    "CodePolicy",
    "Condition",
    "CreatedBetween",
    "GrantCondition",
    "Manage",
    "MatchNothing",
    "NoCondition",
    "Not",
    "OwnedByEmployeeKey",
    "OwnedById",
    "ResourceType",
    "Role",
    "SameLocation",
    "Scope",
    "all_of",
    "any_of",
    "expand_actions",
    "negate",
    "parse_action",
]
