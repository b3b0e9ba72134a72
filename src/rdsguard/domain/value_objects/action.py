"""Authorization actions.

``Action`` is the closed set of concrete verbs. ``Manage`` is the wildcard: it is a
separate type rather than another ``Action`` member, and only ever compared after
expansion to the concrete set.
"""

from enum import Enum, StrEnum


class Action(StrEnum):
    """Concrete actions a rule can grant or deny."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    PREAPPROVE = "preapprove"
    CREATE_WITHOUT_REFERRAL = "createWithoutReferral"


class Manage(Enum):
    """Wildcard action - stands for every ``Action``."""

    MANAGE = "manage"

    def __str__(self) -> str:
        return self.value


MANAGE = Manage.MANAGE

ALL_ACTIONS: frozenset[Action] = frozenset(Action)

ActionSpec = Action | Manage


def expand_actions(action: ActionSpec) -> frozenset[Action]:
    """Concrete actions covered by ``action``."""
    if isinstance(action, Manage):
        return ALL_ACTIONS
    return frozenset((action,))


def parse_action(value: str) -> ActionSpec:
    """Parse a stored action name. Raises ValueError for unknown names."""
    if value == Manage.MANAGE.value:
        return MANAGE
    return Action(value)
