"""Capability rule - one grant or deny statement."""

from dataclasses import dataclass

from rdsguard.domain.value_objects import (
    NO_CONDITION,
    ActionSpec,
    Condition,
    ResourceType,
    expand_actions,
)


@dataclass(frozen=True)
class CapabilityRule:
    """Grant (or, when ``inverted``, deny) ``action`` on ``resource``.

    ``fields`` of None means the rule applies to every field.
    """

    action: ActionSpec
    resource: ResourceType
    fields: frozenset[str] | None = None
    condition: Condition = NO_CONDITION
    inverted: bool = False

    def covers(self, action: ActionSpec) -> bool:
        """Grant side: every action of the check is within this rule."""
        return expand_actions(action) <= expand_actions(self.action)

    def overlaps(self, action: ActionSpec) -> bool:
        """Deny side: the check shares at least one action with this rule."""
        return bool(expand_actions(action) & expand_actions(self.action))

    def matches_field(self, field: str | None) -> bool:
        if self.fields is None:
            return True
        if field is None:
            # A field-restricted grant still answers "any access at all";
            # a field-restricted deny only bites when that field is named.
            return not self.inverted
        return field in self.fields
