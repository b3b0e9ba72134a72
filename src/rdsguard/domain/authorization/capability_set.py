"""Capability set - compiled rules for one actor and one request."""

from collections.abc import Iterator

from rdsguard.domain.authorization.rule import CapabilityRule
from rdsguard.domain.authorization.subject import as_subject
from rdsguard.domain.value_objects import (
    ActionSpec,
    Condition,
    NoCondition,
    ResourceType,
    all_of,
    any_of,
    negate,
)


class CapabilitySet:
    """Answers what an actor may do, per instance or as a bulk filter.

    Deny rules take precedence over grants regardless of order; among grants one
    match is enough.
    """

    def __init__(self, rules: tuple[CapabilityRule, ...]) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[CapabilityRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[CapabilityRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def can(self, action: ActionSpec, target: object, field: str | None = None) -> bool:
        """True if ``action`` on ``target`` (and ``field``) is permitted.

        ``target`` is a Subject, an entity, or a bare ResourceType. A bare type
        asks whether the action is possible on some instance: conditional grants
        count, conditional denies do not.
        """
        target = as_subject(target)
        if isinstance(target, ResourceType):
            resource_type, attributes = target, None
        else:
            resource_type, attributes = target.resource_type, target.attributes

        granted = False
        for rule in self._rules:
            if rule.resource != resource_type or not rule.matches_field(field):
                continue
            if rule.inverted:
                if rule.overlaps(action) and self._condition_holds(rule, resource_type, attributes):
                    return False
            elif not granted and rule.covers(action):
                granted = self._condition_holds(rule, resource_type, attributes)
        return granted

    def cannot(self, action: ActionSpec, target: object, field: str | None = None) -> bool:
        return not self.can(action, target, field)

    def filter_for(self, action: ActionSpec, resource_type: ResourceType) -> Condition:
        """Predicate selecting every ``resource_type`` record ``action`` is allowed on.

        Field-restricted denies do not exclude whole records and are ignored here.
        """
        grants: list[Condition] = []
        denies: list[Condition] = []
        for rule in self._rules:
            if rule.resource != resource_type:
                continue
            if rule.inverted:
                if rule.fields is None and rule.overlaps(action):
                    denies.append(rule.condition)
            elif rule.covers(action):
                grants.append(rule.condition)
        return all_of(any_of(*grants), *(negate(d) for d in denies))

    @staticmethod
    def _condition_holds(
        rule: CapabilityRule,
        resource_type: ResourceType,
        attributes: object,
    ) -> bool:
        if isinstance(rule.condition, NoCondition):
            return True
        if attributes is None:
            return not rule.inverted
        return rule.condition.matches(resource_type, attributes)
