"""Rule conditions - a closed set of predicate variants over resource attributes.

Each variant evaluates itself against a record (``matches``). The same tree is
compiled to a storage filter by the persistence adapter, so leaves expose the
attribute they read through ``attribute(resource_type)``. A leaf whose attribute
does not exist on a resource type never matches that resource type.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from rdsguard.domain.value_objects.resource_type import ResourceType

OWNER_ID_ATTRIBUTES: dict[ResourceType, str] = {
    ResourceType.USER: "id",
    ResourceType.SURVEY: "created_by_user_id",
}
OWNER_KEY_ATTRIBUTES: dict[ResourceType, str] = {
    ResourceType.USER: "employee_key",
    ResourceType.SURVEY: "owner_employee_key",
}
LOCATION_ATTRIBUTES: dict[ResourceType, str] = {
    ResourceType.USER: "location_id",
    ResourceType.SURVEY: "location_id",
    ResourceType.SEED: "location_id",
}
CREATED_AT_ATTRIBUTES: dict[ResourceType, str] = {
    ResourceType.USER: "created_at",
    ResourceType.SURVEY: "created_at",
    ResourceType.SEED: "created_at",
}


def _same(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)


class Condition:
    """Base of all condition variants."""

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class NoCondition(Condition):
    """Matches every record."""

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        return True


@dataclass(frozen=True)
class MatchNothing(Condition):
    """Matches no record."""

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        return False


@dataclass(frozen=True)
class _EqualsLeaf(Condition):
    """Equality between one attribute of the record and a fixed value."""

    def attribute(self, resource_type: ResourceType) -> str | None:
        raise NotImplementedError

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        name = self.attribute(resource_type)
        if name is None:
            return False
        return _same(attributes.get(name), self.value)


@dataclass(frozen=True)
class OwnedById(_EqualsLeaf):
    """Record is the actor's own user record, or was created by the actor."""

    user_id: UUID | str

    def attribute(self, resource_type: ResourceType) -> str | None:
        return OWNER_ID_ATTRIBUTES.get(resource_type)

    @property
    def value(self) -> Any:
        return self.user_id


@dataclass(frozen=True)
class OwnedByEmployeeKey(_EqualsLeaf):
    """Record carries the actor's employee key."""

    employee_key: str

    def attribute(self, resource_type: ResourceType) -> str | None:
        return OWNER_KEY_ATTRIBUTES.get(resource_type)

    @property
    def value(self) -> Any:
        return self.employee_key


@dataclass(frozen=True)
class SameLocation(_EqualsLeaf):
    """Record belongs to the actor's current location."""

    location_id: UUID | str | None

    def attribute(self, resource_type: ResourceType) -> str | None:
        return LOCATION_ATTRIBUTES.get(resource_type)

    @property
    def value(self) -> Any:
        return self.location_id


@dataclass(frozen=True)
class CreatedBetween(Condition):
    """Record creation time falls in ``[start, end]``."""

    start: datetime
    end: datetime

    def attribute(self, resource_type: ResourceType) -> str | None:
        return CREATED_AT_ATTRIBUTES.get(resource_type)

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        name = self.attribute(resource_type)
        value = attributes.get(name) if name else None
        if not isinstance(value, datetime):
            return False
        return self.start <= value <= self.end


@dataclass(frozen=True)
class AnyOf(Condition):
    """Disjunction."""

    conditions: tuple[Condition, ...]

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        return any(c.matches(resource_type, attributes) for c in self.conditions)


@dataclass(frozen=True)
class AllOf(Condition):
    """Conjunction."""

    conditions: tuple[Condition, ...]

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        return all(c.matches(resource_type, attributes) for c in self.conditions)


@dataclass(frozen=True)
class Not(Condition):
    """Negation."""

    condition: Condition

    def matches(self, resource_type: ResourceType, attributes: Mapping[str, Any]) -> bool:
        return not self.condition.matches(resource_type, attributes)


NO_CONDITION = NoCondition()
MATCH_NOTHING = MatchNothing()


def any_of(*conditions: Condition) -> Condition:
    """Disjunction, flattened and simplified."""
    flat: list[Condition] = []
    for c in _flatten(conditions, AnyOf):
        if isinstance(c, NoCondition):
            return NO_CONDITION
        if isinstance(c, MatchNothing) or c in flat:
            continue
        flat.append(c)
    if not flat:
        return MATCH_NOTHING
    if len(flat) == 1:
        return flat[0]
    return AnyOf(tuple(flat))


def all_of(*conditions: Condition) -> Condition:
    """Conjunction, flattened and simplified."""
    flat: list[Condition] = []
    for c in _flatten(conditions, AllOf):
        if isinstance(c, MatchNothing):
            return MATCH_NOTHING
        if isinstance(c, NoCondition) or c in flat:
            continue
        flat.append(c)
    if not flat:
        return NO_CONDITION
    if len(flat) == 1:
        return flat[0]
    return AllOf(tuple(flat))


def negate(condition: Condition) -> Condition:
    """Negation, simplified."""
    if isinstance(condition, NoCondition):
        return MATCH_NOTHING
    if isinstance(condition, MatchNothing):
        return NO_CONDITION
    if isinstance(condition, Not):
        return condition.condition
    return Not(condition)


def _flatten(conditions: Iterable[Condition], kind: type) -> Iterable[Condition]:
    for c in conditions:
        if isinstance(c, kind):
            yield from _flatten(c.conditions, kind)
        else:
            yield c
