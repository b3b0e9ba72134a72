"""Compile capability conditions to SQL ``WHERE`` fragments.

Attribute names used by conditions are the column names of the resource's table.
Fragments never evaluate to NULL, so ``NOT`` keeps the in-memory meaning: a row
with a NULL attribute fails the leaf and passes its negation.
"""

from rdsguard.domain.value_objects import (
    AllOf,
    AnyOf,
    Condition,
    CreatedBetween,
    MatchNothing,
    NoCondition,
    Not,
    OwnedByEmployeeKey,
    OwnedById,
    ResourceType,
    SameLocation,
)


def compile_condition(condition: Condition, resource_type: ResourceType) -> tuple[str, list[object]]:
    """Return ``(sql, params)`` for ``condition`` on rows of ``resource_type``."""
    if isinstance(condition, NoCondition):
        return "TRUE", []
    if isinstance(condition, MatchNothing):
        return "FALSE", []
    if isinstance(condition, (OwnedById, OwnedByEmployeeKey, SameLocation)):
        column = condition.attribute(resource_type)
        if column is None or condition.value is None:
            return "FALSE", []
        return f"({column} IS NOT NULL AND {column} = %s)", [condition.value]
    if isinstance(condition, CreatedBetween):
        column = condition.attribute(resource_type)
        if column is None:
            return "FALSE", []
        return (
            f"({column} IS NOT NULL AND {column} BETWEEN %s AND %s)",
            [condition.start, condition.end],
        )
    if isinstance(condition, (AnyOf, AllOf)):
        joiner = " OR " if isinstance(condition, AnyOf) else " AND "
        parts: list[str] = []
        params: list[object] = []
        for child in condition.conditions:
            sql, child_params = compile_condition(child, resource_type)
            parts.append(sql)
            params.extend(child_params)
        if not parts:
            return ("FALSE" if isinstance(condition, AnyOf) else "TRUE"), []
        return "(" + joiner.join(parts) + ")", params
    if isinstance(condition, Not):
        sql, params = compile_condition(condition.condition, resource_type)
        return f"(NOT {sql})", params
    raise TypeError(f"Cannot compile condition {condition!r}")
