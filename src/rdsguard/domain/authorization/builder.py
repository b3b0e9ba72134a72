"""Capability rule builder.

Rules for a request are built in three layers: the role template, the actor's
custom grants, then the universal deny rules. The builder is a pure function of its
arguments and never raises; anything it cannot interpret contributes no rules.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rdsguard.domain.authorization.capability_set import CapabilitySet
from rdsguard.domain.authorization.rule import CapabilityRule
from rdsguard.domain.entities.permission_grant import PermissionGrant
from rdsguard.domain.entities.survey import EDITABLE_FIELDS as SURVEY_EDITABLE_FIELDS
from rdsguard.domain.entities.user import PROFILE_FIELDS
from rdsguard.domain.value_objects import (
    MANAGE,
    NO_CONDITION,
    Action,
    Condition,
    CreatedBetween,
    GrantCondition,
    OwnedByEmployeeKey,
    OwnedById,
    ResourceType,
    Role,
    SameLocation,
    Scope,
    all_of,
    any_of,
    parse_action,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"

USER = ResourceType.USER
SURVEY = ResourceType.SURVEY
SEED = ResourceType.SEED


@dataclass(frozen=True)
class ActorContext:
    """Actor attributes substituted into rule conditions."""

    user_id: UUID | str
    employee_key: str
    location_id: UUID | str | None = None
    timezone: str = DEFAULT_TIMEZONE

    def owns(self) -> Condition:
        """The "own records" condition shared by role templates and SELF grants."""
        return any_of(OwnedById(self.user_id), OwnedByEmployeeKey(self.employee_key))


def today_window(timezone: str, now: datetime) -> tuple[datetime, datetime]:
    """Start and end of the calendar day containing ``now`` in ``timezone``."""
    try:
        tz = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to UTC", timezone)
        tz = ZoneInfo("UTC")
    local = now.astimezone(tz)
    start = datetime.combine(local.date(), time.min, tzinfo=tz)
    end = start + timedelta(days=1) - timedelta(microseconds=1)
    return start, end


class _Rules:
    """Small accumulator mirroring ``can``/``cannot`` statements."""

    def __init__(self) -> None:
        self.items: list[CapabilityRule] = []

    def can(
        self,
        action,
        resource: ResourceType,
        condition: Condition | None = None,
        fields: Iterable[str] | None = None,
    ) -> None:
        self._add(action, resource, condition, fields, inverted=False)

    def cannot(
        self,
        action,
        resource: ResourceType,
        condition: Condition | None = None,
        fields: Iterable[str] | None = None,
    ) -> None:
        self._add(action, resource, condition, fields, inverted=True)

    def _add(self, action, resource, condition, fields, inverted: bool) -> None:
        actions = action if isinstance(action, (list, tuple)) else (action,)
        for a in actions:
            self.items.append(
                CapabilityRule(
                    action=a,
                    resource=resource,
                    fields=frozenset(fields) if fields is not None else None,
                    condition=condition if condition is not None else NO_CONDITION,
                    inverted=inverted,
                )
            )


def _admin_rules(rules: _Rules, ctx: ActorContext, today: CreatedBetween) -> None:
    # No restrictions
    for resource in ResourceType:
        rules.can(MANAGE, resource)


def _manager_rules(rules: _Rules, ctx: ActorContext, today: CreatedBetween) -> None:
    rules.can(Action.READ, USER)
    rules.can(MANAGE, USER, ctx.owns())
    rules.can([Action.APPROVE, Action.PREAPPROVE], USER)

    rules.can([Action.READ, Action.CREATE, Action.CREATE_WITHOUT_REFERRAL], SURVEY)
    rules.can(
        Action.UPDATE,
        SURVEY,
        all_of(SameLocation(ctx.location_id), today),
        fields=SURVEY_EDITABLE_FIELDS,
    )
    rules.can(Action.DELETE, SURVEY, ctx.owns())

    rules.can([Action.READ, Action.CREATE], SEED)


def _volunteer_rules(rules: _Rules, ctx: ActorContext, today: CreatedBetween) -> None:
    rules.can(Action.READ, USER, ctx.owns())
    rules.can(Action.UPDATE, USER, ctx.owns(), fields=PROFILE_FIELDS)

    rules.can(Action.CREATE, SURVEY)
    rules.can([Action.READ, Action.UPDATE, Action.DELETE], SURVEY, ctx.owns())

    rules.can(Action.READ, SEED)


ROLE_TEMPLATES: dict[Role, Callable[[_Rules, ActorContext, CreatedBetween], None]] = {
    Role.ADMIN: _admin_rules,
    Role.MANAGER: _manager_rules,
    Role.VOLUNTEER: _volunteer_rules,
}


def _universal_denies(rules: _Rules, ctx: ActorContext) -> None:
    # Nobody approves their own account or changes their own role, whatever their
    # role or grants say.
    rules.cannot(Action.APPROVE, USER, OwnedById(ctx.user_id))
    rules.cannot(Action.UPDATE, USER, OwnedById(ctx.user_id), fields=("role",))


def _grant_condition(
    name: str, ctx: ActorContext, today: CreatedBetween
) -> Condition:
    cond = GrantCondition(name)
    if cond is GrantCondition.IS_SELF:
        return ctx.owns()
    if cond is GrantCondition.HAS_SAME_LOCATION:
        return SameLocation(ctx.location_id)
    return today


def _apply_grant(
    rules: _Rules,
    grant: PermissionGrant,
    ctx: ActorContext,
    today: CreatedBetween,
) -> None:
    try:
        action = parse_action(grant.action)
        resource = ResourceType(grant.resource)
        scope = Scope(grant.scope.lower())
        extra = [_grant_condition(name, ctx, today) for name in grant.conditions]
    except (ValueError, AttributeError):
        logger.debug("Ignoring malformed permission grant %r", grant)
        return

    base = ctx.owns() if scope is Scope.SELF else None
    parts = ([base] if base is not None else []) + extra
    rules.can(action, resource, all_of(*parts) if parts else None)


def build_capabilities(
    role: Role | str | None,
    context: ActorContext,
    grants: Iterable[PermissionGrant] = (),
    *,
    now: datetime | None = None,
) -> CapabilitySet:
    """Compile the rules for one actor into a CapabilitySet."""
    now = now or datetime.now(UTC)
    start, end = today_window(context.timezone, now)
    today = CreatedBetween(start, end)
    rules = _Rules()

    try:
        template = ROLE_TEMPLATES.get(Role(role)) if role is not None else None
    except ValueError:
        template = None
    if template is None:
        logger.debug("No default rules for role %r", role)
    else:
        template(rules, context, today)

    for grant in grants:
        _apply_grant(rules, grant, context, today)

    _universal_denies(rules, context)
    return CapabilitySet(tuple(rules.items))
