"""Unit tests for the capability rule builder and capability set."""

from datetime import timedelta
from uuid import uuid4

import pytest

from rdsguard.domain.authorization import (
    ActorContext,
    CapabilityRule,
    Subject,
    build_capabilities,
)
from rdsguard.domain.entities import PermissionGrant
from rdsguard.domain.value_objects import (
    MANAGE,
    MATCH_NOTHING,
    Action,
    ResourceType,
    Role,
)

from tests.conftest import LOCATION_A, LOCATION_B, NOW, TIMEZONE

SURVEY = ResourceType.SURVEY
USER = ResourceType.USER
SEED = ResourceType.SEED


def _ctx(employee_key: str = "E1", location_id=LOCATION_A) -> ActorContext:
    return ActorContext(
        user_id=uuid4(),
        employee_key=employee_key,
        location_id=location_id,
        timezone=TIMEZONE,
    )


def _survey(**attrs) -> Subject:
    return Subject(SURVEY, attrs)


def _user(**attrs) -> Subject:
    return Subject(USER, attrs)


# --- Scenarios ---


def test_volunteer_updates_only_own_surveys() -> None:
    """Volunteer may update responses of surveys carrying their employee key only."""
    caps = build_capabilities(Role.VOLUNTEER, _ctx("E1"), now=NOW)
    assert caps.can(Action.UPDATE, _survey(owner_employee_key="E1"), "responses")
    assert not caps.can(Action.UPDATE, _survey(owner_employee_key="E2"), "responses")


def test_manager_cannot_approve_self() -> None:
    """Universal deny blocks self-approval while other users stay approvable."""
    ctx = _ctx()
    caps = build_capabilities(Role.MANAGER, ctx, [], now=NOW)
    assert not caps.can(Action.APPROVE, _user(id=ctx.user_id))
    assert caps.can(Action.APPROVE, _user(id=uuid4()))


def test_nobody_changes_own_role() -> None:
    """Managing one's own account covers the profile but not the role."""
    ctx = _ctx()
    me = _user(id=ctx.user_id, employee_key="E1")
    manager = build_capabilities(Role.MANAGER, ctx, now=NOW)
    assert manager.can(Action.UPDATE, me, "first_name")
    assert not manager.can(Action.UPDATE, me, "role")

    admin = build_capabilities(Role.ADMIN, ctx, now=NOW)
    assert not admin.can(Action.UPDATE, me, "role")
    assert admin.can(Action.UPDATE, _user(id=uuid4()), "role")


def test_filter_for_self_scoped_read_grant() -> None:
    """A SELF read grant filters a mixed set down to the actor's own surveys."""
    ctx = _ctx("E1")
    caps = build_capabilities(
        "Auditor", ctx, [PermissionGrant(action="read", resource="Survey", scope="self")], now=NOW
    )
    condition = caps.filter_for(Action.READ, SURVEY)
    records = [
        {"owner_employee_key": "E1", "created_by_user_id": uuid4()},
        {"owner_employee_key": "E2", "created_by_user_id": uuid4()},
        {"owner_employee_key": "E3", "created_by_user_id": ctx.user_id},
        {"owner_employee_key": "E4", "created_by_user_id": uuid4()},
    ]
    matched = [r for r in records if condition.matches(SURVEY, r)]
    assert matched == [records[0], records[2]]


# --- Default deny and precedence ---


def test_no_rules_denies_everything() -> None:
    """Unknown role with no grants can do nothing."""
    caps = build_capabilities("Visitor", _ctx(), now=NOW)
    assert len(caps) == 2  # only the universal denies
    for action in Action:
        for resource in ResourceType:
            assert not caps.can(action, resource)
            assert caps.filter_for(action, resource) == MATCH_NOTHING


def test_none_role_yields_no_defaults() -> None:
    """A missing role behaves like an unknown one."""
    caps = build_capabilities(None, _ctx(), now=NOW)
    assert not caps.can(Action.READ, SEED)


def test_admin_manages_everything_but_own_approval() -> None:
    """Deny wins over the admin's manage grant."""
    ctx = _ctx()
    caps = build_capabilities(Role.ADMIN, ctx, now=NOW)
    assert caps.can(MANAGE, _survey(owner_employee_key="E9"))
    assert caps.can(Action.CREATE_WITHOUT_REFERRAL, SURVEY)
    assert caps.can(Action.DELETE, SEED)
    assert not caps.can(Action.APPROVE, _user(id=ctx.user_id))
    assert not caps.can(MANAGE, _user(id=ctx.user_id))


def test_custom_grant_cannot_override_deny() -> None:
    """An explicit approve grant still loses to the self-approval deny."""
    ctx = _ctx()
    caps = build_capabilities(
        Role.VOLUNTEER, ctx, [PermissionGrant(action="approve", resource="User")], now=NOW
    )
    assert caps.can(Action.APPROVE, _user(id=uuid4()))
    assert not caps.can(Action.APPROVE, _user(id=ctx.user_id))


# --- Grants ---


def test_grants_are_additive() -> None:
    """A grant adds capability on top of the role template."""
    ctx = _ctx("E1")
    base = build_capabilities(Role.VOLUNTEER, ctx, now=NOW)
    assert not base.can(Action.CREATE_WITHOUT_REFERRAL, SURVEY)
    assert not base.can(Action.READ, _survey(owner_employee_key="E2"))

    extended = build_capabilities(
        Role.VOLUNTEER,
        ctx,
        [
            PermissionGrant(action="createWithoutReferral", resource="Survey"),
            PermissionGrant(action="read", resource="Survey", scope="ALL"),
        ],
        now=NOW,
    )
    assert extended.can(Action.CREATE_WITHOUT_REFERRAL, SURVEY)
    assert extended.can(Action.READ, _survey(owner_employee_key="E2"))
    # Template rules are untouched
    assert extended.can(Action.UPDATE, _survey(owner_employee_key="E1"), "responses")


def test_grant_with_extra_conditions() -> None:
    """Named grant conditions are ANDed onto the grant."""
    ctx = _ctx(location_id=LOCATION_A)
    caps = build_capabilities(
        "Auditor",
        ctx,
        [
            PermissionGrant(
                action="read",
                resource="Survey",
                conditions=("HAS_SAME_LOCATION", "WAS_CREATED_TODAY"),
            )
        ],
        now=NOW,
    )
    assert caps.can(Action.READ, _survey(location_id=LOCATION_A, created_at=NOW))
    assert not caps.can(Action.READ, _survey(location_id=LOCATION_B, created_at=NOW))
    assert not caps.can(
        Action.READ, _survey(location_id=LOCATION_A, created_at=NOW - timedelta(days=2))
    )


@pytest.mark.parametrize(
    "grant",
    [
        PermissionGrant(action="fly", resource="Survey"),
        PermissionGrant(action="read", resource="Planet"),
        PermissionGrant(action="read", resource="Survey", scope="sometimes"),
        PermissionGrant(action="read", resource="Survey", conditions=("IS_TUESDAY",)),
    ],
)
def test_malformed_grants_are_ignored(grant: PermissionGrant) -> None:
    """Unparseable grants add no rules and do not raise."""
    ctx = _ctx()
    baseline = build_capabilities(Role.VOLUNTEER, ctx, now=NOW)
    caps = build_capabilities(Role.VOLUNTEER, ctx, [grant], now=NOW)
    assert caps.rules == baseline.rules


# --- Fields and types ---


def test_field_restricted_grant() -> None:
    """Volunteer edits profile fields of their own account only."""
    ctx = _ctx("E1")
    caps = build_capabilities(Role.VOLUNTEER, ctx, now=NOW)
    me = _user(id=ctx.user_id, employee_key="E1")
    assert caps.can(Action.UPDATE, me, "email")
    assert not caps.can(Action.UPDATE, me, "role")
    assert not caps.can(Action.UPDATE, _user(id=uuid4(), employee_key="E2"), "email")


def test_manager_updates_same_location_surveys_created_today() -> None:
    caps = build_capabilities(Role.MANAGER, _ctx(location_id=LOCATION_A), now=NOW)
    today = _survey(location_id=LOCATION_A, created_at=NOW - timedelta(hours=1))
    assert caps.can(Action.UPDATE, today, "responses")
    assert not caps.can(Action.UPDATE, today, "parent_code")
    assert not caps.can(
        Action.UPDATE, _survey(location_id=LOCATION_B, created_at=NOW), "responses"
    )
    assert not caps.can(
        Action.UPDATE,
        _survey(location_id=LOCATION_A, created_at=NOW - timedelta(days=1)),
        "responses",
    )


def test_type_level_checks() -> None:
    """Conditional grants count on a bare type, conditional denies do not."""
    volunteer = build_capabilities(Role.VOLUNTEER, _ctx(), now=NOW)
    assert volunteer.can(Action.READ, SURVEY)
    assert not volunteer.can(Action.CREATE_WITHOUT_REFERRAL, SURVEY)
    assert not volunteer.can(Action.CREATE, SEED)

    manager = build_capabilities(Role.MANAGER, _ctx(), now=NOW)
    assert manager.can(Action.APPROVE, USER)


def test_manage_check_needs_manage_grant() -> None:
    """Holding some actions is not enough to pass a manage check."""
    ctx = _ctx("E1")
    caps = build_capabilities(Role.VOLUNTEER, ctx, now=NOW)
    assert not caps.can(MANAGE, _survey(owner_employee_key="E1"))
    manager = build_capabilities(Role.MANAGER, ctx, now=NOW)
    assert manager.can(MANAGE, _user(id=uuid4(), employee_key="E1"))


def test_field_restricted_deny_ignores_fieldless_checks() -> None:
    rule = CapabilityRule(Action.UPDATE, SURVEY, fields=frozenset({"responses"}), inverted=True)
    assert not rule.matches_field(None)
    assert rule.matches_field("responses")
    grant = CapabilityRule(Action.UPDATE, SURVEY, fields=frozenset({"responses"}))
    assert grant.matches_field(None)


def test_entities_are_accepted_as_targets() -> None:
    """Entities carrying RESOURCE_TYPE are checked like subjects."""
    from tests.conftest import make_survey, make_user

    owner = make_user(Role.VOLUNTEER)
    ctx = ActorContext(owner.id, owner.employee_key, owner.location_id, TIMEZONE)
    caps = build_capabilities(owner.role, ctx, now=NOW)
    assert caps.can(Action.READ, make_survey("OWNCODE1", ("A", "B", "C"), owner=owner))
    assert not caps.can(Action.READ, make_survey("OTHER001", ("D", "E", "F")))


def test_non_resource_target_raises_type_error() -> None:
    caps = build_capabilities(Role.ADMIN, _ctx(), now=NOW)
    with pytest.raises(TypeError):
        caps.can(Action.READ, object())


# --- Filters ---


def test_filter_for_excludes_denied_records() -> None:
    """Record-level denies are negated into the filter."""
    ctx = _ctx()
    caps = build_capabilities(Role.MANAGER, ctx, now=NOW)
    condition = caps.filter_for(Action.APPROVE, USER)
    assert condition.matches(USER, {"id": uuid4()})
    assert not condition.matches(USER, {"id": ctx.user_id})


def test_filter_for_agrees_with_can() -> None:
    ctx = _ctx("E1")
    caps = build_capabilities(Role.VOLUNTEER, ctx, now=NOW)
    condition = caps.filter_for(Action.DELETE, SURVEY)
    for attrs in (
        {"owner_employee_key": "E1"},
        {"owner_employee_key": "E2"},
        {"owner_employee_key": "E2", "created_by_user_id": ctx.user_id},
    ):
        assert condition.matches(SURVEY, attrs) == caps.can(Action.DELETE, _survey(**attrs))


def test_unknown_timezone_falls_back_to_utc() -> None:
    ctx = ActorContext(uuid4(), "E1", LOCATION_A, timezone="Mars/Olympus_Mons")
    caps = build_capabilities(Role.MANAGER, ctx, now=NOW)
    assert caps.can(Action.UPDATE, _survey(location_id=LOCATION_A, created_at=NOW), "responses")
