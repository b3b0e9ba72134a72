"""Unit tests for the survey tree resolver."""

import random
from dataclasses import replace
from datetime import timedelta

import pytest

from rdsguard.application.services import CodeGenerator, ParentKind, SurveyTreeResolver
from rdsguard.domain.exceptions import (
    CodeGenerationExhausted,
    ParentNotFound,
    ReferralChronologyViolation,
    ReferralCodeAlreadyUsed,
)
from rdsguard.domain.value_objects import SEED_PARENT_SENTINEL, CodePolicy

from tests.conftest import (
    NOW,
    FakeUnitOfWork,
    fixed_clock,
    make_seed,
    make_survey,
)


def _resolver(uow: FakeUnitOfWork, policy: CodePolicy | None = None) -> SurveyTreeResolver:
    generator = CodeGenerator(uow.codes, policy or CodePolicy(), random.Random(11))
    return SurveyTreeResolver(uow.surveys, uow.seeds, generator, fixed_clock)


@pytest.mark.asyncio
async def test_seed_code_resolves_to_sentinel() -> None:
    """An unused seed code roots the survey at the seed."""
    uow = FakeUnitOfWork()
    uow.seeds.add(make_seed("ABC12345"))
    resolution = await _resolver(uow).resolve_parent("ABC12345")
    assert resolution.kind is ParentKind.SEED
    assert resolution.parent_code == SEED_PARENT_SENTINEL


@pytest.mark.asyncio
async def test_unknown_code_raises_parent_not_found() -> None:
    uow = FakeUnitOfWork()
    uow.seeds.add(make_seed("ABC12345"))
    with pytest.raises(ParentNotFound) as exc_info:
        await _resolver(uow).resolve_parent("ZZZZZZZZ")
    assert exc_info.value.submitted_code == "ZZZZZZZZ"


@pytest.mark.asyncio
async def test_child_slot_resolves_to_parent_code() -> None:
    """A child code resolves to the own code of the survey holding it."""
    uow = FakeUnitOfWork()
    uow.surveys.add(make_survey("PARENT01", ("CHILD001", "CHILD002", "CHILD003")))
    resolution = await _resolver(uow).resolve_parent("CHILD002")
    assert resolution.kind is ParentKind.SURVEY
    assert resolution.parent_code == "PARENT01"


@pytest.mark.asyncio
async def test_consumed_child_code_is_rejected() -> None:
    """Once a survey is submitted under a child code, the code cannot be reused."""
    uow = FakeUnitOfWork()
    uow.surveys.add(make_survey("PARENT01", ("CHILD001", "CHILD002", "CHILD003")))
    uow.surveys.add(
        make_survey("CHILD001", ("GRAND001", "GRAND002", "GRAND003"), parent_code="PARENT01")
    )
    with pytest.raises(ReferralCodeAlreadyUsed):
        await _resolver(uow).resolve_parent("CHILD001")


@pytest.mark.asyncio
async def test_used_seed_code_is_rejected() -> None:
    uow = FakeUnitOfWork()
    uow.seeds.add(make_seed("ABC12345"))
    uow.surveys.add(make_survey("ABC12345", ("X0000001", "X0000002", "X0000003")))
    with pytest.raises(ReferralCodeAlreadyUsed):
        await _resolver(uow).resolve_parent("ABC12345")


@pytest.mark.asyncio
async def test_deleted_parent_does_not_resolve() -> None:
    uow = FakeUnitOfWork()
    parent = make_survey("PARENT01", ("CHILD001", "CHILD002", "CHILD003"))
    uow.surveys.add(replace(parent, deleted_at=NOW - timedelta(minutes=5)))
    with pytest.raises(ParentNotFound):
        await _resolver(uow).resolve_parent("CHILD001")


@pytest.mark.asyncio
async def test_parent_must_predate_child() -> None:
    uow = FakeUnitOfWork()
    uow.surveys.add(
        make_survey("PARENT01", ("CHILD001", "CHILD002", "CHILD003"), created_at=NOW)
    )
    with pytest.raises(ReferralChronologyViolation):
        await _resolver(uow).resolve_parent("CHILD001")


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [None, ""])
async def test_missing_code_is_root(code) -> None:
    resolution = await _resolver(FakeUnitOfWork()).resolve_parent(code)
    assert resolution.kind is ParentKind.ROOT
    assert resolution.parent_code == SEED_PARENT_SENTINEL


@pytest.mark.asyncio
async def test_place_under_parent_mints_fresh_children() -> None:
    uow = FakeUnitOfWork()
    uow.surveys.add(make_survey("PARENT01", ("CHILD001", "CHILD002", "CHILD003")))
    placement = await _resolver(uow).place("CHILD003")
    assert placement.code == "CHILD003"
    assert placement.parent_code == "PARENT01"
    assert len(set(placement.child_codes)) == 3
    assert "CHILD003" not in placement.child_codes
    assert not await uow.codes.find_existing(placement.child_codes)


@pytest.mark.asyncio
async def test_place_root_generates_own_code() -> None:
    uow = FakeUnitOfWork()
    placement = await _resolver(uow).place(None)
    assert placement.kind is ParentKind.ROOT
    assert placement.parent_code == SEED_PARENT_SENTINEL
    assert CodePolicy().is_well_formed(placement.code)
    assert placement.code not in placement.child_codes


@pytest.mark.asyncio
async def test_place_propagates_exhaustion() -> None:
    uow = FakeUnitOfWork()
    uow.seeds.add(make_seed("A"))
    resolver = _resolver(uow, CodePolicy(alphabet="A", length=1))
    with pytest.raises(CodeGenerationExhausted):
        await resolver.place("A")
    assert uow.surveys.all() == []
