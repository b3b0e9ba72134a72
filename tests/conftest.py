"""Pytest fixtures for rdsguard tests."""

from __future__ import annotations

import random
from collections.abc import Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from rdsguard.application.dto import Actor
from rdsguard.domain.authorization import subject
from rdsguard.domain.entities import PermissionGrant, Seed, Survey, User
from rdsguard.domain.exceptions import ReferralCodeAlreadyUsed, UserAlreadyExists
from rdsguard.domain.value_objects import (
    SEED_PARENT_SENTINEL,
    ApprovalStatus,
    Condition,
    ResourceType,
)

# 11:00 in Los Angeles
NOW = datetime(2026, 3, 10, 18, 0, tzinfo=UTC)
TIMEZONE = "America/Los_Angeles"
LOCATION_A = UUID("00000000-0000-0000-0000-0000000000a1")
LOCATION_B = UUID("00000000-0000-0000-0000-0000000000b2")


def _page(items: list, cursor: str | None, limit: int) -> tuple[list, str | None]:
    items.sort(key=lambda x: x.id)
    if cursor:
        cursor_uuid = UUID(cursor)
        items = [x for x in items if x.id > cursor_uuid]
    page = items[: limit + 1]
    next_cursor = str(page[limit - 1].id) if len(page) > limit else None
    return page[:limit], next_cursor


# --- Fake repositories ---


class FakeSurveyRepository:
    """In-memory survey repository. Enforces one survey per code like the unique index."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Survey] = {}

    def add(self, survey: Survey) -> Survey:
        self._by_id[survey.id] = survey
        return survey

    async def get_by_id(self, survey_id: UUID, include_deleted: bool = False) -> Survey | None:
        survey = self._by_id.get(survey_id)
        if not survey or (not include_deleted and survey.deleted_at):
            return None
        return survey

    async def get_by_code(self, code: str, include_deleted: bool = True) -> Survey | None:
        for s in self._by_id.values():
            if s.code == code and (include_deleted or s.deleted_at is None):
                return s
        return None

    async def find_parent_by_child_code(self, code: str) -> Survey | None:
        for s in self._by_id.values():
            if s.deleted_at is None and code in s.child_codes:
                return s
        return None

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
        include_deleted: bool = False,
    ) -> tuple[list[Survey], str | None]:
        items = [
            s
            for s in self._by_id.values()
            if (include_deleted or s.deleted_at is None)
            and condition.matches(ResourceType.SURVEY, subject(ResourceType.SURVEY, s).attributes)
        ]
        return _page(items, cursor, limit)

    async def create(self, survey: Survey) -> Survey:
        if any(s.code == survey.code for s in self._by_id.values()):
            raise ReferralCodeAlreadyUsed(f"duplicate survey code {survey.code}")
        self._by_id[survey.id] = survey
        return survey

    async def update(self, survey: Survey) -> None:
        self._by_id[survey.id] = survey

    async def soft_delete(self, survey_id: UUID) -> None:
        survey = self._by_id.get(survey_id)
        if survey:
            self._by_id[survey_id] = replace(survey, deleted_at=datetime.now(UTC))

    def all(self) -> list[Survey]:
        return list(self._by_id.values())


class FakeSeedRepository:
    """In-memory seed repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Seed] = {}

    def add(self, seed: Seed) -> Seed:
        self._by_id[seed.id] = seed
        return seed

    async def get_by_code(self, code: str) -> Seed | None:
        return next((s for s in self._by_id.values() if s.code == code), None)

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Seed], str | None]:
        items = [
            s
            for s in self._by_id.values()
            if condition.matches(ResourceType.SEED, subject(ResourceType.SEED, s).attributes)
        ]
        return _page(items, cursor, limit)

    async def create(self, seed: Seed) -> Seed:
        self._by_id[seed.id] = seed
        return seed

    def all(self) -> list[Seed]:
        return list(self._by_id.values())


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}

    def add(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_employee_key(self, employee_key: str) -> User | None:
        return next((u for u in self._by_id.values() if u.employee_key == employee_key), None)

    async def list(
        self,
        *,
        condition: Condition,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[User], str | None]:
        items = [
            u
            for u in self._by_id.values()
            if condition.matches(ResourceType.USER, subject(ResourceType.USER, u).attributes)
        ]
        return _page(items, cursor, limit)

    async def create(self, user: User) -> User:
        if any(u.employee_key == user.employee_key for u in self._by_id.values()):
            raise UserAlreadyExists(f"duplicate employee key {user.employee_key}")
        self._by_id[user.id] = user
        return user

    async def update_profile(self, user: User) -> None:
        self._by_id[user.id] = user

    async def update_approval(self, user: User) -> None:
        self._by_id[user.id] = user


class FakeCodeRegistry:
    """Looks codes up in the fake repositories plus a set of reserved codes."""

    def __init__(self, surveys: FakeSurveyRepository, seeds: FakeSeedRepository) -> None:
        self._surveys = surveys
        self._seeds = seeds
        self.reserved: set[str] = set()
        self.calls: list[list[str]] = []

    async def find_existing(self, codes: Iterable[str]) -> set[str]:
        codes = list(codes)
        self.calls.append(codes)
        taken = set(self.reserved)
        for s in self._surveys.all():
            taken.add(s.code)
            taken.add(s.parent_code)
            taken.update(s.child_codes)
        taken.update(seed.code for seed in self._seeds.all())
        return taken.intersection(codes)


class FakeUnitOfWork:
    """In-memory UoW for tests."""

    def __init__(self) -> None:
        self._surveys = FakeSurveyRepository()
        self._seeds = FakeSeedRepository()
        self._users = FakeUserRepository()
        self._codes = FakeCodeRegistry(self._surveys, self._seeds)
        self.committed = False
        self.rolled_back = False

    @property
    def surveys(self) -> FakeSurveyRepository:
        return self._surveys

    @property
    def seeds(self) -> FakeSeedRepository:
        return self._seeds

    @property
    def users(self) -> FakeUserRepository:
        return self._users

    @property
    def codes(self) -> FakeCodeRegistry:
        return self._codes

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


# --- Builders ---


def make_user(
    role: str,
    *,
    employee_key: str | None = None,
    location_id: UUID | None = LOCATION_A,
    permissions: list[PermissionGrant] | None = None,
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED,
) -> User:
    user_id = uuid4()
    return User(
        id=user_id,
        employee_key=employee_key or f"EMP-{user_id.hex[:6]}",
        role=role,
        first_name="Test",
        created_at=NOW - timedelta(days=30),
        updated_at=NOW - timedelta(days=30),
        location_id=location_id,
        approval_status=approval_status,
        permissions=permissions or [],
    )


def make_actor(user: User, now: datetime = NOW) -> Actor:
    return Actor.from_user(user, TIMEZONE, now=now)


def make_survey(
    code: str,
    child_codes: tuple[str, ...],
    *,
    parent_code: str = SEED_PARENT_SENTINEL,
    owner: User | None = None,
    location_id: UUID = LOCATION_A,
    created_at: datetime = NOW - timedelta(hours=1),
) -> Survey:
    return Survey(
        id=uuid4(),
        code=code,
        parent_code=parent_code,
        child_codes=child_codes,
        created_by_user_id=owner.id if owner else uuid4(),
        owner_employee_key=owner.employee_key if owner else "EMP-OTHER",
        location_id=location_id,
        created_at=created_at,
        updated_at=created_at,
    )


def make_seed(code: str, location_id: UUID = LOCATION_A) -> Seed:
    return Seed(id=uuid4(), code=code, location_id=location_id, created_at=NOW - timedelta(days=1))


def fixed_clock() -> datetime:
    return NOW


# --- Fixtures ---


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork):
    """UoW factory that yields the same in-memory UoW for every call in a test."""

    @asynccontextmanager
    async def _factory():
        yield uow

    return _factory


class ScriptedRandom(random.Random):
    """RNG whose ``choice`` replays a fixed list of symbols."""

    def __init__(self, symbols: Iterable[str]) -> None:
        super().__init__(0)
        self._symbols = list(symbols)

    def choice(self, seq):
        symbol = self._symbols.pop(0)
        assert symbol in seq
        return symbol
