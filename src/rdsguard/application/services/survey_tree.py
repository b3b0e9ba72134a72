"""Survey tree resolver - places a new survey under its parent."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from rdsguard.application.ports.repositories import SeedRepository, SurveyRepository
from rdsguard.application.services.code_generator import CodeGenerator
from rdsguard.domain.exceptions import (
    ParentNotFound,
    ReferralChronologyViolation,
    ReferralCodeAlreadyUsed,
)
from rdsguard.domain.value_objects import SEED_PARENT_SENTINEL


def utc_now() -> datetime:
    return datetime.now(UTC)


class ParentKind(StrEnum):
    """Where a submitted code led."""

    SURVEY = "survey"
    SEED = "seed"
    ROOT = "root"


@dataclass(frozen=True)
class ParentResolution:
    kind: ParentKind
    parent_code: str


@dataclass(frozen=True)
class SurveyPlacement:
    """Everything the new survey needs to link into the tree."""

    code: str
    parent_code: str
    child_codes: tuple[str, ...]
    kind: ParentKind


class SurveyTreeResolver:
    """Resolves submitted codes to parents and mints child codes.

    Resolution order for a code: already used as a survey's own code, a live
    survey's child slot, a seed. The first hit wins.
    """

    def __init__(
        self,
        surveys: SurveyRepository,
        seeds: SeedRepository,
        code_generator: CodeGenerator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._surveys = surveys
        self._seeds = seeds
        self._codes = code_generator
        self._clock = clock

    async def resolve_parent(self, submitted_code: str | None) -> ParentResolution:
        """Find the parent the submitted code points at.

        A missing code means a root creation; callers check the
        ``createWithoutReferral`` capability before getting here.
        """
        if not submitted_code:
            return ParentResolution(ParentKind.ROOT, SEED_PARENT_SENTINEL)

        if await self._surveys.get_by_code(submitted_code) is not None:
            raise ReferralCodeAlreadyUsed(
                f"A survey has already been submitted with code {submitted_code}"
            )

        parent = await self._surveys.find_parent_by_child_code(submitted_code)
        if parent is not None:
            if parent.created_at >= self._clock():
                raise ReferralChronologyViolation(
                    "Parent survey must be created before its child"
                )
            return ParentResolution(ParentKind.SURVEY, parent.code)

        if await self._seeds.get_by_code(submitted_code) is not None:
            return ParentResolution(ParentKind.SEED, SEED_PARENT_SENTINEL)

        raise ParentNotFound(submitted_code)

    async def place(self, submitted_code: str | None) -> SurveyPlacement:
        """Resolve the parent, fix the own code and mint three child codes."""
        resolution = await self.resolve_parent(submitted_code)
        if resolution.kind is ParentKind.ROOT:
            code = await self._codes.generate_unique_code()
        else:
            code = submitted_code
        child_codes = await self._codes.generate_child_code_batch(exclude=[code])
        return SurveyPlacement(
            code=code,
            parent_code=resolution.parent_code,
            child_codes=tuple(child_codes),
            kind=resolution.kind,
        )
