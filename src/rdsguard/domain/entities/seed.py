"""Seed entity - root of a referral tree."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from rdsguard.domain.value_objects import ResourceType


@dataclass(frozen=True)
class Seed:
    """Root entry code handed out at a location. Never changes once created."""

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.SEED

    id: UUID
    code: str
    location_id: UUID
    created_at: datetime
    is_fallback: bool = False
