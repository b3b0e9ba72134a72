"""Resource kinds covered by authorization rules."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Resources that capability rules apply to."""

    USER = "User"
    SURVEY = "Survey"
    SEED = "Seed"
