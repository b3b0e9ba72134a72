"""Seed use cases."""

from rdsguard.application.use_cases.seed.create_seed import CreateSeedUseCase
from rdsguard.application.use_cases.seed.list_seeds import ListSeedsUseCase

__all__ = ["CreateSeedUseCase", "ListSeedsUseCase"]
