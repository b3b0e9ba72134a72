"""PostgreSQL adapters."""

from rdsguard.infrastructure.persistence.postgres.connection import create_pool
from rdsguard.infrastructure.persistence.postgres.filters import compile_condition
from rdsguard.infrastructure.persistence.postgres.unit_of_work import (
    PostgresUnitOfWork,
    create_uow_factory,
)

__all__ = [
    "PostgresUnitOfWork",
    "compile_condition",
    "create_pool",
    "create_uow_factory",
]
