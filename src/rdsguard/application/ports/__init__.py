"""Application ports - interfaces for external adapters."""

from rdsguard.application.ports.code_registry import CodeRegistry
from rdsguard.application.ports.identity_provider import IdentityProvider
from rdsguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "CodeRegistry",
    "IdentityProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
