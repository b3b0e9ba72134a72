"""API middleware."""

from rdsguard.interfaces.api.middleware.auth import AuthMiddleware
from rdsguard.interfaces.api.middleware.cors import CORSMiddleware
from rdsguard.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

__all__ = ["AuthMiddleware", "CORSMiddleware", "PoolLifespanMiddleware"]
