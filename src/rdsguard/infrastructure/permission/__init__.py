"""Actor loading."""

from rdsguard.infrastructure.permission.actor_loader import ActorLoader

__all__ = ["ActorLoader"]
