"""Capability engine - role templates, custom grants and deny rules."""

from rdsguard.domain.authorization.builder import (
    ROLE_TEMPLATES,
    ActorContext,
    build_capabilities,
    today_window,
)
from rdsguard.domain.authorization.capability_set import CapabilitySet
from rdsguard.domain.authorization.rule import CapabilityRule
from rdsguard.domain.authorization.subject import Subject, subject

__all__ = [
    "ROLE_TEMPLATES",
    "ActorContext",
    "CapabilityRule",
    "CapabilitySet",
    "Subject",
    "build_capabilities",
    "subject",
    "today_window",
]
