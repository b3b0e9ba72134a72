"""Subjects - a resource instance as seen by the capability engine."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from typing import Any

from rdsguard.domain.value_objects import ResourceType


@dataclass(frozen=True)
class Subject:
    """Typed attribute view of one resource instance."""

    resource_type: ResourceType
    attributes: Mapping[str, Any]


def subject(resource_type: ResourceType, instance: Mapping[str, Any] | object) -> Subject:
    """Wrap a mapping or an entity dataclass as a ``Subject``."""
    if isinstance(instance, Mapping):
        return Subject(resource_type, dict(instance))
    if is_dataclass(instance) and not isinstance(instance, type):
        return Subject(
            resource_type,
            {f.name: getattr(instance, f.name) for f in fields(instance)},
        )
    raise TypeError(f"Cannot build a {resource_type} subject from {type(instance).__name__}")


def as_subject(target: object) -> Subject | ResourceType:
    """Normalise a check target: a subject, a bare resource type, or an entity."""
    if isinstance(target, (Subject, ResourceType)):
        return target
    resource_type = getattr(type(target), "RESOURCE_TYPE", None)
    if not isinstance(resource_type, ResourceType):
        raise TypeError(f"{type(target).__name__} is not an authorizable resource")
    return subject(resource_type, target)
