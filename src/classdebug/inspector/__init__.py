"""Class resolution, member enumeration and the report runner."""

from .errors import (
    ClassDebugError,
    ClassLoadError,
    ClassNotFoundError,
    InvalidLocationError,
    MemberAccessError,
)
from .resolver import ClassResolver, ExternalUnitResolver, class_identifier, loading_context, resolve
from .members import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    iter_members,
)
from .inspector import Inspector

__all__ = [
    "ClassDebugError",
    "ClassLoadError",
    "ClassNotFoundError",
    "InvalidLocationError",
    "MemberAccessError",
    "ClassResolver",
    "ExternalUnitResolver",
    "class_identifier",
    "loading_context",
    "resolve",
    "ConstructorDescriptor",
    "FieldDescriptor",
    "MethodDescriptor",
    "iter_members",
    "Inspector",
]
