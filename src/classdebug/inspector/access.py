# src/classdebug/inspector/access.py
"""Privileged access to the members stored in a class namespace."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict

from classdebug.inspector.errors import MemberAccessError

logger = logging.getLogger(__name__)

# Stands in for the value of a field that is only declared by annotation.
NO_VALUE = object()


def declared_annotations(owner: type) -> Dict[str, Any]:
    """Annotations declared by ``owner`` itself, evaluated where possible."""
    try:
        return inspect.get_annotations(owner, eval_str=True)
    except Exception as e:
        logger.debug(f"Keeping unevaluated annotations of {owner.__qualname__}: {e}")
    try:
        return inspect.get_annotations(owner)
    except NameError as e:
        logger.warning(f"Annotations of {owner.__qualname__} cannot be read: {e}")
        return {}


@dataclass(frozen=True)
class AccessibleMember:
    """
    A namespace entry read without running descriptors or ``__getattr__`` hooks.

    Attributes
    ----------
    name : str
        Name as stored in the class namespace (private names stay mangled).
    raw : Any
        The stored object, e.g. a ``staticmethod`` or ``property``.
    target : Any
        ``raw`` with ``staticmethod``/``classmethod`` and ``functools.wraps``
        layers removed.
    """

    name: str
    raw: Any
    target: Any

    @property
    def has_value(self) -> bool:
        return self.raw is not NO_VALUE


def force_accessible(owner: type, name: str) -> AccessibleMember:
    """
    Read a member of ``owner`` regardless of its visibility.

    Raises:
        MemberAccessError: If the member cannot be read or unwrapped.
    """
    # Reading the namespace mapping directly bypasses descriptors on both
    # the class and its metaclass.
    namespace = vars(owner)
    if name in namespace:
        try:
            raw = namespace[name]
        except KeyError as e:
            raise MemberAccessError(name, f"Member '{name}' vanished from {owner.__qualname__}") from e
    elif name in declared_annotations(owner):
        return AccessibleMember(name=name, raw=NO_VALUE, target=NO_VALUE)
    else:
        raise MemberAccessError(name, f"'{name}' is not declared by {owner.__qualname__}")

    target = raw
    if isinstance(target, (staticmethod, classmethod)):
        target = target.__func__
    if callable(target):
        try:
            target = inspect.unwrap(target)
        except ValueError as e:
            raise MemberAccessError(name, f"Cannot unwrap '{name}': {e}") from e

    return AccessibleMember(name=name, raw=raw, target=target)
