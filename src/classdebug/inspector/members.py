# src/classdebug/inspector/members.py
"""
Member enumeration and formatting
---------------------------------

Walks the namespace of a single class and describes its declared fields,
methods or constructors in declaration order, private and protected ones
included. Descriptors are produced lazily; a member that cannot be read
is reported through ``on_error`` and skipped.
"""

import ast
import functools
import inspect
import logging
import textwrap
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from classdebug.config.debug_config import DebugTarget
from classdebug.inspector.access import (
    NO_VALUE,
    AccessibleMember,
    declared_annotations,
    force_accessible,
)
from classdebug.inspector.errors import MemberAccessError
from classdebug.inspector.resolver import class_identifier

logger = logging.getLogger(__name__)

MODIFIER_WIDTH = 30
TYPE_WIDTH = 40
TYPE_MAX_WIDTH = 100

CONSTRUCTOR_NAMES = ("__new__", "__init__")

# Parameter line for callables whose signature the runtime does not expose.
UNKNOWN_PARAMETERS = "..."

SECTION_TITLES: Dict[DebugTarget, str] = {
    DebugTarget.FIELDS: "Fields",
    DebugTarget.METHODS: "Methods",
    DebugTarget.CONSTRUCTORS: "Constructors",
}

_EMPTY = inspect.Parameter.empty
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


# ----------------------------------------------------------------------
# Descriptors
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    modifiers: Tuple[str, ...]
    type_name: str

    def lines(self) -> List[str]:
        modifiers = " ".join(self.modifiers)
        return [
            f"{modifiers:<{MODIFIER_WIDTH}.{MODIFIER_WIDTH}} "
            f"{self.type_name:<{TYPE_WIDTH}.{TYPE_MAX_WIDTH}} "
            f"{self.name}"
        ]


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    modifiers: Tuple[str, ...]
    parameter_types: Tuple[str, ...]

    def lines(self) -> List[str]:
        return [f"Name: {self.name}", "- Parameters"] + [f"  {t}" for t in self.parameter_types]


@dataclass(frozen=True)
class ConstructorDescriptor(MethodDescriptor):
    """Same shape as a method; ``name`` is the identifier of the owning class."""


MemberDescriptor = Union[FieldDescriptor, MethodDescriptor, ConstructorDescriptor]


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_routine(value: Any) -> bool:
    """True for functions, static/class methods and builtin method descriptors."""
    if isinstance(value, (staticmethod, classmethod)):
        return True
    return inspect.isroutine(value) and callable(value)


def visibility(owner: type, name: str) -> str:
    if name.startswith(f"_{owner.__name__.lstrip('_')}__"):
        return "private"
    if name.startswith("_") and not is_dunder(name):
        return "protected"
    return "public"


def type_name(tp: Any) -> str:
    """Readable name of an annotation or class."""
    if tp is _EMPTY or tp is NO_VALUE:
        return "object"
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, str):
        return tp
    if isinstance(tp, type) and typing.get_origin(tp) is None and not isinstance(tp, types.GenericAlias):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return class_identifier(tp)
    return repr(tp)


def _unwrap_qualifiers(annotation: Any) -> Tuple[Any, Tuple[str, ...]]:
    """Strip ClassVar/Final wrappers, returning the inner type and the matching modifiers."""
    qualifiers: List[str] = []
    while True:
        origin = typing.get_origin(annotation)
        if annotation is typing.ClassVar or origin is typing.ClassVar:
            qualifiers.append("static")
        elif annotation is typing.Final or origin is typing.Final:
            qualifiers.append("final")
        else:
            return annotation, tuple(qualifiers)
        args = typing.get_args(annotation)
        annotation = args[0] if args else _EMPTY


def _is_property(raw: Any) -> bool:
    return isinstance(raw, (property, functools.cached_property)) or inspect.isgetsetdescriptor(raw)


def _property_type(raw: Any) -> Any:
    getter = raw.fget if isinstance(raw, property) else getattr(raw, "func", None)
    if getter is None:
        return _EMPTY
    try:
        return inspect.signature(getter, eval_str=True).return_annotation
    except Exception:
        return _EMPTY


def _signature(target: Any, name: str) -> Optional[inspect.Signature]:
    try:
        signature = inspect.signature(target)
    except (ValueError, TypeError) as e:
        logger.debug(f"No signature available for '{name}': {e}")
        return None
    try:
        return inspect.signature(target, eval_str=True)
    except Exception:
        # Annotations that do not evaluate are reported as written.
        return signature


def _parameter_type(param: inspect.Parameter) -> str:
    name = type_name(param.annotation)
    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{name}"
    if param.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{name}"
    return name


def _already_bound(target: Any) -> bool:
    # Builtin constructors such as str.__new__ come bound to their type.
    return inspect.isbuiltin(target) and inspect.isclass(getattr(target, "__self__", None))


# ----------------------------------------------------------------------
# Declared member names
# ----------------------------------------------------------------------
def _mangle(owner: type, name: str) -> str:
    stripped = owner.__name__.lstrip("_")
    if stripped and name.startswith("__") and not name.endswith("__"):
        return f"_{stripped}{name}"
    return name


def _target_names(target: ast.expr) -> Iterator[str]:
    if isinstance(target, ast.Name):
        yield target.id
    elif isinstance(target, (ast.Tuple, ast.List)):
        for element in target.elts:
            yield from _target_names(element)


def _declared_names(body: List[ast.stmt]) -> Iterator[str]:
    for node in body:
        if isinstance(node, ast.Assign):
            for target in node.targets:
                yield from _target_names(target)
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            yield from _target_names(node.target)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            # Properties are declared as functions.
            yield node.name
        else:
            # Conditional and guarded declarations still belong to the class body.
            for block in ("body", "orelse", "finalbody"):
                yield from _declared_names(getattr(node, block, []))
            for handler in getattr(node, "handlers", []):
                yield from _declared_names(handler.body)


def source_field_order(owner: type) -> Optional[List[str]]:
    """
    Names declared in the body of ``owner`` as they appear in its source.

    Returns None when the class has no retrievable source (builtins,
    extension types, classes built at runtime).
    """
    try:
        source = textwrap.dedent(inspect.getsource(owner))
        tree = ast.parse(source)
    except (OSError, TypeError, SyntaxError) as e:
        logger.debug(f"No source order for {owner.__qualname__}: {e}")
        return None

    class_def = next((n for n in tree.body if isinstance(n, ast.ClassDef)), None)
    if class_def is None:
        return None

    order: List[str] = []
    for name in _declared_names(class_def.body):
        name = _mangle(owner, name)
        if name not in order:
            order.append(name)
    return order


def field_names(owner: type, annotations: Optional[Dict[str, Any]] = None) -> List[str]:
    """
    Declared field names in declaration order.

    The class source decides the order when it can be read. Otherwise the
    namespace order is used, with fields that only exist as annotations
    placed before the next annotated name that has a value.
    """
    if annotations is None:
        annotations = declared_annotations(owner)
    namespace = vars(owner)
    annotated = [n for n in annotations if not is_dunder(n)]

    ordered: List[str] = []
    consumed = 0
    for name, value in namespace.items():
        if is_dunder(name) or is_routine(value) or inspect.isclass(value):
            continue
        if name in annotations:
            position = annotated.index(name)
            ordered.extend(n for n in annotated[consumed:position] if n not in namespace)
            consumed = max(consumed, position + 1)
        ordered.append(name)
    ordered.extend(n for n in annotated[consumed:] if n not in namespace)

    source_order = source_field_order(owner)
    if source_order:
        # Names the source never assigns (slots, setattr after creation) go last.
        position = {name: index for index, name in enumerate(source_order)}
        ordered.sort(key=lambda name: position.get(name, len(position)))
    return ordered


def method_names(owner: type) -> List[str]:
    return [
        name for name, value in vars(owner).items()
        if is_routine(value) and name not in CONSTRUCTOR_NAMES
    ]


def constructor_names(owner: type) -> List[str]:
    return [name for name, value in vars(owner).items() if name in CONSTRUCTOR_NAMES and is_routine(value)]


# ----------------------------------------------------------------------
# Describing members
# ----------------------------------------------------------------------
def describe_field(owner: type, member: AccessibleMember, annotations: Dict[str, Any]) -> FieldDescriptor:
    raw = member.raw
    annotation, qualifiers = _unwrap_qualifiers(annotations.get(member.name, _EMPTY))
    is_property = _is_property(raw)

    modifiers = [visibility(owner, member.name)]
    class_level = member.name not in annotations and not is_property and not inspect.ismemberdescriptor(raw)
    if class_level or "static" in qualifiers:
        modifiers.append("static")
    if "final" in qualifiers:
        modifiers.append("final")
    if is_property:
        modifiers.append("property")

    if annotation is _EMPTY:
        if is_property:
            annotation = _property_type(raw)
        elif member.has_value and not inspect.ismemberdescriptor(raw):
            annotation = type(raw)

    return FieldDescriptor(name=member.name, modifiers=tuple(modifiers), type_name=type_name(annotation))


def _describe_callable(owner: type, member: AccessibleMember, constructor: bool) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    raw = member.raw
    modifiers = [visibility(owner, member.name)]
    if isinstance(raw, staticmethod) and not constructor:
        modifiers.append("static")
    if isinstance(raw, classmethod) or type(raw).__name__ == "classmethod_descriptor":
        modifiers.append("classmethod")

    # __new__ is stored as a staticmethod but still receives the class first.
    takes_implicit = constructor or not isinstance(raw, staticmethod)
    signature = _signature(member.target, member.name)
    if signature is None:
        return tuple(modifiers), (UNKNOWN_PARAMETERS,)

    parameters = list(signature.parameters.values())
    if takes_implicit and not _already_bound(member.target) and parameters and parameters[0].kind in _POSITIONAL:
        parameters = parameters[1:]

    return tuple(modifiers), tuple(_parameter_type(p) for p in parameters)


def describe_method(owner: type, member: AccessibleMember) -> MethodDescriptor:
    modifiers, parameter_types = _describe_callable(owner, member, constructor=False)
    return MethodDescriptor(name=member.name, modifiers=modifiers, parameter_types=parameter_types)


def describe_constructor(owner: type, member: AccessibleMember) -> ConstructorDescriptor:
    modifiers, parameter_types = _describe_callable(owner, member, constructor=True)
    return ConstructorDescriptor(name=type_name(owner), modifiers=modifiers, parameter_types=parameter_types)


# ----------------------------------------------------------------------
# Enumeration
# ----------------------------------------------------------------------
ErrorHandler = Callable[[str, MemberAccessError], None]


def _log_member_error(name: str, error: MemberAccessError) -> None:
    logger.error(f"Skipping member '{name}': {error}")


def iter_members(
    owner: type,
    target: DebugTarget,
    on_error: Optional[ErrorHandler] = None,
) -> Iterator[MemberDescriptor]:
    """
    Lazily describe the declared members of ``owner`` in one category.

    Args:
        owner (type): Class to inspect.
        target (DebugTarget): Category to enumerate.
        on_error (callable, optional): Called with the member name and the
            MemberAccessError of every member that is skipped.

    Yields:
        MemberDescriptor: One descriptor per accessible member, in declaration order.
    """
    on_error = on_error or _log_member_error

    if target is DebugTarget.FIELDS:
        annotations = declared_annotations(owner)
        names = field_names(owner, annotations)
        describe = functools.partial(describe_field, annotations=annotations)
    elif target is DebugTarget.METHODS:
        names = method_names(owner)
        describe = describe_method
    elif target is DebugTarget.CONSTRUCTORS:
        names = constructor_names(owner)
        describe = describe_constructor
    else:
        raise ValueError(f"Unknown debug target: {target!r}")

    for name in names:
        try:
            member = force_accessible(owner, name)
            descriptor = describe(owner, member)
        except MemberAccessError as e:
            on_error(name, e)
            continue
        except Exception as e:
            error = MemberAccessError(name, f"Cannot describe '{name}': {e}")
            error.__cause__ = e
            on_error(name, error)
            continue
        yield descriptor


def header_lines(target: DebugTarget, class_name: str) -> List[str]:
    return [
        f"--- Debugging {target} in class '{class_name}' ---",
        f"-- {SECTION_TITLES[target]}",
    ]
