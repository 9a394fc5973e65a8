# src/classdebug/inspector/resolver.py
"""
Class resolution
----------------

Turns a dotted class identifier into a class object, either from the
modules importable in the running interpreter or from an external code
unit (a Python file, a directory or a zip archive). An external unit is a
scoped resource: it is attached to the import system on entry and fully
detached again on exit.
"""

import builtins
import importlib
import importlib.util
import inspect
import logging
import sys
import zipfile
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterator, List, Optional

from classdebug.inspector.errors import (
    ClassLoadError,
    ClassNotFoundError,
    InvalidLocationError,
)

logger = logging.getLogger(__name__)


def class_identifier(cls: type) -> str:
    """Dotted identifier the runtime reports for a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class ClassResolver:
    """
    Resolves classes in the default loading context.

    The longest importable module prefix of the identifier wins; the rest
    of the identifier is walked attribute by attribute. Bare names are
    looked up in ``builtins``.
    """

    def resolve(self, class_name: str) -> type:
        parts = self._split(class_name)

        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            module = self._import(module_name, class_name)
            if module is None:
                continue
            logger.debug(f"Resolving '{class_name}' inside module '{module_name}'")
            return self._walk(module, parts[split:], class_name)

        return self._walk(builtins, parts, class_name)

    # ----------------------------------------------------------------------

    @staticmethod
    def _split(class_name: str) -> List[str]:
        parts = class_name.split(".")
        if not all(part.isidentifier() for part in parts):
            raise ClassNotFoundError(class_name, f"Class '{class_name}' not found: malformed identifier")
        return parts

    @staticmethod
    def _import(module_name: str, class_name: str) -> Optional[ModuleType]:
        """Import a module, returning None when it simply does not exist."""
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            missing = e.name or ""
            if module_name == missing or module_name.startswith(missing + "."):
                return None
            raise ClassLoadError(class_name, module_name) from e
        except Exception as e:
            raise ClassLoadError(class_name, module_name) from e

    @staticmethod
    def _walk(root: object, parts: List[str], class_name: str) -> type:
        obj = root
        for attr in parts:
            try:
                obj = getattr(obj, attr)
            except AttributeError as e:
                raise ClassNotFoundError(class_name) from e
        if not inspect.isclass(obj):
            raise ClassNotFoundError(class_name, f"Class '{class_name}' not found: '{parts[-1]}' is not a class")
        return obj


class ExternalUnitResolver(ClassResolver):
    """
    Resolves classes from an external code unit, falling back to the
    default context for anything the unit does not provide.

    Use as a context manager; the unit is only attached inside the block:

        with ExternalUnitResolver("plugins/shapes.py") as resolver:
            cls = resolver.resolve("shapes.Circle")
    """

    ZIP_SUFFIXES = {".zip", ".whl", ".egg"}

    def __init__(self, location: str):
        self.location = self._validate(location)
        self.module: Optional[ModuleType] = None
        self._search_path: Optional[str] = None
        self._added_to_path = False
        self._modules_before: set = set()
        self._shadowed: Dict[str, ModuleType] = {}

    def __enter__(self) -> "ExternalUnitResolver":
        self._modules_before = set(sys.modules)
        if self.location.is_file() and not zipfile.is_zipfile(self.location):
            self._search_path = str(self.location.parent)
        else:
            self._search_path = str(self.location)
        # Appended so that names the default context already knows win.
        self._added_to_path = self._search_path not in sys.path
        if self._added_to_path:
            sys.path.append(self._search_path)
        importlib.invalidate_caches()
        logger.debug(f"Attached external unit {self.location}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    # ----------------------------------------------------------------------

    @classmethod
    def _validate(cls, location: str) -> Path:
        try:
            path = Path(location).expanduser().resolve()
            exists = path.exists()
        except (OSError, ValueError) as e:
            raise InvalidLocationError(location, str(e)) from e

        if not exists:
            raise InvalidLocationError(location, "no such file or directory")
        if path.is_dir():
            return path
        if path.suffix == ".py" or path.suffix in cls.ZIP_SUFFIXES or zipfile.is_zipfile(path):
            return path
        raise InvalidLocationError(location, "not a Python source file, directory or zip archive")

    def _is_source_file(self) -> bool:
        return self.location.suffix == ".py" and not zipfile.is_zipfile(self.location)

    def _load_source_module(self, class_name: str) -> ModuleType:
        if self.module is not None:
            return self.module

        module_name = self.location.stem
        spec = importlib.util.spec_from_file_location(module_name, self.location)
        if spec is None or spec.loader is None:
            raise InvalidLocationError(str(self.location), "cannot build a module spec")

        module = importlib.util.module_from_spec(spec)
        if module_name in sys.modules:
            self._shadowed[module_name] = sys.modules[module_name]
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise ClassLoadError(class_name, module_name) from e

        self.module = module
        return module

    def resolve(self, class_name: str) -> type:
        if self._search_path is None:
            raise RuntimeError("ExternalUnitResolver must be entered before resolving classes")

        if self._is_source_file():
            parts = self._split(class_name)
            module = self._load_source_module(class_name)
            if len(parts) > 1 and parts[0] == module.__name__:
                return self._walk(module, parts[1:], class_name)
            try:
                return self._walk(module, parts, class_name)
            except ClassNotFoundError:
                logger.debug(f"'{class_name}' not in {self.location.name}, using the default context")

        return super().resolve(class_name)

    def _loaded_from_unit(self, module: ModuleType) -> bool:
        root = Path(self._search_path)
        locations = list(getattr(module, "__path__", None) or [])
        origin = getattr(module, "__file__", None)
        if origin:
            locations.append(origin)
        return any(Path(location).is_relative_to(root) for location in locations)

    def release(self) -> None:
        """Detach the unit from the import system and forget its modules."""
        if self._search_path is None:
            return

        if self._added_to_path and self._search_path in sys.path:
            sys.path.remove(self._search_path)
            sys.path_importer_cache.pop(self._search_path, None)

        for name in set(sys.modules) - self._modules_before:
            if self._loaded_from_unit(sys.modules[name]):
                del sys.modules[name]
        if self.module is not None and sys.modules.get(self.module.__name__) is self.module:
            del sys.modules[self.module.__name__]
        sys.modules.update(self._shadowed)

        importlib.invalidate_caches()
        logger.debug(f"Released external unit {self.location}")
        self._search_path = None
        self._shadowed = {}


@contextmanager
def loading_context(external_path: Optional[str] = None) -> Iterator[ClassResolver]:
    """
    Yield the resolver for a run.

    An empty or missing path selects the default context; anything else is
    attached as an external unit for the duration of the block.
    """
    if not external_path:
        yield ClassResolver()
        return

    with ExternalUnitResolver(external_path) as resolver:
        yield resolver


def resolve(class_name: str, external_path: Optional[str] = None) -> type:
    """
    Resolve a class by dotted name.

    Args:
        class_name (str): Fully-qualified class identifier.
        external_path (str, optional): External code unit to load it from.

    Returns:
        type: The resolved class.

    Raises:
        InvalidLocationError: If ``external_path`` is not a loadable location.
        ClassNotFoundError: If the class does not resolve.
    """
    with loading_context(external_path) as resolver:
        return resolver.resolve(class_name)
