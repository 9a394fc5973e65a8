# src/classdebug/config/debug_config.py

import argparse
import logging
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CLASS_NAME = "builtins.str"


class DebugTarget(Enum):
    """Member category reported by a run."""
    FIELDS = "FIELDS"
    METHODS = "METHODS"
    CONSTRUCTORS = "CONSTRUCTORS"

    def __str__(self) -> str:
        return self.value


# -------------------
# Pydantic Config
# -------------------
class DebugConfig(BaseModel):
    """Options for a single inspection run. Immutable once parsed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file: str = ""
    target: DebugTarget = DebugTarget.FIELDS
    class_name: str = Field(default=DEFAULT_CLASS_NAME, alias="class")  # 'class' is a reserved word
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v):
        """Class identifiers are dotted names; surrounding whitespace is dropped."""
        v = v.strip()
        if not v:
            raise ValueError("Class name must be a non-empty string")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        return v.strip().upper() or "INFO"

    @property
    def external_unit(self) -> Optional[str]:
        """Path of the external code unit, or None when classes come from the default context."""
        return self.file or None


# -------------------
# Functions
# -------------------
def build_parser() -> argparse.ArgumentParser:
    """
    Build the option parser.

    Returns:
        argparse.ArgumentParser: Parser for the inspector options.
    """
    parser = argparse.ArgumentParser(
        prog="classdebug",
        description="Print the declared fields, methods or constructors of a class",
    )
    parser.add_argument("--file", default="", help="Python file, directory or zip archive to load the class from")
    parser.add_argument(
        "--target",
        choices=[t.value for t in DebugTarget],
        default=DebugTarget.FIELDS.value,
        help="Member category to report",
    )
    parser.add_argument(
        "--class", dest="class_name", default=DEFAULT_CLASS_NAME,
        help="Fully-qualified class name, e.g. collections.OrderedDict",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument("--log-file", default=None, help="Optional file that receives a copy of the log")
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> DebugConfig:
    """
    Parse command-line arguments into a DebugConfig.

    Unrecognised options are ignored rather than rejected.

    Args:
        argv (Sequence[str], optional): Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        DebugConfig: Validated, frozen configuration.
    """
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        logger.debug(f"Ignoring unrecognised arguments: {unknown}")

    try:
        return DebugConfig(
            file=args.file,
            target=DebugTarget(args.target),
            class_name=args.class_name,
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except ValidationError as e:
        messages: List[str] = [err["msg"] for err in e.errors()]
        parser.error("; ".join(messages))
