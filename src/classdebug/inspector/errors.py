# src/classdebug/inspector/errors.py
"""
Custom Exceptions for class inspection
--------------------------------------

Resolution failures are fatal for a run; member access failures only
skip the member they concern.
"""


class ClassDebugError(Exception):
    """
    Base exception for all inspection errors.
    """
    pass


class InvalidLocationError(ClassDebugError):
    """
    Raised when an external code unit path cannot be turned into
    a loadable location.
    """

    def __init__(self, location: str, reason: str = ""):
        self.location = location
        self.reason = reason
        message = f"Invalid file path: {location}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ClassNotFoundError(ClassDebugError):
    """
    Raised when a class identifier does not resolve in the chosen
    loading context.
    """

    def __init__(self, class_name: str, message: str = ""):
        self.class_name = class_name
        self.message = message or f"Class '{class_name}' not found"
        super().__init__(self.message)


class ClassLoadError(ClassNotFoundError):
    """
    Raised when the module holding a class exists but fails while
    being imported.
    """

    def __init__(self, class_name: str, module_name: str):
        self.module_name = module_name
        super().__init__(
            class_name,
            f"Class '{class_name}' could not be loaded: module '{module_name}' failed to import",
        )


class MemberAccessError(ClassDebugError):
    """
    Raised when a single field, method or constructor cannot be made
    accessible or described.
    """

    def __init__(self, member_name: str, message: str = ""):
        self.member_name = member_name
        self.message = message or f"Member '{member_name}' is not accessible"
        super().__init__(self.message)
