"""Exceptions raised between the OS layer and the controller."""

ERROR_ACCESS_DENIED = 5


class ProcwinError(Exception):
    """Base class for procwin errors."""


class WindowApiError(ProcwinError):
    """An operating system call failed."""

    def __init__(self, operation: str, code: int = 0, message: str = "") -> None:
        self.operation = operation
        self.code = code
        self.message = message
        super().__init__(f"{operation} failed ({code}): {message}" if message else f"{operation} failed ({code})")


class AccessDeniedError(WindowApiError):
    """The OS refused the requested access rights."""


class InvalidCommandError(ProcwinError, ValueError):
    """A command label did not decode to a known window command."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Invalid command: {label!r}")
