"""Data models for procwin."""

from dataclasses import dataclass
from enum import Enum

from procwin.errors import InvalidCommandError

OPAQUE = 255


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable snapshot of a target process and its window."""

    process_id: int = 0  # 0 = unresolved
    process_name: str = ""
    window_title: str = ""
    is_topmost: bool = False
    width: int = 0  # Pixels
    height: int = 0  # Pixels
    opacity: int = OPAQUE  # 0 - 255

    @property
    def is_resolved(self) -> bool:
        """Whether the record points at a process."""
        return self.process_id != 0

    @property
    def topmost_label(self) -> str:
        return "Yes" if self.is_topmost else "No"

    @property
    def display_name(self) -> str:
        """Header text for the target, e.g. 'notepad.exe (ID: 1234)'."""
        return f"{self.process_name} (ID: {self.process_id})"


class WindowCommand(Enum):
    """Lifecycle commands that can be executed against a target window."""

    KILL = "KILL"
    MAXIMIZE = "MAXIMIZE"
    MINIMIZE = "MINIMIZE"
    FOCUS = "FOCUS"

    @classmethod
    def parse(cls, label: str) -> "WindowCommand":
        """
        Decode a command label, ignoring case and surrounding whitespace.

        Raises:
            InvalidCommandError: If the label names no command.
        """
        try:
            return cls(label.strip().upper())
        except ValueError:
            raise InvalidCommandError(label) from None
