"""Window manager primitives the controller depends on."""

from typing import Protocol

# Extended window style bits
WS_EX_TOPMOST = 0x00000008
WS_EX_LAYERED = 0x00080000


class WindowApi(Protocol):
    """
    Operating system window and process primitives.

    Handles are plain integers. Every method raises WindowApiError (or
    AccessDeniedError) when the underlying OS call fails.
    """

    def list_windows(self) -> list[int]:
        """Return all top-level window handles in enumeration order."""
        ...

    def window_process_id(self, hwnd: int) -> int: ...

    def is_visible(self, hwnd: int) -> bool: ...

    def get_title(self, hwnd: int) -> str: ...

    def set_title(self, hwnd: int, title: str) -> None: ...

    def get_ex_style(self, hwnd: int) -> int: ...

    def set_ex_style(self, hwnd: int, style: int) -> None: ...

    def get_rect(self, hwnd: int) -> tuple[int, int, int, int]:
        """Return the outer rectangle as (left, top, right, bottom)."""
        ...

    def get_alpha(self, hwnd: int) -> int: ...

    def set_alpha(self, hwnd: int, alpha: int) -> None: ...

    def set_topmost(self, hwnd: int, enabled: bool) -> None:
        """Move to the top (or out) of the topmost band without moving or resizing."""
        ...

    def resize(self, hwnd: int, width: int, height: int) -> None:
        """Resize in place at the top of the z-order without activating."""
        ...

    def maximize(self, hwnd: int) -> None: ...

    def minimize(self, hwnd: int) -> None: ...

    def restore(self, hwnd: int) -> None: ...

    def is_minimized(self, hwnd: int) -> bool: ...

    def set_foreground(self, hwnd: int) -> None: ...

    def set_focus(self, hwnd: int) -> None: ...

    def terminate_process(self, process_id: int, exit_code: int = 0) -> None:
        """Open the process with terminate-only rights and terminate it."""
        ...
