"""pywin32 implementation of the window manager primitives."""

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import pywintypes
import win32api
import win32con
import win32gui
import win32process

from procwin.errors import ERROR_ACCESS_DENIED, AccessDeniedError, WindowApiError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _translate_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Convert pywintypes.error raised by func into WindowApiError."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except pywintypes.error as exc:
            code = exc.winerror or 0
            error_cls = AccessDeniedError if code == ERROR_ACCESS_DENIED else WindowApiError
            raise error_cls(exc.funcname or func.__name__, code, exc.strerror or "") from exc

    return wrapper


class Win32WindowApi:
    """Window and process control through user32/kernel32 via pywin32."""

    @_translate_errors
    def list_windows(self) -> list[int]:
        handles: list[int] = []

        def collect(hwnd: int, _extra: object) -> bool:
            handles.append(hwnd)
            return True

        win32gui.EnumWindows(collect, None)
        return handles

    @_translate_errors
    def window_process_id(self, hwnd: int) -> int:
        _thread_id, process_id = win32process.GetWindowThreadProcessId(hwnd)
        return process_id

    @_translate_errors
    def is_visible(self, hwnd: int) -> bool:
        return bool(win32gui.IsWindowVisible(hwnd))

    @_translate_errors
    def get_title(self, hwnd: int) -> str:
        return win32gui.GetWindowText(hwnd)

    @_translate_errors
    def set_title(self, hwnd: int, title: str) -> None:
        win32gui.SetWindowText(hwnd, title)

    @_translate_errors
    def get_ex_style(self, hwnd: int) -> int:
        return win32gui.GetWindowLong(hwnd, win32con.GWL_EXSTYLE)

    @_translate_errors
    def set_ex_style(self, hwnd: int, style: int) -> None:
        win32gui.SetWindowLong(hwnd, win32con.GWL_EXSTYLE, style)

    @_translate_errors
    def get_rect(self, hwnd: int) -> tuple[int, int, int, int]:
        return win32gui.GetWindowRect(hwnd)

    @_translate_errors
    def get_alpha(self, hwnd: int) -> int:
        _color_key, alpha, _flags = win32gui.GetLayeredWindowAttributes(hwnd)
        return alpha

    @_translate_errors
    def set_alpha(self, hwnd: int, alpha: int) -> None:
        win32gui.SetLayeredWindowAttributes(hwnd, 0, alpha, win32con.LWA_ALPHA)

    @_translate_errors
    def set_topmost(self, hwnd: int, enabled: bool) -> None:
        insert_after = win32con.HWND_TOPMOST if enabled else win32con.HWND_NOTOPMOST
        win32gui.SetWindowPos(hwnd, insert_after, 0, 0, 0, 0, win32con.SWP_NOMOVE | win32con.SWP_NOSIZE)

    @_translate_errors
    def resize(self, hwnd: int, width: int, height: int) -> None:
        win32gui.SetWindowPos(
            hwnd,
            win32con.HWND_TOP,
            0,
            0,
            width,
            height,
            win32con.SWP_NOMOVE | win32con.SWP_NOACTIVATE,
        )

    @_translate_errors
    def maximize(self, hwnd: int) -> None:
        win32gui.ShowWindow(hwnd, win32con.SW_MAXIMIZE)

    @_translate_errors
    def minimize(self, hwnd: int) -> None:
        win32gui.ShowWindow(hwnd, win32con.SW_MINIMIZE)

    @_translate_errors
    def restore(self, hwnd: int) -> None:
        win32gui.ShowWindow(hwnd, win32con.SW_RESTORE)

    @_translate_errors
    def is_minimized(self, hwnd: int) -> bool:
        return bool(win32gui.IsIconic(hwnd))

    @_translate_errors
    def set_foreground(self, hwnd: int) -> None:
        win32gui.SetForegroundWindow(hwnd)

    @_translate_errors
    def set_focus(self, hwnd: int) -> None:
        win32gui.SetFocus(hwnd)

    @_translate_errors
    def terminate_process(self, process_id: int, exit_code: int = 0) -> None:
        handle = win32api.OpenProcess(win32con.PROCESS_TERMINATE, False, process_id)
        try:
            win32api.TerminateProcess(handle, exit_code)
        finally:
            win32api.CloseHandle(handle)
        logger.debug("Terminated process %d with exit code %d", process_id, exit_code)
