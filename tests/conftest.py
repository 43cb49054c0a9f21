"""Shared fixtures: an in-memory window manager and process table."""

from dataclasses import dataclass, field

import psutil
import pytest

from procwin.controller import ProcessController
from procwin.errors import AccessDeniedError, WindowApiError
from procwin.sinks import ListSink
from procwin.winapi import WS_EX_LAYERED, WS_EX_TOPMOST


@dataclass
class FakeWindow:
    """A top-level window owned by a fake process."""

    hwnd: int
    process_id: int
    title: str = ""
    visible: bool = True
    ex_style: int = 0
    rect: tuple[int, int, int, int] = (0, 0, 800, 600)
    alpha: int = 255
    minimized: bool = False
    maximized: bool = False
    foreground: bool = False
    focused: bool = False
    z_order: list[str] = field(default_factory=list)


class FakeProcess:
    """Stand-in for psutil.Process as yielded by process_iter(attrs=...)."""

    def __init__(self, pid: int, name: str | None) -> None:
        self.info = {"pid": pid, "name": name}


class ProcessTable(list):
    """Fake processes in enumeration order, counting enumerations."""

    iter_calls = 0


class FakeWindowApi:
    """In-memory WindowApi. Methods named in `failing` raise WindowApiError."""

    def __init__(self) -> None:
        self.windows: list[FakeWindow] = []
        self.terminated: list[tuple[int, int]] = []
        self.protected: set[int] = set()
        self.terminate_denied: set[int] = set()
        self.vanished: set[int] = set()
        self.failing: set[str] = set()
        self.list_calls = 0

    def add_window(self, hwnd: int, process_id: int, **attrs) -> FakeWindow:
        window = FakeWindow(hwnd=hwnd, process_id=process_id, **attrs)
        self.windows.append(window)
        return window

    def window(self, hwnd: int) -> FakeWindow:
        for window in self.windows:
            if window.hwnd == hwnd:
                return window
        raise WindowApiError("lookup", 1400, "Invalid window handle.")

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise WindowApiError(operation, 1400, "Invalid window handle.")

    def list_windows(self) -> list[int]:
        self._check("list_windows")
        self.list_calls += 1
        return [window.hwnd for window in self.windows]

    def window_process_id(self, hwnd: int) -> int:
        if hwnd in self.vanished:
            raise WindowApiError("GetWindowThreadProcessId", 1400, "Invalid window handle.")
        return self.window(hwnd).process_id

    def is_visible(self, hwnd: int) -> bool:
        return self.window(hwnd).visible

    def get_title(self, hwnd: int) -> str:
        self._check("get_title")
        return self.window(hwnd).title

    def set_title(self, hwnd: int, title: str) -> None:
        self._check("set_title")
        self.window(hwnd).title = title

    def get_ex_style(self, hwnd: int) -> int:
        self._check("get_ex_style")
        return self.window(hwnd).ex_style

    def set_ex_style(self, hwnd: int, style: int) -> None:
        self._check("set_ex_style")
        self.window(hwnd).ex_style = style

    def get_rect(self, hwnd: int) -> tuple[int, int, int, int]:
        self._check("get_rect")
        return self.window(hwnd).rect

    def get_alpha(self, hwnd: int) -> int:
        self._check("get_alpha")
        window = self.window(hwnd)
        if not window.ex_style & WS_EX_LAYERED:
            raise WindowApiError("GetLayeredWindowAttributes", 87, "The parameter is incorrect.")
        return window.alpha

    def set_alpha(self, hwnd: int, alpha: int) -> None:
        self._check("set_alpha")
        window = self.window(hwnd)
        if not window.ex_style & WS_EX_LAYERED:
            raise WindowApiError("SetLayeredWindowAttributes", 87, "The parameter is incorrect.")
        window.alpha = alpha

    def set_topmost(self, hwnd: int, enabled: bool) -> None:
        self._check("set_topmost")
        window = self.window(hwnd)
        window.ex_style = window.ex_style | WS_EX_TOPMOST if enabled else window.ex_style & ~WS_EX_TOPMOST
        window.z_order.append("topmost" if enabled else "notopmost")

    def resize(self, hwnd: int, width: int, height: int) -> None:
        self._check("resize")
        window = self.window(hwnd)
        left, top, _right, _bottom = window.rect
        window.rect = (left, top, left + width, top + height)
        window.z_order.append("top")

    def maximize(self, hwnd: int) -> None:
        self._check("maximize")
        window = self.window(hwnd)
        window.maximized, window.minimized = True, False

    def minimize(self, hwnd: int) -> None:
        self._check("minimize")
        window = self.window(hwnd)
        window.maximized, window.minimized = False, True

    def restore(self, hwnd: int) -> None:
        window = self.window(hwnd)
        window.maximized, window.minimized = False, False

    def is_minimized(self, hwnd: int) -> bool:
        return self.window(hwnd).minimized

    def set_foreground(self, hwnd: int) -> None:
        self._check("set_foreground")
        for window in self.windows:
            window.foreground = window.hwnd == hwnd

    def set_focus(self, hwnd: int) -> None:
        self._check("set_focus")
        self.window(hwnd).focused = True

    def terminate_process(self, process_id: int, exit_code: int = 0) -> None:
        if process_id in self.protected:
            raise AccessDeniedError("OpenProcess", 5, "Access is denied.")
        if process_id in self.terminate_denied:
            raise AccessDeniedError("TerminateProcess", 5, "Access is denied.")
        self._check("terminate_process")
        self.terminated.append((process_id, exit_code))
        self.windows = [window for window in self.windows if window.process_id != process_id]


@pytest.fixture
def processes(monkeypatch) -> ProcessTable:
    """Process table served by psutil.process_iter; append FakeProcess entries."""
    table = ProcessTable()

    def fake_process_iter(attrs=None, ad_value=None):
        table.iter_calls += 1
        return iter(list(table))

    monkeypatch.setattr(psutil, "process_iter", fake_process_iter)
    return table


@pytest.fixture
def window_api() -> FakeWindowApi:
    return FakeWindowApi()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def controller(window_api, sink) -> ProcessController:
    return ProcessController(window_api=window_api, default_sink=sink)


@pytest.fixture
def notepad(processes, window_api) -> FakeWindow:
    """A running Notepad with one hidden and one visible window."""
    processes.append(FakeProcess(4, "System"))
    processes.append(FakeProcess(1234, "Notepad.exe"))
    window_api.add_window(100, 1234, title="hidden helper", visible=False)
    return window_api.add_window(
        101,
        1234,
        title="Untitled - Notepad",
        rect=(10, 20, 810, 620),
    )
