"""Process lookup and window control for procwin."""

import logging
from collections.abc import Callable

import psutil

from procwin.errors import WindowApiError
from procwin.models import OPAQUE, ProcessRecord, WindowCommand
from procwin.sinks import LoggerSink, LogSink
from procwin.winapi import WS_EX_LAYERED, WS_EX_TOPMOST, WindowApi

logger = logging.getLogger(__name__)

MAX_PROCESS_ID = 0xFFFFFFFF


def normalize_process_name(name: str) -> str:
    """Strip a trailing '.exe' (any casing) and lower-case the name."""
    if name.lower().endswith(".exe"):
        name = name[:-4]
    return name.lower()


def parse_process_id(text: str) -> int | None:
    """Return text as a process ID if it is an unsigned 32-bit decimal, else None."""
    text = text.strip()
    if not text.isdecimal() or not text.isascii():
        return None
    value = int(text)
    return value if value <= MAX_PROCESS_ID else None


class ProcessController:
    """
    Resolves a target process and its window and applies window commands.

    Holds exactly one ProcessRecord, replaced on every get_process_details call.
    The process ID is the durable identity of the target; window handles are
    looked up again for every operation and never kept.

    Every operation reports through a LogSink instead of raising: OS failures
    are caught at the call site, logged, and turn the operation into a no-op.
    """

    def __init__(
        self,
        window_api: WindowApi | None = None,
        default_sink: LogSink | None = None,
    ) -> None:
        """
        Initialize the ProcessController.

        Args:
            window_api: Window manager primitives. Defaults to the pywin32
                implementation, created on first use.
            default_sink: Sink used when an operation is called without one.
        """
        self._window_api = window_api
        self._default_sink: LogSink = default_sink if default_sink is not None else LoggerSink()
        self._record = ProcessRecord()

    @property
    def window_api(self) -> WindowApi:
        if self._window_api is None:
            from procwin.win32 import Win32WindowApi

            self._window_api = Win32WindowApi()
        return self._window_api

    def get_process_info(self) -> ProcessRecord:
        """Get the current record."""
        return self._record

    # Lookup

    def resolve_process_id(self, name_or_id: str) -> tuple[int, str]:
        """
        Map user input to a (process ID, process name) pair.

        Numeric input is taken as a literal ID with an empty name, without
        checking that such a process exists. Anything else is matched against
        the normalized executable names of running processes; the first match
        in enumeration order wins. No match yields (0, "").
        """
        process_id = parse_process_id(name_or_id)
        if process_id is not None:
            return process_id, ""
        return self._find_process_by_name(name_or_id)

    def _find_process_by_name(self, process_name: str) -> tuple[int, str]:
        wanted = normalize_process_name(process_name)

        for proc in psutil.process_iter(attrs=["pid", "name"]):
            try:
                info = proc.info
                name = info.get("name")
                if name and normalize_process_name(name) == wanted:
                    return info["pid"], name
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                # Process exited or is off limits; keep scanning
                continue

        return 0, ""

    def find_window(self, process_id: int) -> int | None:
        """Return the first visible top-level window owned by process_id, if any."""
        api = self.window_api
        try:
            handles = api.list_windows()
        except WindowApiError as exc:
            logger.debug("Window enumeration for process %d failed: %s", process_id, exc)
            return None

        for hwnd in handles:
            try:
                if api.window_process_id(hwnd) == process_id and api.is_visible(hwnd):
                    return hwnd
            except WindowApiError:
                # Window was destroyed mid-scan
                continue
        return None

    def get_process_details(self, name_or_id: str, log: LogSink | None = None) -> ProcessRecord:
        """
        Resolve a process and its window and install a fresh record.

        Args:
            name_or_id: Executable name (with or without '.exe') or numeric ID.
            log: Receives progress and failure messages.

        Returns:
            The newly installed record.
        """
        log = self._sink(log)
        process_id, process_name = self.resolve_process_id(name_or_id)
        log(f"Found process ID: {process_id}")

        if process_id == 0:
            log("Process not found")
            self._record = ProcessRecord()
            return self._record

        hwnd = self.find_window(process_id)
        if hwnd is None:
            log("Window handle not found")
            self._record = ProcessRecord(process_id=process_id, process_name=process_name)
            return self._record

        self._record = self._retrieve_window_info(hwnd, process_id, process_name, log)
        return self._record

    def _retrieve_window_info(self, hwnd: int, process_id: int, process_name: str, log: LogSink) -> ProcessRecord:
        """Read window attributes; each failed read is logged and the rest still run."""
        api = self.window_api
        previous = self._record

        try:
            title = api.get_title(hwnd)
        except WindowApiError as exc:
            logger.debug("GetWindowText failed: %s", exc)
            log("Failed to get window title")
            title = ""

        try:
            style = api.get_ex_style(hwnd)
        except WindowApiError as exc:
            logger.debug("GetWindowLong failed: %s", exc)
            log("Failed to get window style")
            style = 0

        # Size read failure keeps the previous record's dimensions
        width, height = previous.width, previous.height
        try:
            left, top, right, bottom = api.get_rect(hwnd)
            width, height = max(0, right - left), max(0, bottom - top)
        except WindowApiError as exc:
            logger.debug("GetWindowRect failed: %s", exc)
            log("Failed to get window size")

        opacity = OPAQUE
        if style & WS_EX_LAYERED:
            try:
                opacity = _clamp_alpha(api.get_alpha(hwnd))
            except WindowApiError as exc:
                logger.debug("GetLayeredWindowAttributes failed: %s", exc)
                log("Failed to get window opacity")
                opacity = previous.opacity

        log("Window information retrieved")
        return ProcessRecord(
            process_id=process_id,
            process_name=process_name,
            window_title=title,
            is_topmost=bool(style & WS_EX_TOPMOST),
            width=width,
            height=height,
            opacity=opacity,
        )

    # Window attributes

    def set_window_title(self, title: str, process_id: int, log: LogSink | None = None) -> None:
        log = self._sink(log)
        hwnd = self.find_window(process_id)
        if hwnd is None:
            log("Window handle not found, cannot change window title.")
            return

        try:
            self.window_api.set_title(hwnd, title)
        except WindowApiError as exc:
            logger.debug("SetWindowText failed: %s", exc)
            log("Failed to change window title")
            return
        log(f"Window title changed to: {title}")

    def set_window_topmost(self, enabled: bool, process_id: int, log: LogSink | None = None) -> None:
        """Pin the window above non-topmost windows, or unpin it. Position and size are kept."""
        log = self._sink(log)
        hwnd = self.find_window(process_id)
        if hwnd is None:
            log("Window handle not found, cannot change topmost status.")
            return

        try:
            self.window_api.set_topmost(hwnd, enabled)
        except WindowApiError as exc:
            logger.debug("SetWindowPos failed: %s", exc)
            log("Failed to change topmost status")
            return
        log("Window set to topmost." if enabled else "Window removed from topmost.")

    def set_window_size(
        self,
        width: int,
        height: int,
        log: LogSink | None = None,
        process_id: int | None = None,
    ) -> None:
        """Resize the window without moving or activating it."""
        log = self._sink(log)
        process_id = self._target(process_id)
        width, height = max(0, width), max(0, height)
        hwnd = self.find_window(process_id)
        if hwnd is None:
            log("Window handle not found")
            return

        try:
            self.window_api.resize(hwnd, width, height)
        except WindowApiError as exc:
            logger.debug("SetWindowPos failed: %s", exc)
            log("Failed to set window size")
            return
        log(f"Window size set to {width}x{height}")

    def set_window_opacity(self, value: int, log: LogSink | None = None, process_id: int | None = None) -> None:
        """
        Apply a window alpha, clamped to 0-255.

        Adds the layered style bit first since the OS ignores alpha on
        non-layered windows. The log line carries the clamped value.
        """
        log = self._sink(log)
        process_id = self._target(process_id)
        alpha = _clamp_alpha(value)
        hwnd = self.find_window(process_id)
        if hwnd is None:
            log("Window handle not found")
            return

        api = self.window_api
        try:
            api.set_ex_style(hwnd, api.get_ex_style(hwnd) | WS_EX_LAYERED)
            api.set_alpha(hwnd, alpha)
        except WindowApiError as exc:
            logger.debug("Setting layered alpha failed: %s", exc)
            log("Failed to set window opacity")
            return
        log(f"Window opacity set to: {alpha}")

    # Window commands

    def terminate(self, log: LogSink | None = None, process_id: int | None = None) -> None:
        """Terminate the target process with exit code 0."""
        log = self._sink(log)
        process_id = self._target(process_id)
        if process_id == 0:
            log("Process ID not set")
            return

        try:
            self.window_api.terminate_process(process_id, exit_code=0)
        except WindowApiError as exc:
            logger.debug("Terminating process %d failed: %s", process_id, exc)
            if exc.operation == "OpenProcess":
                log("Failed to open process for termination")
            else:
                log("Failed to terminate process")
            return
        log("Process killed")

    def maximize(self, log: LogSink | None = None, process_id: int | None = None) -> None:
        self._show(self.window_api.maximize, "Window maximized", log, process_id)

    def minimize(self, log: LogSink | None = None, process_id: int | None = None) -> None:
        self._show(self.window_api.minimize, "Window minimized", log, process_id)

    def focus(self, log: LogSink | None = None, process_id: int | None = None) -> None:
        """Restore the window if minimized, then bring it to the foreground with input focus."""
        log = self._sink(log)
        hwnd = self.find_window(self._target(process_id))
        if hwnd is None:
            log("Window handle not found")
            return

        api = self.window_api
        try:
            if api.is_minimized(hwnd):
                api.restore(hwnd)
        except WindowApiError as exc:
            logger.debug("Restoring window failed: %s", exc)

        # The foreground lock may refuse the request; input focus is still attempted
        try:
            api.set_foreground(hwnd)
        except WindowApiError as exc:
            logger.debug("SetForegroundWindow failed: %s", exc)

        try:
            api.set_focus(hwnd)
        except WindowApiError as exc:
            logger.debug("SetFocus failed: %s", exc)
        log("Window focused")

    def execute(self, command: WindowCommand, log: LogSink | None = None, process_id: int | None = None) -> None:
        """Run one lifecycle command against the target."""
        log = self._sink(log)
        process_id = self._target(process_id)
        name = self._record.process_name if process_id == self._record.process_id else ""
        log(f"Execute command -> {command.value}, Target -> {name}(PID: {process_id})")

        handlers = {
            WindowCommand.KILL: self.terminate,
            WindowCommand.MAXIMIZE: self.maximize,
            WindowCommand.MINIMIZE: self.minimize,
            WindowCommand.FOCUS: self.focus,
        }
        handlers[command](log, process_id)

    def _show(self, apply: Callable[[int], None], message: str, log: LogSink | None, process_id: int | None) -> None:
        log = self._sink(log)
        hwnd = self.find_window(self._target(process_id))
        if hwnd is None:
            log("Window handle not found")
            return

        try:
            apply(hwnd)
        except WindowApiError as exc:
            logger.debug("ShowWindow failed: %s", exc)
            log("Failed to change window state")
            return
        log(message)

    def _sink(self, log: LogSink | None) -> LogSink:
        return self._default_sink if log is None else log

    def _target(self, process_id: int | None) -> int:
        return self._record.process_id if process_id is None else process_id


def _clamp_alpha(value: int) -> int:
    return max(0, min(OPAQUE, value))
