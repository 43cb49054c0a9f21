"""Log sinks receiving the human-readable messages of controller operations."""

import logging
from typing import Protocol


class LogSink(Protocol):
    """Anything that accepts one status message at a time."""

    def __call__(self, message: str) -> None: ...


class LoggerSink:
    """Sink forwarding messages to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("procwin")
        self._level = level

    def __call__(self, message: str) -> None:
        self._logger.log(self._level, message)


class ListSink:
    """Sink collecting messages in order."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
