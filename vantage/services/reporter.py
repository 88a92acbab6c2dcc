from __future__ import annotations

from typing import Protocol

from vantage.logging import get_logger


class Reporter(Protocol):
    """Sink for non-fatal problems found while analyzing inputs.

    The analysis code only reports degrade paths (bad size strings, bad budget
    patterns); success and info output belong to the caller.
    """

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingReporter:
    def __init__(self, name: str = "analysis") -> None:
        self._logger = get_logger(name)

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


DEFAULT_REPORTER: Reporter = LoggingReporter()
