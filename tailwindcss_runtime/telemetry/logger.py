"""Notice and runtime event logging.

Responsibilities:
- Emit user-facing notices (for example the install-dir override).
- Emit concise, deterministic runtime event lines for CLI activity.

Library calls only log through `loguru`; they never touch handlers registered
by the embedding application. `configure_cli_logging` is for the CLI, which
owns the process and replaces the default handler.
"""

from __future__ import annotations

import itertools
import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_SAFE_CONTEXT_CHARACTERS = frozenset("-_.:/")
_sink_tokens = itertools.count(1)


def _context_token(value: object) -> str:
    """Render one context value as a token without spaces or shell metacharacters."""

    raw = str(value).strip() or "none"
    return "".join(
        character if character.isalnum() or character in _SAFE_CONTEXT_CHARACTERS else "_"
        for character in raw
    )


class NoticeLogger:
    """Plain-message logger bound to this package's records.

    With a `sink`, one extra handler is registered that only accepts records
    emitted through this instance; `close()` removes exactly that handler.
    Without a `sink`, records go to whatever handlers are already configured.
    """

    def __init__(self, sink: TextIO | None = None) -> None:
        self._token = next(_sink_tokens)
        self._logger = _loguru_logger.bind(notice_sink=self._token)
        self._handler_id: int | None = None
        if sink is not None:
            self._handler_id = _loguru_logger.add(
                sink,
                format="{message}",
                level="INFO",
                colorize=False,
                filter=lambda record: record["extra"].get("notice_sink") == self._token,
            )

    def close(self) -> None:
        """Remove the handler registered for this instance, if any."""

        if self._handler_id is not None:
            _loguru_logger.remove(self._handler_id)
            self._handler_id = None

    def notice(self, message: str) -> None:
        """Emit one free-form informational notice."""

        self._logger.info(message)

    def event(self, level: str, event: str, **context: object) -> None:
        """Emit one `[runtime]` line with context keys in sorted order."""

        tokens = "".join(
            f" {key}={_context_token(context[key])}" for key in sorted(context)
        )
        self._logger.log(level, f"[runtime] level={level} event={event}{tokens}")

    def log_command_start(self, command: str, executable: str) -> None:
        """Emit a command-start event."""

        self.event("INFO", "start", command=command, executable=executable)

    def log_command_exit(self, command: str, return_code: int) -> None:
        """Emit a command-exit event with the child return code."""

        level = "INFO" if return_code == 0 else "ERROR"
        self.event(level, "exit", command=command, return_code=return_code)


def configure_cli_logging(sink: TextIO | None = None) -> NoticeLogger:
    """Replace all handlers with one plain stderr sink for a CLI run."""

    _loguru_logger.remove()
    return NoticeLogger(sink=sink if sink is not None else sys.stderr)
