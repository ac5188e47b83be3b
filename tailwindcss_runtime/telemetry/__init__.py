"""Logging helpers for resolver notices and CLI runtime events."""

from .logger import NoticeLogger, configure_cli_logging

__all__ = ["NoticeLogger", "configure_cli_logging"]
