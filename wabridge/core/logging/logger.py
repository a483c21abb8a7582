"""
Rich-based logger with messaging session and recipient context.

Provides context-aware logging that prefixes every message with the session
being driven and, when known, the recipient jid being handled.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wabridge.core.config.settings import settings


class CompactFormatter(logging.Formatter):
    """Custom formatter that shortens long module names for better readability."""

    def format(self, record):
        if record.name.startswith("wabridge."):
            # wabridge.messaging.bulk_dispatcher -> messaging.bulk_dispatcher
            parts = record.name.split(".")
            if len(parts) > 2:
                if "bridge" in parts[1:]:
                    record.name = "bridge." + parts[-1]
                else:
                    record.name = ".".join(parts[-2:])

        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that adds session and recipient context to messages.

    Context is added as a message prefix instead of through the format string,
    so handlers never need to know about the extra fields.
    """

    def __init__(
        self,
        logger: logging.Logger,
        session_id: str | None = None,
        recipient_jid: str | None = None,
    ):
        self.logger = logger
        self.session_id = session_id or "---"
        self.recipient_jid = recipient_jid or "---"

    def _format_message(self, message: str) -> str:
        """Add context prefix to message."""
        from .context import (
            get_current_recipient_context,
            get_current_session_context,
        )

        current_session = get_current_session_context() or self.session_id
        current_recipient = get_current_recipient_context() or self.recipient_jid

        if current_session and current_session != "---":
            if current_recipient and current_recipient != "---":
                return f"[S:{current_session}][J:{current_recipient}] {message}"
            return f"[S:{current_session}] {message}"
        elif current_recipient and current_recipient != "---":
            return f"[J:{current_recipient}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.logger.critical(self._format_message(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.logger.exception(self._format_message(message), *args, **kwargs)


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" creates daily log files + console; anything else → console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    # RichHandler already shows level and time
    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"wabridge_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)
        _console.print(f"[green]DEV mode:[/] console + file → {logfile}")
    else:
        _console.print(f"Logging configured for mode '{mode}'. Console only.")

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    setup_logger = logging.getLogger("wabridge.logging")
    setup_logger.info(f"Logging initialized ({lvl})")


def setup_app_logging() -> None:
    """
    Initialize application logging for the gateway.

    Called once during FastAPI application startup.
    """
    setup_logging(
        level=settings.log_level,
        mode="DEV" if settings.is_development else "PROD",
        log_dir=settings.log_dir if settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that automatically uses request context variables.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_recipient_context, get_current_session_context

    return ContextLogger(
        logging.getLogger(name),
        session_id=get_current_session_context(),
        recipient_jid=get_current_recipient_context(),
    )


def get_app_logger() -> ContextLogger:
    """Get application logger for general app events (startup, shutdown, etc.)."""
    return get_logger("wabridge.app")


def get_api_logger(name: str | None = None) -> ContextLogger:
    """Get API logger for endpoints and controllers."""
    return get_logger(name or "wabridge.api")
