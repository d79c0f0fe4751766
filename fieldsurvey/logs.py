"""
Design (logs.py)
- Purpose: One place to configure stdlib logging, plus a handler that mirrors log lines
           into the in-app Logs panel.
- Inputs: Level name; a line sink (callable) for the panel handler.
- Outputs: Configured root logger; module loggers via get_logger().
- Side effects: configure_logging() replaces the root logging configuration.
- Thread-safety: The panel sink is called on whatever thread logs; the UI reschedules
                 onto the Tk main loop itself.
"""

import logging
import logging.config
from typing import Callable

from .config import LOG_LEVEL

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Configure root logging with a concise console formatter.
    Replaces any handlers installed on the root logger by an earlier call.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": CONSOLE_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)


class LogPanelHandler(logging.Handler):
    """
    Design (LogPanelHandler)
    - Purpose: Forward each formatted record (one line, newline terminated) to a sink.
    - Inputs: sink(line: str), e.g. AppUI.append_log_line.
    """

    def __init__(self, sink: Callable[[str], None], level: int = logging.INFO) -> None:
        super().__init__(level)
        self.sink = sink
        self.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s", DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.format(record) + "\n")
        except Exception:
            self.handleError(record)


def attach_panel_handler(sink: Callable[[str], None], level: int = logging.INFO) -> LogPanelHandler:
    """Install a LogPanelHandler on the root logger and return it (so callers can remove it)."""
    handler = LogPanelHandler(sink, level)
    logging.getLogger().addHandler(handler)
    return handler
