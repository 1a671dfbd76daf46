"""Console logging utilities for octavm.

A small level-filtered console logger with optional colours and timestamps,
plus a tqdm progress bar helper for long headless runs.
"""

import os
import sys
import time
from typing import Dict, Optional, TextIO

from tqdm import tqdm

LOG_LEVEL_ENV = "OCTAVM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "octavm",
        log_level: str = DEFAULT_LOG_LEVEL,
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.name = name
        self._stream = stream
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }
        self.log_level = DEFAULT_LOG_LEVEL
        self.set_level(log_level)

    @property
    def stream(self) -> TextIO:
        """Target stream; stderr is looked up at write time when none was given."""
        return self._stream if self._stream is not None else sys.stderr

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        log_level = log_level.upper()
        if log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )
        self.log_level = log_level

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "octavm") -> ConsoleLogger:
    """Shared logger per name, level taken from ``OCTAVM_LOG_LEVEL``."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(
            name=name, log_level=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
        )
    return _loggers[name]


def progress_bar(total: int, desc: str = "Running", unit: str = "frame", disable: bool = False) -> tqdm:
    """tqdm progress bar writing to stderr."""
    return tqdm(
        total=total,
        desc=desc,
        unit=unit,
        disable=disable,
        file=sys.stderr,
        bar_format="{l_bar}{bar:20}{r_bar}",
        leave=False,
    )
