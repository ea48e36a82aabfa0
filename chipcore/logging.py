"""Console logging utilities for chipcore.

This module provides a small print-based logging system with level filtering,
optional colours and elapsed-time stamps, plus a trace logger that formats
executed instructions and state dumps. Long runs can report progress through
a tqdm bar.
"""

import time
import sys
from typing import Any, Callable, Dict, Optional, Tuple

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "chipcore",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
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

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def is_enabled_for(self, level: str) -> bool:
        """Return True when messages at ``level`` would be printed."""
        return self._should_log(level)

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
        if self._should_log(level):
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


class TraceLogger(ConsoleLogger):
    """Specialized logger for instruction traces and state dumps."""

    def __init__(self, name: str = "chipcore", **kwargs):
        super().__init__(name, **kwargs)
        self.last_log_time = time.time()

    def log_step(self, step: int, pc: int, opcode: int, text: str):
        """Log one executed instruction at DEBUG level."""
        if self.is_enabled_for("DEBUG"):
            self.debug(f"#{step:<6d} {pc:03X}: {opcode:04X}  {text}")

    def log_dump(self, dump: str):
        """Log a multi-line state dump, one line per record."""
        for line in dump.splitlines():
            self.info(line)

    def log_run_start(self, config: Dict[str, Any]):
        """Log run configuration."""
        self.info("=" * 60)
        self.info("Starting run with configuration:")
        for key, value in config.items():
            if isinstance(value, int) and not isinstance(value, bool) and key.endswith(("pc", "mask")):
                self.info(f"  {key}: 0x{value:X}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_run_end(self, steps: int, pc: int):
        """Log completion with throughput."""
        elapsed = time.time() - self.last_log_time
        rate = steps / elapsed if elapsed > 0 else float("inf")
        self.info(f"Executed {steps} instructions in {elapsed:.3f}s ({rate:.1f} instr/s), PC=0x{pc:03X}")
        self.last_log_time = time.time()


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: str = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build tqdm progress bar callbacks for an n-step run.

    Returns ``(update, close)``; ``update(i)`` is called after step ``i``
    (0-based), ``close()`` when the run stops.
    """
    if desc is None:
        desc = f"Running ({n:,} instructions)"

    for kwarg in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(kwarg, None)

    if print_rate is None:
        print_rate = max(1, min(n // 20, 50))
    else:
        print_rate = max(1, min(print_rate, n))

    bar = tqdm(total=n, desc=desc, unit="instr", **kwargs)
    reported = [0]

    def _update_progress_bar(iter_num: int):
        done = iter_num + 1
        if done % print_rate == 0 or done == n:
            bar.update(done - reported[0])
            reported[0] = done

    def close_progress_bar():
        bar.close()

    return _update_progress_bar, close_progress_bar
