# logger_utils.py -  logging setup, metric lines and block timing on top of stdlib logging

import logging
import os
import time
from typing import Optional

LOGGER_NAME = "shell_autocompleter"
metric_logger = logging.getLogger(f"{LOGGER_NAME}.metrics")


class ColorFormatter(logging.Formatter):
    """Console formatter: [HH:MM:SS] LEVEL   | message, coloured by level."""
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    def __init__(self, use_color: bool = True):
        super().__init__("[%(asctime)s] %(levelname)-7s | %(message)s", datefmt="%H:%M:%S")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.COLORS.get(record.levelname)
        if self.use_color and color:
            return f"{color}{line}{self.COLORS['RESET']}"
        return line


class Log:
    """Helpers for configuring the package logger and recording metrics."""

    @staticmethod
    def setup(level: str = "INFO", path: Optional[str] = None, use_color: bool = True) -> logging.Logger:
        """
        Attach a console handler (and a file handler when `path` is given) to the
        package logger. Safe to call more than once; old handlers are replaced.
        """
        root = logging.getLogger(LOGGER_NAME)
        root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

        console = logging.StreamHandler()
        console.setFormatter(ColorFormatter(use_color=use_color))
        root.addHandler(console)

        if path:
            log_dir = os.path.dirname(path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setFormatter(logging.Formatter(
                "[%(asctime)s] %(levelname)-7s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            root.addHandler(fh)
        return root

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (timing, counts...) at debug level.
        Example: train done: 0.012s
        """
        metric_logger.debug("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label):
        """
        Measure a block and record its duration as a metric.
            with Log.time_block("train"):
                trainer.train(history)
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        dur = round(time.perf_counter() - self.start, 4)
        Log.metric(f"{self.label} done", dur, "s")
