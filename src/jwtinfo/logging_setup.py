"""
Logging configuration for the jwtinfo command line tool.

Provides a console handler on stderr (WARNING by default, DEBUG when
verbose) and an optional file handler that always records DEBUG.  Nothing
is ever written to stdout, which carries the decoded JSON.
"""

from __future__ import annotations

import logging
import os
import sys

__all__ = ["setup_logging"]


def setup_logging(verbose: bool = False, log_file: str = "") -> str:
    """Configure the root logger for a CLI run.

    - Console handler: WARNING+ by default.  When *verbose* is True the
      console level drops to DEBUG.
    - File handler: only when *log_file* is given; always DEBUG.

    Returns the path of the log file, or an empty string if none.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers (e.g. from basicConfig)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_fmt = logging.Formatter(
        "%(levelname)-8s  %(message)s" if not verbose
        else "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_fmt)
    root_logger.addHandler(console_handler)

    if not log_file:
        return ""

    log_path = os.path.abspath(os.path.expanduser(log_file))
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_fmt = logging.Formatter(
        "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_fmt)
    root_logger.addHandler(file_handler)

    return log_path
