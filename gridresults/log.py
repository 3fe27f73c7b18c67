"""Logging setup for the command-line programs
"""

import argparse
import logging
import os
import shlex
import sys
from typing import Optional


# syslog priorities for each logging level, checked in order
SYSLOG_LEVELS = (
    (logging.DEBUG, 7),     # KERN_DEBUG
    (logging.INFO, 6),      # KERN_INFO
    (logging.WARNING, 4),   # KERN_WARNING
    (logging.ERROR, 3),     # KERN_ERR
    (logging.CRITICAL, 2),  # KERN_CRIT
)


def calling_program() -> str:
    "Return the name of the program that started us"
    return os.path.basename(sys.argv[0])


def logging_level_to_syslog(level: int) -> int:
    "Converts a logging level into a syslog-compatible one"
    for maxlevel, priority in SYSLOG_LEVELS:
        if level <= maxlevel:
            return priority
    return 1  # KERN_ALERT


class SyslogFormatter(logging.Formatter):
    "Formats log messages with a syslog-style level prefix"

    def __init__(self, fmt: str):
        super().__init__()
        self.base_format = fmt

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        self._style._fmt = f'<{logging_level_to_syslog(record.levelno)}>' + self.base_format
        return super().format(record)


def setup(args: argparse.Namespace, program: Optional[str] = None):
    """Set up the logging subsystem in a consistent way.

    program defaults to the program invoking this run. Warnings are always shown since
    every non-fatal problem found while merging a report is logged at that level.
    """
    if not program:
        program = shlex.quote(calling_program())
    # Escape percents to pass through format()
    program = program.replace('%', '%%')
    if args.debug:
        fmt = program + ' %(levelno)s %(filename)s: %(message)s'
        level = logging.DEBUG
    elif args.verbose:
        fmt = program + ' %(filename)s: %(message)s'
        level = logging.INFO
    else:
        fmt = '%(filename)s: %(message)s'
        level = logging.WARNING
    logging.basicConfig(level=level, format=fmt)
    if args.level_prefix:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(SyslogFormatter(fmt))
