# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the project logger: a 'logging.Logger' subclass printing plain output to standard output,
and prefixed (optionally colored) diagnostics to standard error.

Loggers of the project modules are children of the 'MAIN_LOGGER_NAME' logger, so configuring the
tool logger (e.g., 'main.cpufreq') configures the library modules loggers as well.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
import traceback
from typing import NoReturn, Any, IO, cast
try:
    # It is OK if 'colorama' is not available, we only lose message coloring.
    import colorama
    colorama_imported = True
except ImportError:
    colorama_imported = False

# Log levels.
#   * INFO: the tool output, printed as is to standard output.
#   * DEBUG: prefixed with a timestamp and the source code location.
#   * WARNING, ERROR, CRITICAL: prefixed with the tool name and the level name.
#   * ERRINFO: additional error details (e.g., a traceback), printed as is to standard error.
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
ERRINFO = logging.ERROR + 1
CRITICAL = logging.CRITICAL

# Name of the main logger instance. Other project loggers are supposed to be children of this one.
MAIN_LOGGER_NAME = "main"

# Fields of the debug messages prefix: a timestamp, the time, and the source code location.
_DEBUG_FIELDS = ("%(created)f", "%(asctime)s", "%(module)s,%(lineno)d")

# Names of the prefixed log levels, as printed in the message prefix.
_LEVEL_NAMES = {WARNING: "warning", ERROR: "error", CRITICAL: "critical error"}

class _Formatter(logging.Formatter):
    """Format log records using a per-level format string."""

    def __init__(self, prefix: str = "", colors: dict[int, str] | None = None):
        """
        Initialize a class instance.

        Args:
            prefix: The prefix of warning and error messages, usually the tool name.
            colors: The 'colorama' color codes of the log levels. No coloring by default.
        """

        super().__init__("%(levelname)s: %(message)s", "%H:%M:%S")

        colors = colors or {}

        def _paint(level: int, text: str) -> str:
            """Wrap 'text' in the color codes of log level 'level'."""

            if level not in colors:
                return text
            return f"{colors[level]}{text}{colorama.Style.RESET_ALL}"

        self._fmts: dict[int, str] = {INFO: "%(message)s", ERRINFO: "%(message)s"}

        for level, name in _LEVEL_NAMES.items():
            if prefix:
                label = f"{prefix}: {name}"
            else:
                label = name.capitalize()
            self._fmts[level] = _paint(level, label) + ": %(message)s"

        dbg_prefix = " ".join(f"[{_paint(DEBUG, field)}]" for field in _DEBUG_FIELDS)
        self._fmts[DEBUG] = f"{dbg_prefix}: %(message)s"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record 'record' using the format of its log level."""

        # pylint: disable=protected-access
        self._style._fmt = self._fmts.get(record.levelno, "%(message)s")
        return super().format(record)

class _LevelFilter(logging.Filter):
    """Let through only the log records of the selected levels."""

    def __init__(self, levels: tuple[int, ...]):
        """
        Initialize a class instance.

        Args:
            levels: The log levels to let through.
        """

        super().__init__()
        self._levels = levels

    def filter(self, record: logging.LogRecord) -> bool:
        """Return 'True' if the log level of 'record' is one of the selected levels."""

        return record.levelno in self._levels

class Logger(logging.Logger):
    """
    The project logger. On top of the standard logger, provide message prefixes and coloring,
    separate output and diagnostics streams, the ERRINFO log level, and the 'error_out()' method.
    """

    def __init__(self, name: str | None = None):
        """
        Initialize a class instance.

        Args:
            name: The name of the logger (same as in 'logging.Logger()').
        """

        self.prefix = ""
        self.colored = False

        super().__init__(name or "default")

    @staticmethod
    def _get_colors() -> dict[int, str]:
        """Return the 'colorama' color codes of the log levels."""

        bright = colorama.Style.BRIGHT
        return {DEBUG: colorama.Fore.GREEN,
                WARNING: colorama.Fore.YELLOW + bright,
                ERROR: colorama.Fore.RED + bright,
                CRITICAL: colorama.Fore.RED + bright}

    def configure(self,
                  prefix: str | None = None,
                  level: int | None = None,
                  colored: bool | None = None,
                  info_stream: IO[str] | None = None,
                  error_stream: IO[str] | None = None) -> Logger:
        """
        Configure the logger. Replace the handlers installed by a previous 'configure()' call.

        Args:
            prefix: The prefix of warning and error messages, usually the tool name.
            level: The log level. By default, 'DEBUG' if the '-d' option is present on the command
                   line, 'WARNING' if the '-q' option is present, and 'INFO' otherwise.
            colored: Whether to color the messages. By default, color if both streams are
                     terminals or the '--force-color' option is present on the command line.
            info_stream: The stream for 'INFO' messages, standard output by default.
            error_stream: The stream for all other messages, standard error by default.

        Returns:
            The configured logger.
        """

        if info_stream is None:
            info_stream = sys.stdout
        if error_stream is None:
            error_stream = sys.stderr

        if not level:
            if "-q" in sys.argv:
                level = WARNING
            elif "-d" in sys.argv:
                level = DEBUG
            else:
                level = INFO
        self.setLevel(level)

        if not colorama_imported:
            colored = False
        elif colored is None:
            colored = "--force-color" in sys.argv or \
                      (info_stream.isatty() and error_stream.isatty())

        self.prefix = prefix or ""
        self.colored = bool(colored)

        formatter = _Formatter(prefix=self.prefix,
                               colors=self._get_colors() if self.colored else None)

        self.handlers = []
        for stream, levels in ((info_stream, (INFO,)),
                               (error_stream, (DEBUG, WARNING, ERROR, ERRINFO, CRITICAL))):
            handler = logging.StreamHandler(stream)
            handler.setFormatter(formatter)
            handler.addFilter(_LevelFilter(levels))
            self.addHandler(handler)

        return self

    def _print_traceback(self):
        """Print the traceback of the exception being handled, or the current stack."""

        if sys.exc_info()[0]:
            lines = traceback.format_exc().splitlines()
        else:
            lines = [line.strip() for line in traceback.format_stack()]

        if self.colored:
            dim = colorama.Style.RESET_ALL + colorama.Style.DIM
            undim = colorama.Style.RESET_ALL
        else:
            dim = undim = ""

        self.log(ERRINFO, "--- Debug trace starts here ---")
        self.log(ERRINFO, "%sAn error occurred, here is the traceback:\n%s%s",
                 dim, "\n".join(lines), undim)
        self.log(ERRINFO, "--- Debug trace ends here ---\n")

    def error_out(self, fmt: Any, *args: Any, print_tb: bool = False) -> NoReturn:
        """
        Print an error message and exit with status 1.

        Args:
            fmt: The error message format string, or an exception object.
            *args: The arguments of the format string.
            print_tb: Print the traceback as well. The traceback is always printed in debug mode.

        Raises:
            SystemExit: Always.
        """

        if args:
            errmsg = fmt % args
        else:
            errmsg = str(fmt)

        if print_tb or self.getEffectiveLevel() == DEBUG:
            self._print_traceback()

        self.error(errmsg)
        raise SystemExit(1)

logging.setLoggerClass(Logger)

def getLogger(name: str | None = None) -> Logger:
    """
    Return the project logger 'name' (similar to 'logging.getLogger()').

    Args:
        name: The name of the logger.

    Returns:
        The logger instance.
    """

    return cast(Logger, logging.getLogger(name=name))
