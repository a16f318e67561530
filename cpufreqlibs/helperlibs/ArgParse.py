# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Command line arguments parsing helpers on top of 'argparse'.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import argparse

try:
    import argcomplete
    _ARGCOMPLETE_AVAILABLE = True
except ImportError:
    # We can live without argcomplete, we only lose tab completions.
    _ARGCOMPLETE_AVAILABLE = False

from cpufreqlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import TypedDict, Iterable, Any

    class ArgKwargsTypedDict(TypedDict, total=False):
        """
        The keyword arguments of an option, passed to 'argparse.add_argument()' as is.

        Attributes:
            dest: Name of the 'argparse.Namespace' attribute to store the option value in.
            default: The default option value.
            metavar: Name of the option value in the help text.
            action: The 'argparse' action of the option.
            help: The option help text.
        """

        dest: str
        default: str | int
        metavar: str
        action: str
        help: str

    class ArgTypedDict(TypedDict):
        """
        A command line option definition.

        Attributes:
            short: The short option name (e.g., '-c'), or 'None' if there is no short name.
            long: The long option name (e.g., '--cpus').
            argcomplete: Name of the 'argcomplete.completers' class for tab completion of the
                         option value, or 'None'.
            kwargs: The keyword arguments for 'argparse.add_argument()'.
        """

        short: str | None
        long: str
        argcomplete: str | None
        kwargs: ArgKwargsTypedDict

def add_options(parser: argparse.ArgumentParser, options: Iterable[ArgTypedDict]):
    """
    Add command line options to an arguments parser.

    Args:
        parser: The arguments parser to add the options to.
        options: The option definitions.
    """

    for opt in options:
        names = [name for name in (opt["short"], opt["long"]) if name]
        arg = parser.add_argument(*names, **opt["kwargs"])

        if opt["argcomplete"] and _ARGCOMPLETE_AVAILABLE:
            completer = getattr(argcomplete.completers, opt["argcomplete"])
            setattr(arg, "completer", completer())

def _check_common_args(args: argparse.Namespace):
    """
    Validate the standard options.

    Args:
        args: The parsed command line arguments.
    """

    if getattr(args, "quiet", False) and getattr(args, "debug", False):
        raise Error("The '-q' and '-d' options cannot be used together")

    if getattr(args, "force_color", False) and not _colorama_available():
        raise Error("The '--force-color' option requires the 'colorama' python package to be "
                    "installed")

def _colorama_available() -> bool:
    """Return 'True' if the 'colorama' package is installed."""

    try:
        # pylint: disable-next=unused-import,import-outside-toplevel
        import colorama
    except ImportError:
        return False
    return True

class ArgsParser(argparse.ArgumentParser):
    """
    An arguments parser with the standard options ('-h', '-q', '-d', '--force-color', and
    '--version'), tab completions, and errors raised as exceptions instead of exiting the program.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        """
        Initialize a class instance.

        Args:
            *args: Positional arguments for 'argparse.ArgumentParser'.
            **kwargs: Keyword arguments for 'argparse.ArgumentParser', and the additional 'ver'
                      argument - the program version for the '--version' option.
        """

        version = kwargs.pop("ver", None)

        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)

        self.add_argument("-h", "--help", action="help", help="Show this help message and exit.")

        text = "Be quiet, print only warnings and errors."
        self.add_argument("-q", "--quiet", dest="quiet", action="store_true", help=text)

        text = "Print debugging information."
        self.add_argument("-d", "--debug", dest="debug", action="store_true", help=text)

        text = """Force colorized output even if the output stream is not a terminal (adds ANSI
                  escape codes)."""
        self.add_argument("--force-color", dest="force_color", action="store_true", help=text)

        if version:
            self.add_argument("--version", action="version", version=version,
                              help="Print the version number and exit.")

    def parse_args(self, *args: Any, **kwargs: Any) -> argparse.Namespace: # type: ignore[override]
        """
        Parse the command line arguments and validate the standard options.

        Args:
            *args: Positional arguments for 'argparse.ArgumentParser.parse_args()'.
            **kwargs: Keyword arguments for 'argparse.ArgumentParser.parse_args()'.

        Returns:
            The parsed arguments.
        """

        if _ARGCOMPLETE_AVAILABLE:
            argcomplete.autocomplete(self)

        parsed = super().parse_args(*args, **kwargs)
        _check_common_args(parsed)
        return parsed

    def error(self, message: str):
        """Raise an exception instead of printing the usage and exiting the program."""

        raise Error(f"{message}\nUse -h for help.")
