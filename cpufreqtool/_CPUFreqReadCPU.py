# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
cpufreq-read-cpu - read and print the Linux cpufreq attributes of CPUs.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing
from pathlib import Path
from cpufreqlibs import CPUFreqVars
from cpufreqlibs.CPUFreq import CPUFreq
from cpufreqlibs.helperlibs import ArgParse, Logging, Trivial
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotFound

if typing.TYPE_CHECKING:
    import argparse
    from typing import IO, Sequence
    from cpufreqlibs.helperlibs.ArgParse import ArgTypedDict

_VERSION = "1.0.0"
TOOLNAME = "cpufreq-read-cpu"

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq").configure(prefix=TOOLNAME)

_OPTIONS: list[ArgTypedDict] = [
    {
        "short": "-c",
        "long": "--cpus",
        "argcomplete": None,
        "kwargs": {
            "dest": "cpus",
            "default": "0",
            "help": """Comma-separated list of CPU numbers and CPU number ranges (e.g., '0-3,7'),
                       or 'all' for all CPUs. The default is CPU 0.""",
        },
    },
    {
        "short": None,
        "long": "--attrs",
        "argcomplete": None,
        "kwargs": {
            "dest": "attrs",
            "help": """Comma-separated list of cpufreq attribute names to print (e.g.,
                       'scaling_driver,scaling_cur_freq'). By default, print all readable
                       attributes.""",
        },
    },
    {
        "short": None,
        "long": "--reuse-fds",
        "argcomplete": None,
        "kwargs": {
            "dest": "reuse_fds",
            "action": "store_true",
            "help": """Open every attribute file of a CPU only once and read it using the opened
                       file. By default, a file is opened and closed for every read.""",
        },
    },
    {
        "short": None,
        "long": "--yaml",
        "argcomplete": None,
        "kwargs": {
            "dest": "yaml",
            "action": "store_true",
            "help": "Print the attributes in YAML format.",
        },
    },
    {
        "short": None,
        "long": "--sysfs-base",
        "argcomplete": "DirectoriesCompleter",
        "kwargs": {
            "dest": "sysfs_base",
            "metavar": "PATH",
            "default": CPUFreqVars.SYSFS_BASE,
            "help": f"""This option is for debugging and testing. The base sysfs directory
                        containing the 'cpu<N>/cpufreq' sub-directories. The default is
                        '{CPUFreqVars.SYSFS_BASE}'.""",
        },
    },
]

def build_arguments_parser() -> ArgParse.ArgsParser:
    """Build and return the the command-line arguments parser object."""

    text = f"{TOOLNAME} - read and print the Linux cpufreq attributes of CPUs."
    parser = ArgParse.ArgsParser(description=text, prog=TOOLNAME, ver=_VERSION)

    ArgParse.add_options(parser, _OPTIONS)
    parser.set_defaults(func=read_cpu_command)

    return parser

def parse_arguments(arguments: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        arguments: The arguments to parse. Defaults to 'sys.argv[1:]'.
    """

    parser = build_arguments_parser()
    return parser.parse_args(arguments)

def _get_all_cpus(sysfs_base: Path) -> list[int]:
    """Return the sorted list of CPU numbers having a 'cpu<N>' directory in 'sysfs_base'."""

    try:
        entries = list(sysfs_base.iterdir())
    except OSError as err:
        msg = Error(str(err)).indent(2)
        raise Error(f"Failed to list directory '{sysfs_base}':\n{msg}") from err

    cpus = []
    for entry in entries:
        name = entry.name
        if name.startswith("cpu") and name[3:].isdigit() and entry.is_dir():
            cpus.append(int(name[3:]))

    if not cpus:
        raise ErrorNotFound(f"No CPUs found in '{sysfs_base}'")

    return sorted(cpus)

def _get_cpus(cpus: str, sysfs_base: Path) -> list[int]:
    """
    Parse and validate the '--cpus' option value.

    Args:
        cpus: The '--cpus' option value.
        sysfs_base: The base sysfs directory.

    Returns:
        The list of CPU numbers.
    """

    if cpus.strip() == "all":
        return _get_all_cpus(sysfs_base)

    result = Trivial.split_csv_line_int(cpus, dedup=True, what="CPU numbers")
    if not result:
        raise Error(f"Bad CPU numbers '{cpus}': no CPU numbers specified")

    for cpu in result:
        if not (sysfs_base / f"cpu{cpu}").is_dir():
            raise ErrorNotFound(f"CPU {cpu} does not exist: directory '{sysfs_base}/cpu{cpu}' not "
                                f"found")

    return result

def _get_attrs(attrs: str | None) -> list[str]:
    """Parse and validate the '--attrs' option value."""

    if not attrs:
        return [attr for attr, info in CPUFreqVars.ATTRS.items() if info["readable"]]

    result = Trivial.split_csv_line(attrs, dedup=True)
    if not result:
        raise Error(f"Bad attribute names '{attrs}': no attribute names specified")

    for attr in result:
        CPUFreqVars.validate_attr(attr)
        if not CPUFreqVars.ATTRS[attr]["readable"]:
            raise Error(f"Cannot read cpufreq attribute '{attr}': it is write-only")

    return result

def read_cpu_command(args: argparse.Namespace, fobj: IO[str] | None = None):
    """
    Implement the 'cpufreq-read-cpu' command.

    Args:
        args: The parsed command-line arguments.
        fobj: The file object to print to. Print to standard output by default.
    """

    # pylint: disable-next=import-outside-toplevel
    from cpufreqtool import _CPUFreqPrinter

    sysfs_base = Path(args.sysfs_base)
    cpus = _get_cpus(args.cpus, sysfs_base)
    attrs = _get_attrs(args.attrs)

    _LOG.debug("Reading cpufreq attributes of CPUs %s from '%s'", Trivial.rangify(cpus),
               sysfs_base)

    fmt = "yaml" if args.yaml else "human"
    with CPUFreq(sysfs_base=sysfs_base) as cpufreq, \
         _CPUFreqPrinter.CPUFreqPrinter(cpufreq, fmt=fmt, fobj=fobj) as printer:
        printer.print_attrs(cpus, attrs, reuse_fds=args.reuse_fds)

def main() -> int:
    """Script entry point."""

    try:
        args = parse_arguments()
        args.func(args)
    except KeyboardInterrupt:
        _LOG.info("\nInterrupted, exiting")
        return -1
    except Error as err:
        _LOG.error_out(err)

    return 0

if __name__ == "__main__":
    sys.exit(main())
