# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
This module provides API for printing cpufreq attributes.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import sys
import typing
import contextlib
from cpufreqlibs import CPUFreqVars
from cpufreqlibs.helperlibs import Logging, ClassHelpers, YAML
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotFound

if typing.TYPE_CHECKING:
    from typing import Any, IO, Iterable, Literal
    from cpufreqlibs.CPUFreq import CPUFreq
    from cpufreqlibs.CPUFreqFile import CPUFreqFile

    # The output format: "human" for "name: value" lines, "yaml" for a YAML document.
    FormatType = Literal["human", "yaml"]

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

class CPUFreqPrinter(ClassHelpers.SimpleCloseContext):
    """Read and print cpufreq attributes of CPUs."""

    def __init__(self, cpufreq: CPUFreq, fmt: FormatType = "human", fobj: IO[str] | None = None):
        """
        Initialize a class instance.

        Args:
            cpufreq: The 'CPUFreq' object to read the attributes with.
            fmt: The output format.
            fobj: The file object to print to. Use the logger (standard output) by default.
        """

        self._cpufreq = cpufreq
        self._fmt = fmt
        self._fobj = fobj

        if self._fmt not in ("human", "yaml"):
            raise Error(f"Unsupported output format '{self._fmt}', supported formats are: human, "
                        f"yaml")

    def close(self):
        """Uninitialize the class object."""

        ClassHelpers.close(self, unref_attrs=("_cpufreq", "_fobj"))

    def _print(self, msg: str):
        """Print message 'msg'."""

        if self._fobj:
            self._fobj.write(f"{msg}\n")
        else:
            _LOG.info(msg)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        """Format an attribute value for the human-readable output."""

        if isinstance(val, list):
            return " ".join(str(elt) for elt in val)
        return str(val)

    def _open_files(self, stack: contextlib.ExitStack, core: int,
                    attrs: Iterable[str]) -> dict[str, CPUFreqFile]:
        """
        Open the sysfs files of attributes 'attrs' of CPU 'core' for reading, register them for
        closing in 'stack'. Skip the files that cannot be opened, the error is reported when the
        attribute is read.
        """

        files: dict[str, CPUFreqFile] = {}
        for attr in attrs:
            try:
                files[attr] = stack.enter_context(self._cpufreq.open_file(core, attr,
                                                                          flags=os.O_RDONLY))
            except Error as err:
                _LOG.debug("Failed to open '%s' of CPU %d, will use an ephemeral descriptor:\n%s",
                           attr, core, err.indent(2))
        return files

    def _read(self, core: int, attr: str, fobj: CPUFreqFile | None) -> Any:
        """
        Read attribute 'attr' of CPU 'core'. Report a failure and return 'None' if the attribute
        cannot be read.
        """

        try:
            return self._cpufreq.get(attr, core, fd=fobj)
        except ErrorNotFound as err:
            _LOG.debug(err)
            if self._fmt == "human":
                self._print(f"{attr}: not supported")
        except Error as err:
            reason = os.strerror(err.errno) if err.errno else "failed"
            _LOG.warning("CPU %d: %s: %s", core, attr, reason)
            _LOG.debug(err)

        return None

    def print_attrs(self, cpus: Iterable[int], attrs: Iterable[str], reuse_fds: bool = False):
        """
        Read and print cpufreq attributes.

        Args:
            cpus: CPU numbers to print the attributes for.
            attrs: Names of the attributes to print.
            reuse_fds: If 'True', open all the attribute files of a CPU once and read them using
                       the caller-owned handles. Otherwise, open and close a file for every read.
        """

        cpus = list(cpus)
        attrs = list(attrs)

        for attr in attrs:
            CPUFreqVars.validate_attr(attr)
            if not CPUFreqVars.ATTRS[attr]["readable"]:
                raise Error(f"Cannot print cpufreq attribute '{attr}': it is write-only")

        ydict: dict[int, dict[str, Any]] = {}

        for core in cpus:
            if self._fmt == "human" and len(cpus) > 1:
                self._print(f"CPU {core}:")

            ydict[core] = {}
            with contextlib.ExitStack() as stack:
                files: dict[str, CPUFreqFile] = {}
                if reuse_fds:
                    files = self._open_files(stack, core, attrs)

                for attr in attrs:
                    val = self._read(core, attr, files.get(attr))
                    ydict[core][attr] = val
                    if val is not None and self._fmt == "human":
                        self._print(f"{attr}: {self._fmt_val(val)}")

        if self._fmt == "yaml":
            YAML.dump(ydict, self._fobj or sys.stdout, skip_none=True)
