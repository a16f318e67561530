# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the 'CPUFreqFile' class - a caller-owned handle of an open cpufreq sysfs file.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import errno
import typing
from cpufreqlibs.helperlibs import ClassHelpers
from cpufreqlibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from pathlib import Path
    from cpufreqlibs._FDIO import FDIO

class CPUFreqFile(ClassHelpers.SimpleCloseContext):
    """
    An open cpufreq sysfs file. Objects of this class are created by 'CPUFreq.open_file()'. The
    file stays open until 'close()' is called, and the 'CPUFreq' getters and setters never close
    it, so the same handle can be used for many operations.

    Note, the handle is not safe to use from multiple threads without external serialization.
    """

    def __init__(self, fdio: FDIO, fd: int, path: Path, core: int, attr: str):
        """
        Initialize a class instance.

        Args:
            fdio: The file descriptor I/O object the file was opened with.
            fd: The file descriptor.
            path: Path of the file.
            core: The CPU number the file belongs to.
            attr: Name of the cpufreq attribute the file represents.
        """

        self._fdio = fdio
        self.fd: int | None = fd
        self.path = path
        self.core = core
        self.attr = attr

    def fileno(self) -> int:
        """
        Return the file descriptor.

        Raises:
            Error: If the file has been closed.
        """

        if self.fd is None:
            raise Error(f"Cannot use cpufreq file '{self.path}': it has been closed",
                        errno=errno.EBADF)
        return self.fd

    def close(self):
        """Close the file. Closing an already closed file does nothing."""

        if self.fd is None:
            return

        fd = self.fd
        self.fd = None
        self._fdio.close_fd(fd)

    def __repr__(self):
        """Return a printable representation of the object."""

        return f"CPUFreqFile(path='{self.path}', fd={self.fd})"
