# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2022-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide the 'EmulFDIO' class - an in-memory emulation of sysfs files for the file descriptor I/O
interface of the '_FDIO.FDIO' class. Used for testing.

The specific feature of sysfs files is that writes always replace the entire file contents, as
opposed to overwriting the bytes at the write offset. The kernel parses the written value and
reports it back terminated with a newline.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import errno
import typing
from pathlib import Path
from cpufreqlibs import _FDIO
from cpufreqlibs.helperlibs import Logging
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotFound, ErrorPermissionDenied

if typing.TYPE_CHECKING:
    from typing import TypedDict

    class _EmulFileTypedDict(TypedDict):
        """
        An emulated sysfs file.

        Attributes:
            data: The file contents.
            writable: Whether the file can be opened for writing.
        """

        data: bytes
        writable: bool

    class _OpenFileTypedDict(TypedDict):
        """
        An open emulated file.

        Attributes:
            path: Path of the open file.
            flags: The flags the file was opened with.
        """

        path: Path
        flags: int

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

class EmulFDIO(_FDIO.FDIO):
    """
    Emulate sysfs files in memory. Record the opened and closed file descriptors, so that tests can
    verify descriptor ownership.
    """

    def __init__(self, max_read: int | None = None):
        """
        Initialize a class instance.

        Args:
            max_read: Maximum count of bytes returned by a single 'pread()' call, emulates short
                      reads. No limit by default.
        """

        self._max_read = max_read

        self._files: dict[Path, _EmulFileTypedDict] = {}
        self._open_files: dict[int, _OpenFileTypedDict] = {}
        self._next_fd = 100

        # Paths of all opened files and all closed file descriptors, in the order of the calls.
        self.opened: list[Path] = []
        self.closed: list[int] = []
        # Count of 'pread()' calls.
        self.reads = 0
        # Make 'close_fd()' fail after closing the file descriptor.
        self.fail_close = False

    def add_file(self, path: str | Path, data: str | bytes, writable: bool = False):
        """
        Add an emulated sysfs file.

        Args:
            path: Path of the file.
            data: The initial file contents.
            writable: Whether the file can be opened for writing.
        """

        if isinstance(data, str):
            data = data.encode("utf-8")

        self._files[Path(path)] = {"data": data, "writable": writable}

    def get_data(self, path: str | Path) -> bytes:
        """Return the contents of emulated file 'path'."""

        return self._files[Path(path)]["data"]

    def get_open_fds(self) -> list[int]:
        """Return the list of currently open file descriptors."""

        return list(self._open_files)

    def _get_open_file(self, fd: int) -> _OpenFileTypedDict:
        """Return the open file information for file descriptor 'fd'."""

        if fd not in self._open_files:
            raise Error(f"Bad file descriptor {fd}", errno=errno.EBADF)
        return self._open_files[fd]

    def open_fd(self, path: Path, flags: int) -> int:
        """Emulate 'FDIO.open_fd()'."""

        path = Path(path)
        if path not in self._files:
            raise ErrorNotFound(f"Failed to open file '{path}': no such file or directory")

        accmode = flags & os.O_ACCMODE
        if accmode != os.O_RDONLY and not self._files[path]["writable"]:
            raise ErrorPermissionDenied(f"Failed to open file '{path}' for writing: permission "
                                        f"denied")

        fd = self._next_fd
        self._next_fd += 1
        self._open_files[fd] = {"path": path, "flags": flags}
        self.opened.append(path)

        _LOG.debug("Opened emulated file '%s', fd %d", path, fd)
        return fd

    def close_fd(self, fd: int):
        """Emulate 'FDIO.close_fd()'."""

        self._get_open_file(fd)
        del self._open_files[fd]
        self.closed.append(fd)

        if self.fail_close:
            raise Error(f"Failed to close file descriptor {fd}: input/output error",
                        errno=errno.EIO)

    def pread(self, fd: int, size: int, offset: int) -> bytes:
        """Emulate 'FDIO.pread()'."""

        finfo = self._get_open_file(fd)
        if finfo["flags"] & os.O_ACCMODE == os.O_WRONLY:
            raise Error(f"Failed to read from file descriptor {fd}: bad file descriptor",
                        errno=errno.EBADF)

        self.reads += 1
        if self._max_read is not None:
            size = min(size, self._max_read)

        data = self._files[finfo["path"]]["data"]
        return data[offset:offset + size]

    def pwrite(self, fd: int, data: bytes, offset: int) -> int:
        """
        Emulate 'FDIO.pwrite()'. The written value ends at the first zero byte or newline, and it
        replaces the file contents.
        """

        finfo = self._get_open_file(fd)
        if finfo["flags"] & os.O_ACCMODE == os.O_RDONLY:
            raise Error(f"Failed to write to file descriptor {fd}: bad file descriptor",
                        errno=errno.EBADF)

        if offset != 0:
            raise Error(f"Failed to write to file descriptor {fd} at offset {offset}: sysfs "
                        f"files are written at offset 0", errno=errno.EINVAL)

        val = data.split(b"\0", 1)[0].split(b"\n", 1)[0]
        if not val:
            raise Error(f"Failed to write to file descriptor {fd}: invalid argument",
                        errno=errno.EINVAL)

        self._files[finfo["path"]]["data"] = val + b"\n"
        return len(data)
