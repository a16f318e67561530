# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide file descriptor based I/O for sysfs files and the descriptor ownership policy.

A descriptor is either caller-owned or ephemeral. Caller-owned descriptors are supplied by the
caller, re-used across many operations, and never closed here. Ephemeral descriptors are opened for
a single operation and closed before the operation returns, including the error paths.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import errno
import typing
import contextlib
from cpufreqlibs.helperlibs import Logging, ClassHelpers
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotFound, ErrorPermissionDenied

if typing.TYPE_CHECKING:
    from typing import Generator, Union
    from pathlib import Path
    from cpufreqlibs.CPUFreqFile import CPUFreqFile

    # A descriptor supplied by the caller: 'None' or a non-positive integer mean "no descriptor".
    FDType = Union[int, CPUFreqFile, None]

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

def _flags_str(flags: int) -> str:
    """Return a human-readable string for the 'os.open()' access mode flags."""

    accmode = flags & os.O_ACCMODE
    if accmode == os.O_RDWR:
        return "O_RDWR"
    if accmode == os.O_WRONLY:
        return "O_WRONLY"
    return "O_RDONLY"

class FDIO(ClassHelpers.SimpleCloseContext):
    """
    Wrap the file descriptor I/O primitives of the operating system and translate 'OSError'
    exceptions into exceptions derived from 'Error'. The OS error code is preserved in the 'errno'
    attribute of the raised exception.

    Public methods overview.
        * 'open_fd()' - open a file and return the file descriptor.
        * 'close_fd()' - close a file descriptor.
        * 'pread()' - read from a file descriptor at an offset.
        * 'pwrite()' - write to a file descriptor at an offset.
    """

    def open_fd(self, path: Path, flags: int) -> int:
        """
        Open a file.

        Args:
            path: Path to the file to open.
            flags: The 'os.open()' flags.

        Returns:
            The file descriptor.

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If opening the file is not permitted.
        """

        errmsg = f"Failed to open file '{path}' with flags '{_flags_str(flags)}'"
        try:
            fd = os.open(path, flags)
        except FileNotFoundError as err:
            msg = Error(str(err)).indent(2)
            raise ErrorNotFound(f"{errmsg}:\n{msg}", errno=err.errno) from None
        except PermissionError as err:
            msg = Error(str(err)).indent(2)
            raise ErrorPermissionDenied(f"{errmsg}:\n{msg}", errno=err.errno) from None
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"{errmsg}:\n{msg}", errno=err.errno) from None

        _LOG.debug("Opened '%s' with flags '%s', fd %d", path, _flags_str(flags), fd)
        return fd

    def close_fd(self, fd: int):
        """
        Close file descriptor 'fd'.

        Args:
            fd: The file descriptor to close.
        """

        try:
            os.close(fd)
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to close file descriptor {fd}:\n{msg}", errno=err.errno) from None

        _LOG.debug("Closed fd %d", fd)

    def pread(self, fd: int, size: int, offset: int) -> bytes:
        """
        Read up to 'size' bytes from file descriptor 'fd' starting at offset 'offset'.

        Args:
            fd: The file descriptor to read from.
            size: Maximum count of bytes to read.
            offset: The file offset to start reading from.

        Returns:
            The read bytes, an empty bytes object at the end of file.
        """

        try:
            return os.pread(fd, size, offset)
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to read {size} bytes at offset {offset} from file descriptor "
                        f"{fd}:\n{msg}", errno=err.errno) from None

    def pwrite(self, fd: int, data: bytes, offset: int) -> int:
        """
        Write 'data' to file descriptor 'fd' starting at offset 'offset'.

        Args:
            fd: The file descriptor to write to.
            data: The bytes to write.
            offset: The file offset to start writing at.

        Returns:
            The count of written bytes.
        """

        try:
            return os.pwrite(fd, data, offset)
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise Error(f"Failed to write {len(data)} bytes at offset {offset} to file descriptor "
                        f"{fd}:\n{msg}", errno=err.errno) from None

def get_caller_fd(fd: FDType) -> int | None:
    """
    Return the integer descriptor of a caller-owned descriptor, or 'None' if 'fd' does not refer to
    a caller-owned descriptor.

    Args:
        fd: The descriptor supplied by the caller: a 'CPUFreqFile' object, an integer, or 'None'.
            Integers smaller than 1 mean "no descriptor".

    Returns:
        The integer file descriptor or 'None'.
    """

    if fd is None:
        return None

    if isinstance(fd, int):
        if fd > 0:
            return fd
        return None

    if not hasattr(fd, "fileno"):
        raise Error(f"BUG: bad file descriptor '{fd}' of type '{type(fd).__name__}'",
                    errno=errno.EINVAL)

    return fd.fileno()

def is_caller_owned(fd: FDType) -> bool:
    """Return 'True' if 'fd' refers to a caller-owned descriptor, otherwise return 'False'."""

    return get_caller_fd(fd) is not None

def acquire(fdio: FDIO, fd: FDType, path: Path | None, flags: int) -> tuple[int, bool]:
    """
    Return a usable file descriptor: the caller-owned descriptor if 'fd' refers to one, otherwise
    open 'path' with flags 'flags'.

    Args:
        fdio: The file descriptor I/O object.
        fd: The descriptor supplied by the caller.
        path: Path to the file to open if there is no caller-owned descriptor.
        flags: The 'os.open()' flags to use when opening 'path'.

    Returns:
        A '(fd, owned)' tuple, where 'owned' is 'True' if the descriptor was opened by this function
        and has to be released with 'release()'.
    """

    caller_fd = get_caller_fd(fd)
    if caller_fd is not None:
        return caller_fd, False

    if path is None:
        raise Error("BUG: no file descriptor and no file path provided")

    return fdio.open_fd(path, flags), True

def release(fdio: FDIO, fd: int, owned: bool, path: Path | None = None):
    """
    Release a file descriptor obtained from 'acquire()'. Close it if it is owned, do nothing
    otherwise. A close failure is logged, but not raised, so that it does not replace the outcome
    of the operation the descriptor was used for.

    Args:
        fdio: The file descriptor I/O object.
        fd: The file descriptor to release.
        owned: Whether the descriptor was opened by 'acquire()'.
        path: Path of the file, used only in the log message.
    """

    if not owned:
        return

    try:
        fdio.close_fd(fd)
    except Error as err:
        what = f" of '{path}'" if path else ""
        _LOG.warning("Failed to close file descriptor %d%s:\n%s", fd, what, err.indent(2))

@contextlib.contextmanager
def descriptor(fdio: FDIO, fd: FDType, path: Path | None, flags: int) -> Generator[int, None, None]:
    """
    A context manager wrapping 'acquire()' and 'release()'. Yield a usable file descriptor and
    release it when the context exits, including exits by an exception.

    Args:
        fdio: The file descriptor I/O object.
        fd: The descriptor supplied by the caller.
        path: Path to the file to open if there is no caller-owned descriptor.
        flags: The 'os.open()' flags to use when opening 'path'.

    Yields:
        The file descriptor.
    """

    _fd, owned = acquire(fdio, fd, path, flags)
    try:
        yield _fd
    finally:
        release(fdio, _fd, owned, path=path)

def read_all(fdio: FDIO, fd: int, size: int) -> bytes:
    """
    Read up to 'size' bytes from file descriptor 'fd' starting at offset 0. Sysfs files report no
    size, so keep reading after short reads until 'size' bytes are read or the end of file is
    reached.

    Args:
        fdio: The file descriptor I/O object.
        fd: The file descriptor to read from.
        size: Maximum count of bytes to read.

    Returns:
        The read bytes.
    """

    chunks = []
    total = 0
    while total < size:
        chunk = fdio.pread(fd, size - total, total)
        if not chunk:
            break
        chunks.append(chunk)
        total += len(chunk)

    data = b"".join(chunks)
    _LOG.debug("Read %d bytes from fd %d: %r", len(data), fd, data)
    return data

def write_all(fdio: FDIO, fd: int, data: bytes) -> int:
    """
    Write 'data' to file descriptor 'fd' at offset 0. Sysfs files consume a write in one go, so a
    short write is treated as a failure.

    Args:
        fdio: The file descriptor I/O object.
        fd: The file descriptor to write to.
        data: The bytes to write.

    Returns:
        The count of written bytes.
    """

    _LOG.debug("Writing %d bytes to fd %d: %r", len(data), fd, data)

    written = fdio.pwrite(fd, data, 0)
    if written != len(data):
        raise Error(f"Short write to file descriptor {fd}: wrote {written} bytes out of "
                    f"{len(data)}", errno=errno.EIO)

    return written
