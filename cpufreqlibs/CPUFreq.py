# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Provide API for reading and writing the Linux "cpufreq" sysfs attributes of a CPU.

Frequency values are in kHz. Linux does not guarantee that all attributes exist, for example the
'bios_limit' and 'scaling_setspeed' files exist only with some drivers and governors. Reading a
non-existing attribute raises 'ErrorNotFound'.

See: https://www.kernel.org/doc/Documentation/cpu-freq/user-guide.txt
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import errno
import typing
from pathlib import Path
from cpufreqlibs import CPUFreqVars, _PathResolver, _FDIO
from cpufreqlibs import _ScalarCodec, _ArrayCodec, _StringCodec
from cpufreqlibs.CPUFreqFile import CPUFreqFile
from cpufreqlibs.helperlibs import Logging, ClassHelpers
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotSupported

if typing.TYPE_CHECKING:
    from typing import Any, ContextManager
    from cpufreqlibs._FDIO import FDType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

class CPUFreq(ClassHelpers.SimpleCloseContext):
    """
    Provide API for reading and writing the Linux "cpufreq" sysfs attributes.

    Every getter and setter accepts the optional 'fd' argument:
        * 'None' (or an integer smaller than 1) - open the sysfs file, perform the operation and
          close the file before returning.
        * A 'CPUFreqFile' object returned by 'open_file()' (or a positive integer file descriptor) -
          use the already opened file and never close it.

    Public methods overview.

    1. File handles.
        * 'open_file()' - open a cpufreq sysfs file for re-use across many operations.
    2. Integer attributes.
        * 'get_bios_limit()', 'get_cpuinfo_cur_freq()', 'get_cpuinfo_max_freq()',
          'get_cpuinfo_min_freq()', 'get_cpuinfo_transition_latency()', 'get_scaling_cur_freq()',
          'get_scaling_max_freq()', 'get_scaling_min_freq()'.
        * 'set_scaling_max_freq()', 'set_scaling_min_freq()', 'set_scaling_setspeed()'.
    3. Integer array attributes.
        * 'get_affected_cpus()', 'get_related_cpus()', 'get_scaling_available_frequencies()'.
    4. String attributes.
        * 'get_scaling_available_governors()', 'get_scaling_driver()', 'get_scaling_governor()'.
        * 'set_scaling_governor()'.
    5. Access by attribute name.
        * 'get()' - read an attribute.
        * 'set()' - write an attribute.

    Methods do not validate the CPU number beyond its type. Reading or writing an attribute of a
    non-existing or offline CPU fails with 'ErrorNotFound'.
    """

    def __init__(self, fdio: _FDIO.FDIO | None = None, sysfs_base: str | Path | None = None):
        """
        Initialize a class instance.

        Args:
            fdio: The file descriptor I/O object to use for accessing sysfs files. A local
                  '_FDIO.FDIO' object is created if not provided.
            sysfs_base: The base sysfs directory containing the per-CPU sub-directories, the
                        default is '/sys/devices/system/cpu'.
        """

        self._close_fdio = fdio is None

        self._fdio: _FDIO.FDIO
        if not fdio:
            self._fdio = _FDIO.FDIO()
        else:
            self._fdio = fdio

        if sysfs_base is None:
            sysfs_base = CPUFreqVars.SYSFS_BASE
        self._sysfs_base = Path(sysfs_base)

    def close(self):
        """Uninitialize the class object."""

        ClassHelpers.close(self, close_attrs=("_fdio",))

    def get_path(self, core: int, attr: str) -> Path:
        """
        Return path to the sysfs file of attribute 'attr' for CPU 'core'.

        Args:
            core: The CPU number.
            attr: Name of the cpufreq attribute.

        Returns:
            The sysfs file path.
        """

        return _PathResolver.get_path(core, attr, sysfs_base=self._sysfs_base)

    def open_file(self, core: int, attr: str, flags: int | None = None) -> CPUFreqFile:
        """
        Open the sysfs file of attribute 'attr' for CPU 'core', so that it can be used for many
        operations. The caller is responsible for closing the returned object.

        Args:
            core: The CPU number.
            attr: Name of the cpufreq attribute.
            flags: The 'os.open()' flags, usually 'os.O_RDONLY' or 'os.O_RDWR'. By default,
                   writable attributes are opened read-write and the others read-only.

        Returns:
            An opened 'CPUFreqFile' object.

        Raises:
            ErrorNotFound: If the sysfs file does not exist.
            ErrorPermissionDenied: If the sysfs file cannot be opened with flags 'flags'.
        """

        path = self.get_path(core, attr)
        if flags is None:
            flags = CPUFreqVars.get_default_flags(attr)

        fd = self._fdio.open_fd(path, flags)
        return CPUFreqFile(self._fdio, fd, path, core, attr)

    def _descriptor(self, fd: FDType, core: int, attr: str, flags: int) -> ContextManager[int]:
        """
        Return a context manager yielding a file descriptor for attribute 'attr' of CPU 'core'.

        Args:
            fd: The descriptor supplied by the caller.
            core: The CPU number.
            attr: Name of the cpufreq attribute.
            flags: The 'os.open()' flags to use if the file has to be opened.

        Returns:
            The context manager, which closes the file descriptor on exit if it opened it.
        """

        path = None
        if isinstance(fd, CPUFreqFile):
            if fd.attr != attr or fd.core != core:
                raise Error(f"Cannot use the '{fd.attr}' file of CPU {fd.core} for accessing "
                            f"'{attr}' of CPU {core}", errno=errno.EINVAL)
        elif not _FDIO.is_caller_owned(fd):
            path = self.get_path(core, attr)

        return _FDIO.descriptor(self._fdio, fd, path, flags)

    def _read(self, fd: FDType, core: int, attr: str, size: int) -> bytes:
        """Read up to 'size' bytes of attribute 'attr' of CPU 'core'."""

        with self._descriptor(fd, core, attr, os.O_RDONLY) as _fd:
            return _FDIO.read_all(self._fdio, _fd, size)

    def _write(self, fd: FDType, core: int, attr: str, data: bytes) -> int:
        """Write 'data' to attribute 'attr' of CPU 'core'."""

        with self._descriptor(fd, core, attr, os.O_RDWR) as _fd:
            return _FDIO.write_all(self._fdio, _fd, data)

    @staticmethod
    def _what(core: int, attr: str) -> str:
        """Format a description of attribute 'attr' of CPU 'core' for messages."""

        return f"'{attr}' of CPU {core}"

    def _read_int(self, fd: FDType, core: int, attr: str) -> int:
        """Read an integer attribute."""

        data = self._read(fd, core, attr, _ScalarCodec.get_bufsize())
        return _ScalarCodec.decode(data, what=self._what(core, attr))

    def _read_int_array(self, fd: FDType, core: int, attr: str, maxcnt: int) -> list[int]:
        """Read an integer array attribute."""

        what = self._what(core, attr)

        _ArrayCodec.validate_capacity(maxcnt, what=what)
        bufsize = _ArrayCodec.get_int_array_bufsize(maxcnt)
        data = self._read(fd, core, attr, bufsize)
        return _ArrayCodec.decode_int_array(data, maxcnt, bufsize=bufsize, what=what)

    def _read_token_array(self, fd: FDType, core: int, attr: str, maxcnt: int,
                          width: int) -> list[str]:
        """Read a token array attribute."""

        what = self._what(core, attr)

        _ArrayCodec.validate_capacity(maxcnt, what=what)
        data = self._read(fd, core, attr, _ArrayCodec.get_token_array_bufsize(maxcnt))
        return _ArrayCodec.decode_token_array(data, maxcnt, width, what=what)

    def _read_str(self, fd: FDType, core: int, attr: str, maxlen: int) -> str:
        """Read a string attribute."""

        what = self._what(core, attr)

        _ArrayCodec.validate_capacity(maxlen, what=what)
        data = self._read(fd, core, attr, maxlen)
        return _StringCodec.decode(data, what=what)

    def _write_int(self, fd: FDType, core: int, attr: str, val: int) -> int:
        """Write an integer attribute."""

        data = _ScalarCodec.encode(val, what=self._what(core, attr))
        return self._write(fd, core, attr, data)

    def _write_str(self, fd: FDType, core: int, attr: str, val: str) -> int:
        """Write a string attribute."""

        data = _StringCodec.encode(val, what=self._what(core, attr))
        return self._write(fd, core, attr, data)

    def get_affected_cpus(self, core: int, fd: FDType = None,
                          maxcnt: int = CPUFreqVars.MAX_CPUS) -> list[int]:
        """
        Return the list of CPUs that require software frequency coordination with CPU 'core'
        ('affected_cpus').

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxcnt: Maximum count of CPU numbers to accept.

        Returns:
            The list of CPU numbers.

        Raises:
            ErrorOutOfRange: If there are more than 'maxcnt' CPU numbers.
        """

        return self._read_int_array(fd, core, "affected_cpus", maxcnt)

    def get_bios_limit(self, core: int, fd: FDType = None) -> int:
        """Return the BIOS CPU frequency limit in kHz ('bios_limit')."""

        return self._read_int(fd, core, "bios_limit")

    def get_cpuinfo_cur_freq(self, core: int, fd: FDType = None) -> int:
        """
        Return the current CPU frequency in kHz as reported by the hardware ('cpuinfo_cur_freq').
        """

        return self._read_int(fd, core, "cpuinfo_cur_freq")

    def get_cpuinfo_max_freq(self, core: int, fd: FDType = None) -> int:
        """Return the maximum supported CPU frequency in kHz ('cpuinfo_max_freq')."""

        return self._read_int(fd, core, "cpuinfo_max_freq")

    def get_cpuinfo_min_freq(self, core: int, fd: FDType = None) -> int:
        """Return the minimum supported CPU frequency in kHz ('cpuinfo_min_freq')."""

        return self._read_int(fd, core, "cpuinfo_min_freq")

    def get_cpuinfo_transition_latency(self, core: int, fd: FDType = None) -> int:
        """
        Return the CPU frequency switching latency in nanoseconds ('cpuinfo_transition_latency').
        Note, the kernel reports 4294967295 if the latency is unknown.
        """

        return self._read_int(fd, core, "cpuinfo_transition_latency")

    def get_related_cpus(self, core: int, fd: FDType = None,
                         maxcnt: int = CPUFreqVars.MAX_CPUS) -> list[int]:
        """
        Return the list of CPUs sharing the frequency policy with CPU 'core' ('related_cpus'),
        including offline CPUs.

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxcnt: Maximum count of CPU numbers to accept.

        Returns:
            The list of CPU numbers.

        Raises:
            ErrorOutOfRange: If there are more than 'maxcnt' CPU numbers.
        """

        return self._read_int_array(fd, core, "related_cpus", maxcnt)

    def get_scaling_available_frequencies(self, core: int, fd: FDType = None,
                                          maxcnt: int = CPUFreqVars.MAX_FREQS) -> list[int]:
        """
        Return the list of available CPU frequencies in kHz ('scaling_available_frequencies').

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxcnt: Maximum count of frequencies to accept.

        Returns:
            The list of frequencies.

        Raises:
            ErrorOutOfRange: If there are more than 'maxcnt' frequencies.
        """

        return self._read_int_array(fd, core, "scaling_available_frequencies", maxcnt)

    def get_scaling_available_governors(self, core: int, fd: FDType = None,
                                        maxcnt: int = CPUFreqVars.MAX_GOVS,
                                        width: int = CPUFreqVars.MAX_GOV_LEN) -> list[str]:
        """
        Return the list of available CPU frequency governor names ('scaling_available_governors').

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxcnt: Maximum count of governor names to accept.
            width: Maximum governor name length, longer names are truncated.

        Returns:
            The list of governor names.

        Raises:
            ErrorOutOfRange: If there are more than 'maxcnt' governors.
        """

        return self._read_token_array(fd, core, "scaling_available_governors", maxcnt, width)

    def get_scaling_cur_freq(self, core: int, fd: FDType = None) -> int:
        """
        Return the current CPU frequency in kHz as last set by the governor or reported by the
        driver ('scaling_cur_freq').
        """

        return self._read_int(fd, core, "scaling_cur_freq")

    def get_scaling_driver(self, core: int, fd: FDType = None,
                           maxlen: int = CPUFreqVars.STR_MAX_LEN) -> str:
        """
        Return the CPU frequency driver name ('scaling_driver').

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxlen: Maximum count of bytes to read, longer contents are truncated.

        Returns:
            The driver name.
        """

        return self._read_str(fd, core, "scaling_driver", maxlen)

    def get_scaling_governor(self, core: int, fd: FDType = None,
                             maxlen: int = CPUFreqVars.STR_MAX_LEN) -> str:
        """
        Return the CPU frequency governor name ('scaling_governor').

        Args:
            core: The CPU number.
            fd: The optional caller-owned file descriptor.
            maxlen: Maximum count of bytes to read, longer contents are truncated.

        Returns:
            The governor name.
        """

        return self._read_str(fd, core, "scaling_governor", maxlen)

    def set_scaling_governor(self, core: int, governor: str, fd: FDType = None) -> int:
        """
        Set the CPU frequency governor ('scaling_governor').

        Args:
            core: The CPU number.
            governor: Name of the governor to set.
            fd: The optional caller-owned file descriptor, has to be opened for writing.

        Returns:
            The count of written bytes.
        """

        return self._write_str(fd, core, "scaling_governor", governor)

    def get_scaling_max_freq(self, core: int, fd: FDType = None) -> int:
        """Return the maximum CPU frequency in kHz the governor may select ('scaling_max_freq')."""

        return self._read_int(fd, core, "scaling_max_freq")

    def set_scaling_max_freq(self, core: int, freq: int, fd: FDType = None) -> int:
        """
        Set the maximum CPU frequency the governor may select ('scaling_max_freq').

        Args:
            core: The CPU number.
            freq: The frequency in kHz.
            fd: The optional caller-owned file descriptor, has to be opened for writing.

        Returns:
            The count of written bytes.
        """

        return self._write_int(fd, core, "scaling_max_freq", freq)

    def get_scaling_min_freq(self, core: int, fd: FDType = None) -> int:
        """Return the minimum CPU frequency in kHz the governor may select ('scaling_min_freq')."""

        return self._read_int(fd, core, "scaling_min_freq")

    def set_scaling_min_freq(self, core: int, freq: int, fd: FDType = None) -> int:
        """
        Set the minimum CPU frequency the governor may select ('scaling_min_freq').

        Args:
            core: The CPU number.
            freq: The frequency in kHz.
            fd: The optional caller-owned file descriptor, has to be opened for writing.

        Returns:
            The count of written bytes.
        """

        return self._write_int(fd, core, "scaling_min_freq", freq)

    def set_scaling_setspeed(self, core: int, freq: int, fd: FDType = None) -> int:
        """
        Request CPU frequency 'freq' in kHz ('scaling_setspeed'). Works only with the 'userspace'
        governor.

        Args:
            core: The CPU number.
            freq: The frequency in kHz.
            fd: The optional caller-owned file descriptor, has to be opened for writing.

        Returns:
            The count of written bytes.
        """

        return self._write_int(fd, core, "scaling_setspeed", freq)

    def get(self, attr: str, core: int, fd: FDType = None) -> Any:
        """
        Read attribute 'attr' of CPU 'core' using the default capacities.

        Args:
            attr: Name of the cpufreq attribute.
            core: The CPU number.
            fd: The optional caller-owned file descriptor.

        Returns:
            The attribute value: an integer, a list of integers, a list of strings, or a string,
            depending on the attribute.

        Raises:
            ErrorNotSupported: If 'attr' is unknown or not readable.
        """

        CPUFreqVars.validate_attr(attr)

        if not CPUFreqVars.ATTRS[attr]["readable"]:
            raise ErrorNotSupported(f"cpufreq attribute '{attr}' is write-only")

        getter = getattr(self, f"get_{attr}")
        return getter(core, fd=fd)

    def set(self, attr: str, core: int, val: Any, fd: FDType = None) -> int:
        """
        Write value 'val' to attribute 'attr' of CPU 'core'.

        Args:
            attr: Name of the cpufreq attribute.
            core: The CPU number.
            val: The value to write.
            fd: The optional caller-owned file descriptor.

        Returns:
            The count of written bytes.

        Raises:
            ErrorNotSupported: If 'attr' is unknown or not writable.
        """

        CPUFreqVars.validate_attr(attr)

        if not CPUFreqVars.ATTRS[attr]["writable"]:
            raise ErrorNotSupported(f"cpufreq attribute '{attr}' is read-only")

        _LOG.debug("Setting '%s' of CPU %s to '%s'", attr, core, val)

        setter = getattr(self, f"set_{attr}")
        return setter(core, val, fd=fd)
