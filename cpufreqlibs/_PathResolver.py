# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Map a CPU number and a cpufreq attribute name to the sysfs file path.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import errno
from pathlib import Path
from cpufreqlibs import CPUFreqVars
from cpufreqlibs.helperlibs.Exceptions import Error

def get_path(core: int, attr: str, sysfs_base: str | Path = CPUFreqVars.SYSFS_BASE) -> Path:
    """
    Return path to the cpufreq sysfs file of attribute 'attr' for CPU 'core'.

    Args:
        core: The CPU number. Only the type and sign are checked, an offline or non-existing CPU
              results in a failure when the file is opened.
        attr: Name of the cpufreq attribute.
        sysfs_base: The base sysfs directory containing the per-CPU sub-directories.

    Returns:
        The '<sysfs_base>/cpu<core>/cpufreq/<attr>' path.

    Raises:
        ErrorNotSupported: If 'attr' is not a known cpufreq attribute.
        Error: If 'core' is not a non-negative integer or the path is too long.
    """

    CPUFreqVars.validate_attr(attr)

    if not isinstance(core, int) or isinstance(core, bool) or core < 0:
        raise Error(f"Bad CPU number '{core}': should be a non-negative integer",
                    errno=errno.EINVAL)

    path = Path(sysfs_base) / f"cpu{core}" / "cpufreq" / attr
    if len(bytes(path)) >= CPUFreqVars.PATH_MAX_LEN:
        raise Error(f"BUG: cpufreq sysfs file path '{path}' is too long, the maximum is "
                    f"{CPUFreqVars.PATH_MAX_LEN - 1} bytes", errno=errno.ENAMETOOLONG)

    return path
