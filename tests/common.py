#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""Common functions for cpufreq tests."""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import io
import typing
from pathlib import Path
from cpufreqtool import _CPUFreqReadCPU

if typing.TYPE_CHECKING:
    from typing import Sequence
    from cpufreqlibs.testlibs.EmulFDIO import EmulFDIO

# Contents of the cpufreq sysfs files of an emulated CPU using the 'acpi-cpufreq' driver. The
# '{cpu}' placeholder is replaced with the CPU number. The 'bios_limit' file does not exist.
SYSFS_DATA: dict[str, str] = {
    "affected_cpus": "{cpu}\n",
    "cpuinfo_cur_freq": "1200000\n",
    "cpuinfo_max_freq": "3500000\n",
    "cpuinfo_min_freq": "800000\n",
    "cpuinfo_transition_latency": "0\n",
    "related_cpus": "{cpu}\n",
    "scaling_available_frequencies": "3500000 2800000 2000000 1200000 800000 \n",
    "scaling_available_governors": "conservative ondemand userspace powersave performance \n",
    "scaling_cur_freq": "1500000\n",
    "scaling_driver": "acpi-cpufreq\n",
    "scaling_governor": "powersave\n",
    "scaling_max_freq": "3500000\n",
    "scaling_min_freq": "800000\n",
    "scaling_setspeed": "<unsupported>\n",
}

# The writable cpufreq sysfs files.
WRITABLE_ATTRS = ("scaling_governor", "scaling_max_freq", "scaling_min_freq", "scaling_setspeed")

def get_file_data(attr: str, cpu: int) -> str:
    """Return the emulated contents of the sysfs file of attribute 'attr' for CPU 'cpu'."""

    return SYSFS_DATA[attr].format(cpu=cpu)

def build_sysfs_tree(basedir: Path, cpus: Sequence[int] = (0, 1)):
    """
    Create a fake cpufreq sysfs tree.

    Args:
        basedir: The base directory to create the 'cpu<N>/cpufreq' sub-directories in.
        cpus: CPU numbers to create the sub-directories for.
    """

    for cpu in cpus:
        cpufreq_dir = basedir / f"cpu{cpu}" / "cpufreq"
        cpufreq_dir.mkdir(parents=True)
        for attr in SYSFS_DATA:
            with open(cpufreq_dir / attr, "w", encoding="utf-8") as fobj:
                fobj.write(get_file_data(attr, cpu))

    # Sysfs has non-CPU sub-directories too.
    (basedir / "cpuidle").mkdir()
    (basedir / "cpufreq").mkdir()

def add_emul_files(fdio: EmulFDIO, basedir: Path, cpus: Sequence[int] = (0, 1)):
    """
    Populate an 'EmulFDIO' object with the emulated cpufreq sysfs files.

    Args:
        fdio: The 'EmulFDIO' object to populate.
        basedir: The emulated base sysfs directory.
        cpus: CPU numbers to create the files for.
    """

    for cpu in cpus:
        for attr in SYSFS_DATA:
            path = basedir / f"cpu{cpu}" / "cpufreq" / attr
            fdio.add_file(path, get_file_data(attr, cpu), writable=attr in WRITABLE_ATTRS)

def run_read_cpu(arguments: Sequence[str], exp_exc: type[Exception] | None = None) -> str:
    """
    Run the 'cpufreq-read-cpu' tool and return its output.

    Args:
        arguments: The command-line arguments to run the tool with.
        exp_exc: The expected exception type. By default, any exception is considered a failure.

    Returns:
        The tool output.
    """

    fobj = io.StringIO()

    try:
        args = _CPUFreqReadCPU.parse_arguments(arguments)
        args.func(args, fobj=fobj)
    except Exception as err: # pylint: disable=broad-except
        if exp_exc is None:
            raise AssertionError(f"'cpufreq-read-cpu {' '.join(arguments)}' raised an "
                                 f"exception:\n{err}") from err

        if not isinstance(err, exp_exc):
            raise AssertionError(f"'cpufreq-read-cpu {' '.join(arguments)}' raised "
                                 f"'{type(err).__name__}' instead of '{exp_exc.__name__}':\n"
                                 f"{err}") from err

        return fobj.getvalue()

    if exp_exc is not None:
        raise AssertionError(f"'cpufreq-read-cpu {' '.join(arguments)}' did not raise "
                             f"'{exp_exc.__name__}'")

    return fobj.getvalue()
