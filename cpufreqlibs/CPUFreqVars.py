# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Global variables for the 'CPUFreq' module: the cpufreq sysfs attributes and the buffer size limits.
This file is separated to allow importing constants without loading the entire module.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import typing
from cpufreqlibs.helperlibs.Exceptions import ErrorNotSupported

if typing.TYPE_CHECKING:
    from typing import Final, Literal, TypedDict

    # The shape of an attribute value.
    #   - "int": a single unsigned 32-bit integer.
    #   - "int_list": white space separated unsigned 32-bit integers.
    #   - "str_list": white space separated tokens.
    #   - "str": a single line of text.
    AttrTypeType = Literal["int", "int_list", "str_list", "str"]

    class AttrTypedDict(TypedDict, total=False):
        """
        Description of a cpufreq sysfs attribute.

        Attributes:
            name: Human-readable attribute name.
            type: The shape of the attribute value.
            unit: Unit of the attribute value.
            readable: Whether the attribute can be read.
            writable: Whether the attribute can be written.
        """

        name: str
        type: AttrTypeType
        unit: str
        readable: bool
        writable: bool

# The base sysfs directory of the per-CPU "cpufreq" sub-directories.
SYSFS_BASE: Final[str] = "/sys/devices/system/cpu"

# Maximum length of a cpufreq sysfs file path.
PATH_MAX_LEN: Final[int] = 128

# Maximum value of an unsigned 32-bit integer and the buffer size for its decimal representation.
U32_MAX: Final[int] = 0xFFFFFFFF
U32_MAX_LEN: Final[int] = 12

# A conservative maximum length of a governor name, used for sizing the read buffer.
GOVERNOR_NAME_MAX_LEN: Final[int] = 128

# Default capacities of the array and string getters.
MAX_CPUS: Final[int] = 1024
MAX_FREQS: Final[int] = 32
MAX_GOVS: Final[int] = 16
MAX_GOV_LEN: Final[int] = 32
STR_MAX_LEN: Final[int] = 256

# The upper limit for any capacity a caller may request.
MAX_CAPACITY: Final[int] = 8192

# The cpufreq sysfs attributes, in the order of the "cpufreq" sysfs ABI documentation.
ATTRS: Final[dict[str, AttrTypedDict]] = {
    "affected_cpus": {
        "name": "CPUs requiring software frequency coordination",
        "type": "int_list",
        "readable": True,
        "writable": False,
    },
    "bios_limit": {
        "name": "BIOS CPU frequency limit",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "cpuinfo_cur_freq": {
        "name": "Current CPU frequency (hardware)",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "cpuinfo_max_freq": {
        "name": "Max. supported CPU frequency",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "cpuinfo_min_freq": {
        "name": "Min. supported CPU frequency",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "cpuinfo_transition_latency": {
        "name": "CPU frequency transition latency",
        "type": "int",
        "unit": "ns",
        "readable": True,
        "writable": False,
    },
    "related_cpus": {
        "name": "CPUs sharing the frequency policy",
        "type": "int_list",
        "readable": True,
        "writable": False,
    },
    "scaling_available_frequencies": {
        "name": "Available CPU frequencies",
        "type": "int_list",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "scaling_available_governors": {
        "name": "Available CPU frequency governors",
        "type": "str_list",
        "readable": True,
        "writable": False,
    },
    "scaling_cur_freq": {
        "name": "Current CPU frequency (policy)",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": False,
    },
    "scaling_driver": {
        "name": "CPU frequency driver",
        "type": "str",
        "readable": True,
        "writable": False,
    },
    "scaling_governor": {
        "name": "CPU frequency governor",
        "type": "str",
        "readable": True,
        "writable": True,
    },
    "scaling_max_freq": {
        "name": "Max. CPU frequency",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": True,
    },
    "scaling_min_freq": {
        "name": "Min. CPU frequency",
        "type": "int",
        "unit": "kHz",
        "readable": True,
        "writable": True,
    },
    "scaling_setspeed": {
        "name": "Requested CPU frequency ('userspace' governor)",
        "type": "int",
        "unit": "kHz",
        "readable": False,
        "writable": True,
    },
}

def validate_attr(attr: str):
    """
    Validate a cpufreq attribute name.

    Args:
        attr: Name of the attribute to validate.

    Raises:
        ErrorNotSupported: If 'attr' is not a known cpufreq attribute.
    """

    if attr not in ATTRS:
        attrs = ", ".join(ATTRS)
        raise ErrorNotSupported(f"Unknown cpufreq attribute '{attr}', use one of: {attrs}")

def get_default_flags(attr: str) -> int:
    """
    Return the default open flags for a cpufreq attribute: read-write for the writable attributes,
    read-only for the others.

    Args:
        attr: Name of the attribute.

    Returns:
        The 'os.open()' flags.
    """

    validate_attr(attr)

    if ATTRS[attr]["writable"]:
        return os.O_RDWR
    return os.O_RDONLY
