# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Convert the contents of scalar cpufreq sysfs files to and from unsigned 32-bit integers.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
from cpufreqlibs import CPUFreqVars
from cpufreqlibs.helperlibs.Exceptions import ErrorBadFormat, ErrorOutOfRange, ErrorNoData

# The kernel prints these values in base 10 only.
_DIGITS_REGEX = re.compile(r"[0-9]+")

def get_bufsize() -> int:
    """Return the read buffer size for a scalar value: the digits, a newline and one spare byte."""

    return CPUFreqVars.U32_MAX_LEN + 2

def _fmt_what(what: str) -> str:
    """Format the 'what' description for an error message."""

    return f" {what}" if what else ""

def parse_token(token: str, what: str = "") -> int:
    """
    Parse a single decimal unsigned 32-bit integer token.

    Args:
        token: The token to parse.
        what: A short description of the value, for the possible error message.

    Returns:
        The integer value.

    Raises:
        ErrorBadFormat: If 'token' is not a decimal integer.
        ErrorOutOfRange: If the value does not fit 32 bits.
    """

    if not _DIGITS_REGEX.fullmatch(token):
        raise ErrorBadFormat(f"Bad{_fmt_what(what)} value '{token}': should be a decimal unsigned "
                             f"integer")

    val = int(token, 10)
    if val > CPUFreqVars.U32_MAX:
        raise ErrorOutOfRange(f"Bad{_fmt_what(what)} value '{token}': should not be greater than "
                              f"{CPUFreqVars.U32_MAX}")
    return val

def decode(data: bytes, what: str = "") -> int:
    """
    Decode the contents of a scalar cpufreq sysfs file.

    Args:
        data: The raw file contents.
        what: A short description of the value, for the possible error message.

    Returns:
        The integer value.

    Raises:
        ErrorNoData: If 'data' is empty.
        ErrorBadFormat: If 'data' is not a decimal integer.
        ErrorOutOfRange: If the value does not fit 32 bits.
    """

    if not data:
        raise ErrorNoData(f"No data for{_fmt_what(what)} value: read 0 bytes")

    text = data.split(b"\0", 1)[0].decode("ascii", errors="replace").strip()
    return parse_token(text, what=what)

def encode(val: int, what: str = "") -> bytes:
    """
    Encode an unsigned 32-bit integer for writing to a cpufreq sysfs file. The decimal text is
    padded with zero bytes to the fixed size of 'U32_MAX_LEN', sysfs stops parsing at the first
    zero byte.

    Args:
        val: The value to encode.
        what: A short description of the value, for the possible error message.

    Returns:
        The encoded value.

    Raises:
        ErrorBadFormat: If 'val' is not an integer.
        ErrorOutOfRange: If 'val' is negative or does not fit 32 bits.
    """

    if not isinstance(val, int) or isinstance(val, bool):
        raise ErrorBadFormat(f"Bad{_fmt_what(what)} value '{val}': should be an integer")

    if val < 0 or val > CPUFreqVars.U32_MAX:
        raise ErrorOutOfRange(f"Bad{_fmt_what(what)} value '{val}': should be in the [0, "
                              f"{CPUFreqVars.U32_MAX}] range")

    return str(val).encode("ascii").ljust(CPUFreqVars.U32_MAX_LEN, b"\0")
